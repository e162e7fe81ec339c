from functools import reduce
import operator

import regex


class Lexer:
    '''
    Lexer for the calculator's input tokens.

    A token is either a floating-point literal or the name of an operator.
    Holds no internal state.
    '''
    # Integral part of a number
    INTEGRAL = r'''
                (?:
                    \d+
                )
                '''
    # Fractional part of a number
    FRACTIONAL = r'''
                  (?:
                      \d+
                  )
                  '''
    # Exponent, e.g. the e-3 in 1.5e-3
    EXPONENT = r'''
                (?:
                    [eE]
                    [+-]?
                    \d+
                )
                '''
    # Number, of any kind supported by grammar.
    # String formatting and regex is a tricky business, because of the braces.
    # It works here. Be careful in general!
    NUMBER = r'''
              [+-]?
              (?:
                  (?:
                      # 1, 12, 12. (notice trailing dot), 1.3
                      {INTEGRAL}
                      (?:
                          \.
                          {FRACTIONAL}?
                      )?
                  )|(?:
                      # .2 but not .
                      \.
                      {FRACTIONAL}
                  )
              )
              (?:
                  {EXPONENT}
              )?
              |
              # Non-finite values, any case
              [+-]?
              (?i:
                  infinity
                  |
                  inf
                  |
                  nan
              )
              '''.format(INTEGRAL=INTEGRAL,
                         FRACTIONAL=FRACTIONAL,
                         EXPONENT=EXPONENT)
    SPACE = r'\s+'

    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.VERSION1,
                    regex.VERBOSE},
                   0)

    def isnumber(self, text):
        '''
        Return True if the whole of text is a floating-point literal.
        '''
        return regex.fullmatch(type(self).NUMBER, text,
                               flags=type(self).FLAGS) is not None

    def number(self, text):
        '''
        Convert a literal to a float, or None if it isn't one.
        '''
        if not self.isnumber(text):
            return None
        return float(text)

    def lex(self, line):
        '''
        Take a line and yield its whitespace separated tokens.
        '''
        for token in regex.split(type(self).SPACE, line,
                                 flags=type(self).FLAGS):
            if token:
                yield token

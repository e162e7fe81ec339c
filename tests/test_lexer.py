'''
Number lexer tests
'''

import math

from pytest import mark

from rpntui.lexer import Lexer


@mark.parametrize('text', ['0', '12', '-3', '+4', '1.5', '12.', '.25',
                           '-.5', '1e3', '2.5E-3', '+1e+2',
                           'inf', '-Infinity', 'NaN'])
def test_numbers(text):
    l = Lexer()
    assert l.isnumber(text)


@mark.parametrize('text', ['', '.', '-', 'e3', '1e', '1_000', ' 1', '1 ',
                           '0x10', 'sqrt', '+', '1.2.3', 'infinit'])
def test_not_numbers(text):
    l = Lexer()
    assert not l.isnumber(text)
    assert l.number(text) is None


def test_number_values():
    l = Lexer()
    assert l.number('-2.5') == -2.5
    assert l.number('12.') == 12.0
    assert l.number('1e3') == 1000.0
    assert l.number('-inf') == -math.inf
    assert math.isnan(l.number('nan'))


def test_lex():
    l = Lexer()
    assert list(l.lex('  2 3\t+  sqrt\n')) == ['2', '3', '+', 'sqrt']
    assert list(l.lex('')) == []

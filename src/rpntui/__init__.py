'''
Full-screen RPN calculator.

Type a number and press enter to push it, or an operator name to apply it
to the stack. Enter on an empty line repeats the last operator. ^W clears
the line, ^L clears everything, ^D quits.

Besides the built-in arithmetic, trigonometry and stack operators, more
can be declared at startup in two scripts in the configuration directory:

- config.lua, calling ``register(name, arity, function)``.
- config.ua, whose top-level bindings with a declared signature
  (``Hyp ← |2 ...``) all become operators.
'''

import logging

from .calculator import Calculator
from .cli import CLI
from .lexer import Lexer
from .registry import Registry


logging.getLogger(__name__).addHandler(logging.NullHandler())


__all__ = 'Calculator', 'Registry', 'Lexer', 'CLI'

from functools import wraps
import logging
import math

from .operations import Native, LuaOperation, ArrayOperation, arity
from .util import ConfigLoadError


log = logging.getLogger(__name__)


def _ieee(f):
    '''
    Make a math function follow IEEE-754 instead of raising.

    Domain errors give NaN, overflow gives infinity.
    '''
    @wraps(f)
    def wrapped(*args):
        try:
            return f(*args)
        except ValueError:
            return [math.nan]
        except OverflowError:
            return [math.inf]
    return wrapped


def _divide(a, b):
    if b == 0:
        if a == 0 or math.isnan(a):
            return [math.nan]
        return [math.copysign(math.inf, a) * math.copysign(1, b)]
    return [a / b]


def _odd(n):
    return n.is_integer() and n % 2 == 1


@_ieee
def _power(a, b):
    # Signed infinities: negative only for a negative base and odd exponent
    if a == 0 and b < 0:
        return [math.copysign(math.inf, a) if _odd(b) else math.inf]
    try:
        return [math.pow(a, b)]
    except OverflowError:
        return [math.copysign(math.inf, a) if _odd(b) else math.inf]


def _ln(a):
    if a == 0:
        return [-math.inf]
    if a < 0 or math.isnan(a):
        return [math.nan]
    return [math.log(a)]


def _cbrt(a):
    if math.isnan(a) or math.isinf(a):
        return [a]
    return [math.copysign(abs(a) ** (1 / 3), a)]


def _negate(a):
    return [-a]


class Registry:
    '''
    Case-insensitive mapping from operator names to operations.

    Built-ins are registered on creation; scripts may shadow them.
    '''

    # Built-in operators. Arity comes from each function's signature.
    BUILTINS = {
        # Arithmetic
        '+': lambda a, b: [a + b],
        '-': lambda a, b: [a - b],
        '*': lambda a, b: [a * b],
        '/': _divide,
        '^': _power,
        'neg': _negate,
        'inv': _negate,

        # Trigonometry
        'sin': _ieee(lambda a: [math.sin(a)]),
        'cos': _ieee(lambda a: [math.cos(a)]),
        'tan': _ieee(lambda a: [math.tan(a)]),
        'asin': _ieee(lambda a: [math.asin(a)]),
        'acos': _ieee(lambda a: [math.acos(a)]),
        'atan': lambda a: [math.atan(a)],
        'd2r': lambda a: [a * math.pi / 180],

        # Roots and logarithms
        'ln': _ln,
        'sqrt': _ieee(lambda a: [math.sqrt(a)]),
        'cbrt': _cbrt,

        # Stack
        'swap': lambda a, b: [b, a],
        'succ': lambda a: [a + 1],
        'pred': lambda a: [a - 1],

        # Constants
        'pi': lambda: [math.pi],
    }

    def __init__(self, builtins=True):
        self.operations = dict()
        if builtins:
            for name, function in type(self).BUILTINS.items():
                self.register_native(name, arity(function), function)

    def __contains__(self, name):
        return self.lookup(name) is not None

    def __iter__(self):
        return iter(sorted(self.operations.values(),
                           key=lambda operation: operation.name))

    def __len__(self):
        return len(self.operations)

    def register(self, operation):
        '''
        Insert operation under its case-folded name, shadowing any other.
        '''
        operation.name = operation.name.lower()
        if operation.name in self.operations:
            log.info('%s operation %r shadows %s one',
                     operation.ORIGIN, operation.name,
                     self.operations[operation.name].ORIGIN)
        self.operations[operation.name] = operation
        return operation

    def register_native(self, name, arity, function):
        return self.register(Native(name, arity, function))

    def lookup(self, name):
        '''
        Return the operation named name, any case, or None.
        '''
        return self.operations.get(name.lower())

    def load_general_script(self, script, source, chunkname='config.lua'):
        '''
        Run Lua source once, registering everything it declares.

        Declarations made before a failure stay registered.
        '''
        def register(name, arity, function):
            operation = self.register(LuaOperation(name, arity,
                                                   script, function))
            log.debug('registered lua operation %r/%d',
                      operation.name, operation.arity)

        script.load(source, register, chunkname)

    def load_array_script(self, runtime, path):
        '''
        Run a Uiua file once and register all of its bound functions.

        Bindings reached before a failure stay registered.
        '''
        error = None
        try:
            runtime.run_file(path)
        except ConfigLoadError as e:
            error = e
        for binding, binding_arity in runtime.bindings().items():
            operation = self.register(ArrayOperation(binding, binding_arity,
                                                     runtime, binding))
            log.debug('registered uiua operation %r/%d',
                      operation.name, operation.arity)
        if error is not None:
            raise error

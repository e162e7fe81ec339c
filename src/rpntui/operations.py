'''
The three kinds of operation the calculator can apply to its stack.

The set is closed: every call site checks for each of Native, LuaOperation
and ArrayOperation in turn and rejects anything else.
'''

from inspect import signature as getsignature, Parameter


def arity(f):
    '''
    Return number of non-default positional arguments of a callable.
    '''
    parameters = getsignature(f).parameters.values()
    positionals = [parameter
                   for parameter
                   in parameters
                   if parameter.kind in (Parameter.POSITIONAL_ONLY,
                                         Parameter.POSITIONAL_OR_KEYWORD) and
                      parameter.default == Parameter.empty]
    return len(positionals)


class Operation:
    '''
    Named unit of computation consuming ``arity`` values off the stack.
    '''

    ORIGIN = None

    def __init__(self, name, arity):
        self.name = name
        self.arity = arity

    def __repr__(self):
        return '{}({!r}, {})'.format(type(self).__name__,
                                     self.name, self.arity)


class Native(Operation):
    '''
    Built-in Python function from ``arity`` floats to a sequence of floats.
    '''

    ORIGIN = 'builtin'

    def __init__(self, name, arity, function):
        super().__init__(name, arity)
        self.function = function


class LuaOperation(Operation):
    '''
    Function declared by the Lua startup script through ``register``.
    '''

    ORIGIN = 'lua'

    def __init__(self, name, arity, script, function):
        super().__init__(name, arity)
        self.script = script
        self.function = function


class ArrayOperation(Operation):
    '''
    Top-level binding of the Uiua startup script.

    ``binding`` keeps the binding's own spelling; ``name`` is case-folded.
    '''

    ORIGIN = 'uiua'

    def __init__(self, name, arity, runtime, binding):
        super().__init__(name, arity)
        self.runtime = runtime
        self.binding = binding

import logging

from .operations import Native, LuaOperation, ArrayOperation
from .util import ScriptError


log = logging.getLogger(__name__)


class Engine:
    '''
    Applies named operations to a value stack, all or nothing.

    Either an operation's arguments are replaced by its results, or the
    stack is left exactly as it was. Scripted failures are passed to
    ``report`` as messages; unknown names and missing arguments are not.
    '''

    def __init__(self, registry, stack, report):
        self.registry = registry
        self.stack = stack
        self.report = report

    def apply(self, name):
        '''
        Apply operation name to the stack. Return True if it was applied.
        '''
        operation = self.registry.lookup(name)
        if operation is None:
            return False
        k = operation.arity
        if len(self.stack) < k:
            return False
        args = self.stack[len(self.stack) - k:]
        try:
            results = self._call(operation, args)
        except ScriptError as e:
            log.warning('%s failed: %s', operation.name, e)
            self.report(str(e))
            return False
        del self.stack[len(self.stack) - k:]
        self.stack.extend(results)
        return True

    def _call(self, operation, args):
        '''
        Run operation on args, bottom first, returning its results.

        Does not touch the stack.
        '''
        if isinstance(operation, Native):
            return [float(result) for result in operation.function(*args)]
        elif isinstance(operation, LuaOperation):
            return operation.script.call(operation.function, args)
        elif isinstance(operation, ArrayOperation):
            return self._call_array(operation, args)
        raise TypeError('Unknown operation {!r}'.format(operation))

    def _call_array(self, operation, args):
        runtime = operation.runtime
        for value in args:
            runtime.push(value)
        try:
            runtime.call(operation.binding)
        finally:
            values = runtime.take_stack()
        results = []
        for value in values:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ScriptError('{} returned a non-number: {}'.format(
                    operation.binding, value))
            results.append(float(value))
        return results

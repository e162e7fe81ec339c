'''
Lua backend: one sandboxed interpreter for the startup script.
'''

import logging

from lupa import LuaRuntime, lua_type

from .util import ConfigLoadError, ScriptError, wrap_user_errors


log = logging.getLogger(__name__)


class LuaScript:
    '''
    Owns a Lua interpreter and calls the functions declared in it.
    '''

    # Standard library visible to the script. Nothing touching files,
    # processes or the module system.
    SAFE_GLOBALS = (
        'assert',
        'error',
        'ipairs',
        'math',
        'next',
        'pairs',
        'pcall',
        'select',
        'string',
        'table',
        'tonumber',
        'tostring',
        'type',
        'xpcall',
    )

    def __init__(self):
        self.runtime = LuaRuntime(unpack_returned_tuples=True)
        self._compile = self.runtime.eval('''
            function(source, chunkname, env)
                return load(source, "=" .. chunkname, "t", env)
            end
        ''')

    def environment(self, register):
        '''
        Fresh global table holding the safe globals and ``register``.
        '''
        lua_globals = self.runtime.globals()
        env = self.runtime.table()
        for name in type(self).SAFE_GLOBALS:
            if lua_globals[name] is not None:
                env[name] = lua_globals[name]
        env['register'] = self._checked(register)
        return env

    def _checked(self, register):
        def checked(name, arity, function):
            if not isinstance(name, str):
                raise TypeError('register: name must be a string')
            if isinstance(arity, bool) or \
               not isinstance(arity, (int, float)) or \
               arity < 0 or arity != int(arity):
                raise TypeError('register: arity must be a non-negative '
                                'integer')
            if lua_type(function) != 'function':
                raise TypeError('register: expected a function for '
                                '{!r}'.format(name))
            register(name, int(arity), function)
        return checked

    @wrap_user_errors('', ConfigLoadError)
    def load(self, source, register, chunkname):
        '''
        Compile and run source once against a sandboxed environment.

        Every ``register(name, arity, function)`` call is passed on to
        register as it happens.
        '''
        compiled = self._compile(source, chunkname,
                                 self.environment(register))
        chunk, message = compiled if isinstance(compiled, tuple) \
            else (compiled, None)
        if chunk is None:
            raise ConfigLoadError(message)
        log.info('running %s', chunkname)
        chunk()

    @wrap_user_errors('', ScriptError)
    def call(self, function, args):
        '''
        Call a Lua function with floats, returning the floats it returns.
        '''
        results = function(*args)
        if results is None:
            results = ()
        elif not isinstance(results, tuple):
            results = (results,)
        converted = []
        for result in results:
            if isinstance(result, bool) or \
               not isinstance(result, (int, float)):
                raise ScriptError('expected a number, got {}'.format(
                    lua_type(result) or type(result).__name__))
            converted.append(float(result))
        return converted

'''
Locating and loading the startup scripts.
'''

from os import path
import logging

from platformdirs import user_config_dir

from .lua import LuaScript
from .uiua import UiuaRuntime
from .util import ConfigLoadError


log = logging.getLogger(__name__)


APPNAME = 'rpntui'
LUA_SCRIPT = 'config.lua'
UIUA_SCRIPT = 'config.ua'


def config_dir():
    '''
    Per-user configuration directory, as the platform expects it.
    '''
    return user_config_dir(APPNAME)


def script_paths(directory=None, lua=None, uiua=None):
    '''
    Return the (lua, uiua) script paths, explicit ones taking precedence.
    '''
    directory = directory or config_dir()
    return (lua or path.join(directory, LUA_SCRIPT),
            uiua or path.join(directory, UIUA_SCRIPT))


def _read(filename):
    try:
        with open(filename, encoding='utf-8') as fp:
            return fp.read()
    except FileNotFoundError:
        raise ConfigLoadError('{}: not found'.format(filename))
    except OSError as e:
        raise ConfigLoadError('{}: {}'.format(filename, e.strerror))


def load_config(registry, lua_path=None, uiua_path=None,
                uiua_executable=None):
    '''
    Load whichever startup scripts are given into registry.

    Returns the messages of everything that went wrong; built-ins and
    anything declared before a failure stay available.
    '''
    errors = []
    if lua_path is not None:
        try:
            registry.load_general_script(LuaScript(), _read(lua_path),
                                         path.basename(lua_path))
        except ConfigLoadError as e:
            log.error('loading %s: %s', lua_path, e)
            errors.append(str(e))
    if uiua_path is not None:
        try:
            if not path.exists(uiua_path):
                raise ConfigLoadError('{}: not found'.format(uiua_path))
            registry.load_array_script(UiuaRuntime(uiua_executable),
                                       uiua_path)
        except ConfigLoadError as e:
            log.error('loading %s: %s', uiua_path, e)
            errors.append(str(e))
    return errors

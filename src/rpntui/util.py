from functools import wraps


class RPNError(Exception):
    pass


class ConfigLoadError(RPNError):
    '''
    A startup script could not be found, compiled or run to completion.
    '''


class ScriptError(RPNError):
    '''
    A scripted operation failed at call time.
    '''


def wrap_user_errors(fmt, error=RPNError):
    '''
    Decorator that converts backend exceptions to user facing errors.

    Passes through RPNErrors. ``fmt`` is formatted with the call arguments,
    and the original exception's message is appended.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except RPNError:
                raise
            except Exception as e:
                message = fmt.format(*args, **kwargs)
                if message:
                    raise error('{}: {}'.format(message, e)) from e
                raise error(str(e)) from e
        return wrapper
    return decorator

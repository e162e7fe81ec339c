import queue

from pytest import fixture

from rpntui.calculator import Calculator
from rpntui.registry import Registry
from rpntui.util import ScriptError


class FakeArrayRuntime:
    '''
    Stands in for UiuaRuntime, with Python functions as bindings.
    '''

    def __init__(self, functions):
        '''
        :param functions: name -> (arity, function of the pushed values
                          returning the resulting stack, bottom first).
        '''
        self.functions = functions
        self.stack = []
        self.calls = []

    def run_file(self, path):
        self.path = path

    def bindings(self):
        return {name: arity for name, (arity, _) in self.functions.items()}

    def push(self, value):
        self.stack.append(value)

    def call(self, binding):
        self.calls.append((binding, list(self.stack)))
        _, function = self.functions[binding]
        args, self.stack = self.stack, []
        self.stack = list(function(*args))

    def take_stack(self):
        stack, self.stack = self.stack, []
        return stack


def fail(*args):
    raise ScriptError('simulated failure')


def drain(channel):
    '''
    Every event already sent on channel, without blocking.
    '''
    events = []
    while True:
        try:
            events.append(channel._queue.get_nowait())
        except queue.Empty:
            return events


def receive(channel, timeout=2):
    '''
    Next event on channel. Raises queue.Empty if none arrives in time.
    '''
    return channel._queue.get(timeout=timeout)


@fixture
def registry():
    return Registry()


@fixture
def reported():
    '''
    Messages reported by the calculator's engine.
    '''
    return []


@fixture
def scheduled():
    '''
    Delays of the error expiry timers the calculator asked for.
    '''
    return []


@fixture
def calculator(registry, reported, scheduled):
    return Calculator(registry, report=reported.append,
                      schedule=scheduled.append)

'''
Events passed from producer threads to the calculator's loop.
'''

from collections import namedtuple
from enum import Enum
import queue


class Kind(Enum):
    CHAR = 'char'
    BACKSPACE = 'backspace'
    SUBMIT = 'submit'
    TICK = 'tick'
    QUIT = 'quit'
    RESET = 'reset'
    CLEAR_INPUT = 'clear-input'
    PUSH_ERROR = 'push-error'
    POP_ERROR = 'pop-error'


class Event(namedtuple('Event', 'kind payload')):
    '''
    One semantic event. Only CHAR and PUSH_ERROR carry a payload.
    '''

    __slots__ = ()

    @classmethod
    def char(cls, character):
        return cls(Kind.CHAR, character)

    @classmethod
    def push_error(cls, message):
        return cls(Kind.PUSH_ERROR, message)

    @classmethod
    def of(cls, kind):
        return cls(kind, None)


BACKSPACE = Event.of(Kind.BACKSPACE)
SUBMIT = Event.of(Kind.SUBMIT)
TICK = Event.of(Kind.TICK)
QUIT = Event.of(Kind.QUIT)
RESET = Event.of(Kind.RESET)
CLEAR_INPUT = Event.of(Kind.CLEAR_INPUT)
POP_ERROR = Event.of(Kind.POP_ERROR)


class Channel:
    '''
    Many producers, one consumer. Events arrive in the order sent.
    '''

    def __init__(self):
        self._queue = queue.SimpleQueue()

    def send(self, event):
        self._queue.put(event)

    def recv(self):
        '''
        Block until an event arrives.
        '''
        return self._queue.get()

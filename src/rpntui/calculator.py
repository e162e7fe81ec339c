from collections import deque, namedtuple
import threading

from .engine import Engine
from .events import Event, Kind, POP_ERROR
from .lexer import Lexer


Snapshot = namedtuple('Snapshot', 'stack input_line errors')


def expiry_timer(channel):
    '''
    Return a scheduler sending POP_ERROR on channel after a delay.

    Each call starts its own one-shot timer thread; timers can't be
    cancelled.
    '''
    def schedule(delay):
        timer = threading.Timer(delay, channel.send, [POP_ERROR])
        timer.daemon = True
        timer.start()
    return schedule


class ErrorQueue:
    '''
    Messages shown for a while, then dropped oldest first.
    '''

    TIMEOUT = 4

    def __init__(self, schedule):
        '''
        :param schedule: Called with TIMEOUT on every push; must arrange
                         for pop_oldest to run once that many seconds later.
        '''
        self.messages = deque()
        self.schedule = schedule

    def __iter__(self):
        return iter(self.messages)

    def __len__(self):
        return len(self.messages)

    def push(self, message):
        self.messages.append(message)
        self.schedule(type(self).TIMEOUT)

    def pop_oldest(self):
        '''
        Drop the oldest message, if there still is one.
        '''
        if self.messages:
            self.messages.popleft()

    def clear(self):
        self.messages.clear()


class Calculator:
    '''
    All calculator state, owned by the single thread handling events.
    '''

    def __init__(self, registry, report, schedule):
        '''
        :param registry: Operations available to the calculator.
        :param report: Called with the message of a failed scripted call.
        :param schedule: Error expiry scheduler, see ErrorQueue.
        '''
        self.registry = registry
        self.stack = []
        self.input_line = ''
        self.previous = ''
        self.errors = ErrorQueue(schedule)
        self.engine = Engine(registry, self.stack, report)
        self.lexer = Lexer()

    @classmethod
    def on_channel(cls, registry, channel):
        '''
        Calculator reporting errors as events on channel.
        '''
        def report(message):
            channel.send(Event.push_error(message))
        return cls(registry, report=report,
                   schedule=expiry_timer(channel))

    def apply(self, name):
        return self.engine.apply(name)

    def submit(self):
        '''
        Push the input line if it's a number, else apply it as an operator.

        An empty line repeats the previous token as an operator. The line
        is kept as is when it can't be applied.
        '''
        number = self.lexer.number(self.input_line)
        if number is not None:
            self.stack.append(number)
            self.previous, self.input_line = self.input_line, ''
        elif not self.input_line:
            self.apply(self.previous)
        elif self.apply(self.input_line):
            self.previous, self.input_line = self.input_line, ''

    def reset(self):
        '''
        Forget the stack, input and previous token. Operations stay.
        '''
        self.stack.clear()
        self.input_line = ''
        self.previous = ''
        self.errors.clear()

    def handle(self, event):
        '''
        Update state for one event. Return False when it's time to quit.
        '''
        kind = event.kind
        if kind is Kind.QUIT:
            return False
        elif kind is Kind.CHAR:
            self.input_line += event.payload
        elif kind is Kind.BACKSPACE:
            self.input_line = self.input_line[:-1]
        elif kind is Kind.SUBMIT:
            self.submit()
        elif kind is Kind.RESET:
            self.reset()
        elif kind is Kind.CLEAR_INPUT:
            self.input_line = ''
        elif kind is Kind.PUSH_ERROR:
            self.errors.push(event.payload)
        elif kind is Kind.POP_ERROR:
            self.errors.pop_oldest()
        elif kind is Kind.TICK:
            pass
        else:
            raise ValueError('Unknown event {!r}'.format(event))
        return True

    def snapshot(self):
        return Snapshot(tuple(self.stack), self.input_line,
                        tuple(self.errors))

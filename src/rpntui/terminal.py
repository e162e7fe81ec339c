'''
Keyboard input and full-screen drawing, on top of prompt_toolkit's
terminal input and output.
'''

import math
import select
import threading
import time

from prompt_toolkit.input import create_input
from prompt_toolkit.keys import Keys
from prompt_toolkit.output import create_output

from .events import (Event, BACKSPACE, SUBMIT, TICK, QUIT, RESET,
                     CLEAR_INPUT)


# Keys with a meaning of their own. Anything else that isn't a printable
# character is ignored.
KEYS = {
    Keys.ControlD: QUIT,
    Keys.ControlW: CLEAR_INPUT,
    Keys.ControlL: RESET,
    # Enter, as CR or LF
    Keys.ControlM: SUBMIT,
    Keys.ControlJ: SUBMIT,
    # Backspace, as ^H or DEL
    Keys.ControlH: BACKSPACE,
}


def translate(key_press):
    '''
    Event for a key press, or None if the key means nothing to us.
    '''
    key = key_press.key
    if isinstance(key, Keys):
        return KEYS.get(key)
    if len(key) == 1 and key.isprintable():
        return Event.char(key)
    return None


class InputPoller(threading.Thread):
    '''
    Turns key presses into events, and sends a tick whenever the tick
    interval passes.

    Never touches calculator state; only sends on the channel.
    '''

    TICK_RATE = 0.2

    def __init__(self, channel, input=None, tick_rate=None,
                 clock=time.monotonic, wait=None):
        super().__init__(name='rpntui-input', daemon=True)
        self.channel = channel
        self.input = input or create_input()
        self.tick_rate = tick_rate or type(self).TICK_RATE
        self.clock = clock
        self.wait = wait or self._select

    def _select(self, timeout):
        '''
        Wait at most timeout seconds for input. Return True if there is some.
        '''
        readable, _, _ = select.select([self.input.fileno()], [], [], timeout)
        return bool(readable)

    def poll_once(self, last_tick):
        '''
        Wait for keys until the next tick is due. Return the last tick time.
        '''
        timeout = max(0.0, self.tick_rate - (self.clock() - last_tick))
        if self.wait(timeout):
            for key_press in self.input.read_keys() + self.input.flush_keys():
                event = translate(key_press)
                if event is not None:
                    self.channel.send(event)
        if self.clock() - last_tick >= self.tick_rate:
            self.channel.send(TICK)
            last_tick = self.clock()
        return last_tick

    def run(self):
        last_tick = self.clock()
        while True:
            last_tick = self.poll_once(last_tick)


def format_number(number):
    if math.isnan(number):
        return 'NaN'
    if math.isinf(number):
        return 'inf' if number > 0 else '-inf'
    if number.is_integer():
        return str(int(number))
    return repr(number)


def _box(lines, height, width):
    '''
    Frame lines in a rounded box height rows tall, width columns wide.
    '''
    inner = max(width - 2, 0)
    rows = ['╭' + '─' * inner + '╮']
    for i in range(max(height - 2, 0)):
        line = lines[i] if i < len(lines) else ''
        rows.append('│' + line[:inner].ljust(inner) + '│')
    rows.append('╰' + '─' * inner + '╯')
    return rows[:height]


def layout(snapshot, rows, columns):
    '''
    Lay out a calculator snapshot as rows lines of columns characters.

    From the top: the stack, scrolled so its top is visible; queued errors,
    if any; the input line with a cursor.
    '''
    input_height = 3
    # A message may span several lines, e.g. a Uiua error and its location
    errors = [line
              for message in snapshot.errors
              for line in message.splitlines()]
    errors_height = len(errors) + 2 if errors else 0
    # Keep at least one visible stack row
    errors_height = min(errors_height,
                        max(rows - input_height - 3, 0))
    stack_height = max(rows - input_height - errors_height, 0)

    numbers = [format_number(number) for number in snapshot.stack]
    visible = max(stack_height - 2, 0)
    scroll = max(len(numbers) - visible, 0)

    screen = _box(numbers[scroll:], stack_height, columns)
    if errors_height:
        screen += _box(errors, errors_height, columns)
    screen += _box([snapshot.input_line + '_'], input_height, columns)
    return screen[:rows]


class Screen:
    '''
    Alternate screen the calculator is drawn on, for the duration of a
    with block.
    '''

    def __init__(self, output=None):
        self.output = output or create_output()

    def __enter__(self):
        self.output.enter_alternate_screen()
        self.output.disable_autowrap()
        self.output.hide_cursor()
        self.output.flush()
        return self

    def __exit__(self, *exc_info):
        self.output.show_cursor()
        self.output.enable_autowrap()
        self.output.quit_alternate_screen()
        self.output.flush()

    def draw(self, snapshot):
        size = self.output.get_size()
        for row, line in enumerate(layout(snapshot, size.rows, size.columns)):
            self.output.cursor_goto(row + 1, 1)
            self.output.write(line)
        self.output.flush()

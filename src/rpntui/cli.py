from os import isatty
import sys
from argparse import ArgumentParser, REMAINDER
import logging

from prompt_toolkit.input import create_input

from .calculator import Calculator
from .config import load_config, script_paths
from .events import Channel, Event
from .lexer import Lexer
from .registry import Registry
from .terminal import InputPoller, Screen, format_number


log = logging.getLogger(__name__)


class CLI:
    '''
    Command line interface to the calculator.
    '''

    LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'

    def load(self):
        '''
        Registry with built-ins and the startup scripts, plus load errors.
        '''
        registry = Registry()
        if self.args.no_config:
            return registry, []
        lua, uiua = script_paths(self.args.config_dir,
                                 self.args.lua, self.args.uiua)
        errors = load_config(registry, lua, uiua,
                             uiua_executable=self.args.uiua_executable)
        return registry, errors

    def lister(self):
        '''
        List every operator with its arity and where it comes from.
        '''
        registry, errors = self.load()
        for message in errors:
            print(message, file=sys.stderr)
        print('[name]\t<arity>\t<origin>')
        for operation in registry:
            print(operation.name, operation.arity, operation.ORIGIN,
                  sep='\t')

    def executor(self):
        '''
        Run tokens through the calculator without the full-screen display.
        '''
        registry, errors = self.load()
        for message in errors:
            print(message, file=sys.stderr)
        calculator = Calculator(registry,
                                report=lambda message: print(message,
                                                             file=sys.stderr),
                                schedule=lambda delay: None)
        lexer = Lexer()
        for line in self.args.expressions:
            for token in lexer.lex(line):
                calculator.input_line = token
                calculator.submit()
                # Abort entire rest of line, makes sense anyway
                if calculator.input_line:
                    print('Cannot apply {}'.format(token), file=sys.stderr)
                    break
        for number in calculator.stack:
            print(format_number(number))

    def interactive(self):
        '''
        Run the full-screen calculator until it's told to quit.
        '''
        channel = Channel()
        registry, errors = self.load()
        calculator = Calculator.on_channel(registry, channel)
        for message in errors:
            channel.send(Event.push_error(message))
        terminal_input = create_input()
        poller = InputPoller(channel, terminal_input)
        with terminal_input.raw_mode(), Screen() as screen:
            poller.start()
            screen.draw(calculator.snapshot())
            while calculator.handle(channel.recv()):
                screen.draw(calculator.snapshot())
        log.info('quit')

    def _configure_logging(self):
        '''
        Log to a file if asked to. The terminal belongs to the display.
        '''
        if self.args.log_file:
            logging.basicConfig(filename=self.args.log_file,
                                level=logging.DEBUG if self.args.verbose
                                else logging.INFO,
                                format=self.LOG_FORMAT)

    def _choose_action(self):
        '''
        Explicit action, else batch mode unless both stdin/out are a tty.
        '''
        if self.args.action is not None:
            return self.args.action
        if self.args.expressions is not None:
            return self.executor
        if isatty(sys.stdin.fileno()) and isatty(sys.stdout.fileno()):
            return self.interactive
        self.args.expressions = sys.stdin
        return self.executor

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(description='RPN calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true')
        self.argument_parser.add_argument('--log-file', metavar='FILE')
        config_group = self.argument_parser.add_argument_group(
            'startup scripts')
        config_group.add_argument('--config-dir', metavar='DIR')
        config_group.add_argument('--lua', metavar='FILE')
        config_group.add_argument('--uiua', metavar='FILE')
        config_group.add_argument('--uiua-executable', metavar='PATH')
        config_group.add_argument('--no-config', action='store_true')
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        main_groups.add_argument('-e', '--expression',
                                 nargs=REMAINDER,
                                 dest='expressions')
        for short_, long_, action in [('-l', '--list', self.lister),
                                      ('-i', '--interactive',
                                       self.interactive)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=None, expressions=None)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        self._configure_logging()
        try:
            self._choose_action()()
        except KeyboardInterrupt:
            sys.exit(1)


def main():
    CLI().run()

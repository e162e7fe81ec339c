'''
Uiua backend, driven through the ``uiua`` command line interpreter.

The interpreter is a separate process, so the runtime's stack lives here:
values pushed before a call become literals in a generated program, and
whatever the call leaves behind is printed back as JSON.
'''

from os import path, unlink
import json
import logging
import math
import subprocess
import tempfile

import regex

from .util import ConfigLoadError, ScriptError, wrap_user_errors


log = logging.getLogger(__name__)


def literal(value):
    '''
    Spell a float as a Uiua number literal.
    '''
    if math.isnan(value):
        return 'NaN'
    sign = '¯' if math.copysign(1, value) < 0 else ''
    if math.isinf(value):
        return sign + '∞'
    text = repr(abs(value)).replace('e+', 'e').replace('e-', 'e¯')
    return sign + text


class UiuaRuntime:
    '''
    A loaded Uiua source file and the runtime stack used to call into it.
    '''

    EXECUTABLE = 'uiua'
    RUN_ARGS = ('run', '--no-format')
    TIMEOUT = 5
    # Printed right before the JSON encoded result stack
    SENTINEL = '--rpntui-stack--'

    # Top-level binding with a declared signature:
    #   Hyp ← |2 √+∩(×.)
    #   Both = |1.2 ..
    BINDING = r'''
               ^
               (?<name>
                   \p{L}
                   [\p{L}\p{N}_]*
                   !*
               )
               [\x20\t]*
               [←=]
               [\x20\t]*
               \|
               (?<arguments>\d+)
               (?:
                   \.
                   (?<outputs>\d+)
               )?
               '''
    # Top-level binding without a signature, not callable as an operator:
    #   Half ← ÷2
    UNSIGNED = r'''
                ^
                (?<name>
                    \p{L}
                    [\p{L}\p{N}_]*
                    !*
                )
                [\x20\t]*
                [←=]
                (?![\x20\t]*\|)
                '''
    # Location of an error in the interpreter's report, e.g. config.ua:3:5
    LOCATION = r'''
                (?<file>[^\s:]+\.ua)
                :
                (?<line>\d+)
                :
                (?<column>\d+)
                '''
    FLAGS = regex.VERSION1 | regex.VERBOSE | regex.MULTILINE

    def __init__(self, executable=None, timeout=None):
        self.executable = executable or type(self).EXECUTABLE
        self.timeout = timeout or type(self).TIMEOUT
        self.path = None
        self.source = ''
        self.stack = []
        self._bindings = {}

    def declarations(self, source):
        '''
        Yield (line number, name, arity) of every declared binding.
        '''
        for match in regex.finditer(type(self).BINDING, source,
                                    flags=type(self).FLAGS):
            line = source.count('\n', 0, match.start()) + 1
            yield line, match.group('name'), int(match.group('arguments'))

    def undeclared(self, source):
        '''
        Yield (line number, name) of every binding without a signature.
        '''
        for match in regex.finditer(type(self).UNSIGNED, source,
                                    flags=type(self).FLAGS):
            line = source.count('\n', 0, match.start()) + 1
            yield line, match.group('name')

    def error_line(self, report):
        '''
        Line of the loaded file a failure was reported at, if any.
        '''
        name = path.basename(self.path or '')
        for match in regex.finditer(type(self).LOCATION, report,
                                    flags=type(self).FLAGS):
            if path.basename(match.group('file')) == name:
                return int(match.group('line'))
        return None

    def _run(self, filename):
        '''
        Run a file through the interpreter, returning its standard output.
        '''
        try:
            process = subprocess.run([self.executable, *type(self).RUN_ARGS,
                                      filename],
                                     cwd=path.dirname(path.abspath(self.path)),
                                     stdout=subprocess.PIPE,
                                     stderr=subprocess.PIPE,
                                     encoding='utf-8',
                                     timeout=self.timeout)
        except subprocess.TimeoutExpired:
            raise ScriptError('uiua: timed out after {}s'.format(self.timeout))
        except FileNotFoundError:
            raise ScriptError('uiua: {} not found'.format(self.executable))
        if process.returncode != 0:
            report = process.stderr.strip() or process.stdout.strip()
            raise ScriptError(report or 'uiua: exit status {}'.format(
                process.returncode))
        return process.stdout

    @wrap_user_errors('{1}', ConfigLoadError)
    def run_file(self, filename):
        '''
        Load and run a source file once, collecting its bound functions.

        If the run fails, bindings declared before the failing line are
        still collected.
        '''
        log.info('running %s', filename)
        self.path = filename
        with open(filename, encoding='utf-8') as fp:
            self.source = fp.read()
        declared = list(self.declarations(self.source))
        for line, name in self.undeclared(self.source):
            log.info('%s:%d: %s has no signature, not an operator',
                     filename, line, name)
        try:
            self._run(filename)
        except ScriptError as e:
            failed_at = self.error_line(str(e))
            self._bindings = {name: arity
                              for line, name, arity
                              in declared
                              if failed_at is not None and line < failed_at}
            raise ConfigLoadError('{}: {}'.format(filename, e))
        self._bindings = {name: arity for _, name, arity in declared}

    def bindings(self):
        '''
        Map of bound function names to their argument counts.
        '''
        return dict(self._bindings)

    def push(self, value):
        self.stack.append(value)

    def program(self, binding):
        '''
        Source of a program calling binding on the pushed values.
        '''
        # Uiua runs right to left: the rightmost literal is pushed first.
        arguments = ' '.join(literal(value) for value in reversed(self.stack))
        return '\n'.join([
            self.source,
            '&p "{}"'.format(type(self).SENTINEL),
            '&p json [{} {}]'.format(binding, arguments),
            '',
        ])

    def parse(self, output):
        '''
        Decode the result stack from a program's output, bottom first.
        '''
        lines = output.splitlines()
        index = lines.index(type(self).SENTINEL) + 1
        # [...] collects the stack top first.
        return list(reversed(json.loads(lines[index])))

    @wrap_user_errors('', ScriptError)
    def call(self, binding):
        '''
        Call binding on the pushed values, replacing them with its results.
        '''
        program = self.program(binding)
        self.stack = []
        with tempfile.NamedTemporaryFile('w', suffix='.ua', encoding='utf-8',
                                         delete=False) as fp:
            fp.write(program)
        try:
            self.stack = self.parse(self._run(fp.name))
        finally:
            unlink(fp.name)

    def take_stack(self):
        '''
        Remove and return everything on the runtime stack, bottom first.
        '''
        stack, self.stack = self.stack, []
        return stack

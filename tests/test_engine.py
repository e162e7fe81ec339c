'''
Dispatch engine tests: arity, atomicity and error reporting
'''

from pytest import mark

from rpntui.engine import Engine
from rpntui.lua import LuaScript
from rpntui.operations import ArrayOperation

from conftest import FakeArrayRuntime, fail


def engine(registry, stack, reported):
    return Engine(registry, stack, reported.append)


@mark.parametrize('name, stack, expected', [
    ('+', [2, 3], [5]),
    ('/', [8, 2], [4]),
    ('-', [1, 5, 3], [1, 2]),
    ('swap', [7, 1, 2], [7, 2, 1]),
    ('pi', [], [3.141592653589793]),
])
def test_native(registry, reported, name, stack, expected):
    stack = [float(value) for value in stack]
    assert engine(registry, stack, reported).apply(name)
    assert stack == expected
    assert reported == []


def test_unknown_name(registry, reported):
    stack = [1.0, 2.0]
    assert not engine(registry, stack, reported).apply('frobnicate')
    assert stack == [1.0, 2.0]
    assert reported == []


@mark.parametrize('name, stack', [
    ('+', []),
    ('+', [1.0]),
    ('swap', [1.0]),
    ('sqrt', []),
])
def test_not_enough_arguments(registry, reported, name, stack):
    before = list(stack)
    assert not engine(registry, stack, reported).apply(name)
    assert stack == before
    # Missing arguments are silent, like unknown names.
    assert reported == []


def test_stack_is_shared(registry, reported):
    stack = []
    e = engine(registry, stack, reported)
    stack.extend([3.0, 4.0])
    e.apply('*')
    assert stack == [12.0]


def load_lua(registry, source):
    registry.load_general_script(LuaScript(), source, 'config.lua')


def test_lua_operation(registry, reported):
    load_lua(registry, 'register("hyp", 2, function(a, b) '
                       'return math.sqrt(a * a + b * b) end)')
    stack = [1.0, 3.0, 4.0]
    assert engine(registry, stack, reported).apply('HYP')
    assert stack == [1.0, 5.0]


def test_lua_operation_many_results(registry, reported):
    load_lua(registry, 'register("dup", 1, function(a) return a, a end)\n'
                       'register("drop", 1, function(a) end)')
    stack = [2.0]
    e = engine(registry, stack, reported)
    assert e.apply('dup')
    assert stack == [2.0, 2.0]
    assert e.apply('drop')
    assert e.apply('drop')
    assert stack == []


def test_lua_failure_leaves_stack(registry, reported):
    load_lua(registry, 'register("boom", 1, function(a) error("kaboom") end)')
    stack = [1.5, -2.0, 0.1]
    before = list(stack)
    assert not engine(registry, stack, reported).apply('boom')
    assert stack == before
    assert len(reported) == 1
    assert 'kaboom' in reported[0]


def test_lua_non_number_leaves_stack(registry, reported):
    load_lua(registry, 'register("word", 1, function(a) return 1, "x" end)')
    stack = [1.0]
    assert not engine(registry, stack, reported).apply('word')
    assert stack == [1.0]
    assert 'number' in reported[0]


def test_lua_arity_checked_before_call(registry, reported):
    load_lua(registry, 'register("boom", 3, function() error("called") end)')
    stack = [1.0, 2.0]
    assert not engine(registry, stack, reported).apply('boom')
    assert reported == []


def array(registry, functions):
    runtime = FakeArrayRuntime(functions)
    registry.load_array_script(runtime, 'config.ua')
    return runtime


def test_array_operation(registry, reported):
    runtime = array(registry, {'Add': (2, lambda a, b: [a + b])})
    stack = [9.0, 2.0, 3.0]
    assert engine(registry, stack, reported).apply('add')
    assert stack == [9.0, 5.0]
    # Arguments are pushed bottom first, keeping their order.
    assert runtime.calls == [('Add', [2.0, 3.0])]
    assert isinstance(registry.lookup('ADD'), ArrayOperation)


def test_array_operation_results_in_order(registry, reported):
    array(registry, {'Split': (1, lambda a: [a - 1, 1, a + 1])})
    stack = [10.0]
    assert engine(registry, stack, reported).apply('split')
    assert stack == [9.0, 1.0, 11.0]


def test_array_failure_leaves_stack(registry, reported):
    runtime = array(registry, {'Fail': (2, fail)})
    stack = [1.0, 2.0, 3.0]
    assert not engine(registry, stack, reported).apply('fail')
    assert stack == [1.0, 2.0, 3.0]
    assert reported == ['simulated failure']
    assert runtime.stack == []


@mark.parametrize('result', ['text', [1, 2], None, True])
def test_array_non_number_leaves_stack(registry, reported, result):
    runtime = array(registry, {'Odd': (1, lambda a: [a, result])})
    stack = [4.0]
    assert not engine(registry, stack, reported).apply('odd')
    assert stack == [4.0]
    assert len(reported) == 1
    assert 'non-number' in reported[0]
    assert runtime.stack == []


def test_array_integer_results(registry, reported):
    array(registry, {'Count': (0, lambda: [3])})
    stack = []
    assert engine(registry, stack, reported).apply('count')
    assert stack == [3.0]
    assert isinstance(stack[0], float)

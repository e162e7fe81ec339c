'''
Command line tests, in batch and listing modes
'''

from rpntui.cli import CLI


def run(*args):
    CLI().run(args=list(args))


def test_expression(capsys):
    run('--no-config', '-e', '2', '3', '+', '4', '*')
    assert capsys.readouterr().out == '20\n'


def test_expression_in_one_argument(capsys):
    run('--no-config', '-e', '8 2 / 1 -  sqrt')
    assert capsys.readouterr().out == '1.7320508075688772\n'


def test_bad_token_aborts_line(capsys):
    run('--no-config', '-e', '1 2 bogus 3', '4')
    captured = capsys.readouterr()
    assert captured.out == '1\n2\n4\n'
    assert 'Cannot apply bogus' in captured.err


def test_missing_arguments_abort_line(capsys):
    run('--no-config', '-e', '1 + 5')
    captured = capsys.readouterr()
    assert captured.out == '1\n'
    assert 'Cannot apply +' in captured.err


def test_list(capsys):
    run('--no-config', '-l')
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == '[name]\t<arity>\t<origin>'
    assert 'sqrt\t1\tbuiltin' in lines
    assert 'pi\t0\tbuiltin' in lines


def test_config_dir(tmp_path, capsys):
    (tmp_path / 'config.lua').write_text(
        'register("Cube", 1, function(x) return x * x * x end)\n'
        'register("fail", 0, function() error("no luck") end)\n')
    run('--config-dir', str(tmp_path), '-e', '3 CUBE fail')
    captured = capsys.readouterr()
    assert captured.out == '27\n'
    # No Uiua script there.
    assert 'config.ua: not found' in captured.err
    assert 'no luck' in captured.err


def test_explicit_lua_script(tmp_path, capsys):
    script = tmp_path / 'ops.lua'
    script.write_text('register("double", 1, function(x) return 2 * x end)')
    run('--lua', str(script), '--uiua', str(tmp_path / 'none.ua'), '-l')
    captured = capsys.readouterr()
    assert 'double\t1\tlua' in captured.out.splitlines()

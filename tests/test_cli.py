import pytest

from itl import cli
from itl.diagnostics import CollectingDiagnostics
from itl.interpreter import Interpreter


@pytest.fixture(autouse=True)
def _plain_output(monkeypatch):
    monkeypatch.setenv("ITL_COLOR", "0")


def write_script(tmp_path, source):
    path = tmp_path / "script.itl"
    path.write_text(source, encoding="utf-8")
    return str(path)


def test_runs_script(tmp_path, capsys):
    script = write_script(tmp_path, "function add(a, b) { return a + b; }\nprint add(1, 2);\n")
    assert cli.main([script]) == 0
    assert capsys.readouterr().out == "3\n"


def test_static_error_exit_code(tmp_path, capsys):
    script = write_script(tmp_path, "print 1;\nprint ;\n")
    assert cli.main([script]) == cli.EX_DATAERR
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == "[line 2] Error at ';': Expect expression.\n"


def test_runtime_error_exit_code(tmp_path, capsys):
    script = write_script(tmp_path, 'print "ok";\nprint 1 + "x";\n')
    assert cli.main([script]) == cli.EX_SOFTWARE
    captured = capsys.readouterr()
    assert captured.out == "ok\n"
    assert captured.err == "Operands must be two numbers or two strings.\n[line 2]\n"


def test_too_many_arguments_is_usage_error(capsys):
    assert cli.main(["a.itl", "b.itl"]) == cli.EX_USAGE
    assert "Usage: itl [script]" in capsys.readouterr().err


def test_shell_runs_each_line_against_one_interpreter():
    output = []
    diagnostics = CollectingDiagnostics()
    shell = cli.Shell(Interpreter(output=output.append, diagnostics=diagnostics, prelude=None))
    assert not shell.onecmd("var a = 2;")
    assert not shell.onecmd("print a * 3;")
    assert not shell.onecmd("print ;")
    assert not shell.onecmd("")
    assert output == ["6"]
    assert diagnostics.messages == ["Expect expression."]
    assert shell.onecmd("EOF")


def test_shell_reaches_statements_named_like_commands():
    output = []
    shell = cli.Shell(Interpreter(output=output.append, diagnostics=CollectingDiagnostics(), prelude=None))
    shell.onecmd('print "help";')
    assert output == ["help"]

from itl.diagnostics import CollectingDiagnostics
from itl.interpreter import Interpreter
from itl.interpreter.prelude import prelude_files


def make(**kwargs):
    output = []
    diagnostics = CollectingDiagnostics()
    interp = Interpreter(output=output.append, diagnostics=diagnostics, **kwargs)
    return interp, output, diagnostics


def test_syntax_error_prevents_execution(run, diagnostics):
    assert run("print 1; print ;") == []
    assert diagnostics.had_error
    assert diagnostics.messages == ["Expect expression."]


def test_lexical_error_prevents_execution(run, diagnostics):
    assert run("print 1; @") == []
    assert diagnostics.messages == ["Unexpected character."]


def test_resolution_error_prevents_execution(run, diagnostics):
    assert run("print 1; return 2;") == []
    assert diagnostics.messages == ["Can't return from top-level code."]


def test_several_static_errors_are_reported_together(run, diagnostics):
    run("var = 1; print 2 @; print ;")
    assert diagnostics.messages == [
        "Unexpected character.",
        "Expect variable name.",
        "Expect expression.",
    ]
    assert diagnostics.runtime_errors == []


def test_runs_share_globals(run):
    run("var a = 1;")
    run("function inc() { a = a + 1; }")
    run("inc();")
    assert run("print a;") == ["2"]


def test_static_error_flag_resets_between_runs(run, diagnostics):
    run("print ;")
    assert diagnostics.had_error
    assert run("print 1;") == ["1"]
    assert not diagnostics.had_error


def test_closures_from_earlier_runs_keep_working(run):
    run("function make() { var n = 0; function next() { n = n + 1; return n; } return next; }")
    run("var c = make();")
    run("c();")
    assert run("print c();") == ["2"]


def test_default_prelude_defines_helpers():
    interp, output, diagnostics = make()
    interp.run("print max(1, 2); print min(4, 5); print abs(-3); print abs(3);")
    assert output == ["2", "4", "3", "3"]
    assert not diagnostics.had_error


def test_prelude_none_leaves_globals_bare():
    interp, _, _ = make(prelude=None)
    assert set(interp.globals.values) == {"clock"}


def test_prelude_string_runs_before_user_code():
    interp, output, _ = make(prelude='var greeting = "hi";')
    interp.run("print greeting;")
    assert output == ["hi"]


def test_prelude_path_from_environment(tmp_path, monkeypatch):
    (tmp_path / "b.itl").write_text("var order = order + \"b\";", encoding="utf-8")
    (tmp_path / "a.itl").write_text("var order = \"a\";", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("not itl", encoding="utf-8")
    monkeypatch.setenv("ITL_PRELUDE_PATH", str(tmp_path))

    assert [p.name for p in prelude_files()] == ["a.itl", "b.itl"]
    interp, output, _ = make()
    interp.run("print order;")
    assert output == ["ab"]


def test_missing_prelude_directory_is_ignored(tmp_path, monkeypatch):
    monkeypatch.setenv("ITL_PRELUDE_PATH", str(tmp_path / "missing"))
    interp, output, diagnostics = make()
    interp.run("print 1;")
    assert output == ["1"]
    assert not diagnostics.had_error


def test_default_output_is_print(capsys):
    interp = Interpreter(diagnostics=CollectingDiagnostics(), prelude=None)
    interp.run('print "to stdout";')
    assert capsys.readouterr().out == "to stdout\n"


def test_deep_nesting_is_a_static_error_not_a_crash(run, diagnostics):
    assert run("print " + "(" * 1000 + "1" + ")" * 1000 + ";") == []
    assert run("print " + " + ".join(["1"] * 5000) + ";") == []
    assert diagnostics.messages == ["Expression nests too deeply.", "Expression nests too deeply."]
    assert diagnostics.runtime_errors == []
    assert run("print 1 + 1;") == ["2"]


def test_prelude_path_may_name_a_file(tmp_path, monkeypatch):
    script = tmp_path / "only.itl"
    script.write_text("var loaded = true;", encoding="utf-8")
    monkeypatch.setenv("ITL_PRELUDE_PATH", str(script))
    assert prelude_files() == [script]


def test_missing_prelude_directory_has_no_files(tmp_path, monkeypatch):
    (tmp_path / "stray.itl").write_text("print 1;", encoding="utf-8")
    monkeypatch.setenv("ITL_PRELUDE_PATH", str(tmp_path / "missing"))
    assert prelude_files() == []

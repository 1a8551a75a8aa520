import pytest

from itl.diagnostics import CollectingDiagnostics
from itl.evaluation.resolver import Resolver
from itl.reader.lexer import lex
from itl.reader.parser import parse
from itl.types import nodes


def resolve_source(source):
    diagnostics = CollectingDiagnostics()
    statements = parse(lex(source, diagnostics), diagnostics)
    assert not diagnostics.had_error, diagnostics.messages
    table = {}
    Resolver(table, diagnostics).resolve(statements)
    return statements, table, diagnostics


def variables_named(node, name):
    """Every Variable/Assign node called `name`, in source order."""
    found = []

    def walk(n):
        if isinstance(n, (nodes.Variable, nodes.Assign)) and n.name.lexeme == name:
            found.append(n)
        if isinstance(n, (tuple, list)):
            for child in n:
                walk(child)
        elif hasattr(n, "__dataclass_fields__"):
            for field_name in n.__dataclass_fields__:
                walk(getattr(n, field_name))

    walk(node)
    return found


def test_globals_are_not_recorded():
    statements, table, _ = resolve_source("var a = 1; print a; a = 2;")
    assert table == {}


def test_block_local_distance():
    statements, table, _ = resolve_source("{ var a = 1; print a; { print a; } }")
    first, second = variables_named(statements, "a")
    assert table[first.node_id] == 0
    assert table[second.node_id] == 1


def test_parameters_resolve_at_distance_zero():
    statements, table, _ = resolve_source("function f(x) { return x; }")
    (use,) = variables_named(statements, "x")
    assert table[use.node_id] == 0


def test_closure_distance_counts_function_scopes():
    source = """
    function outer() {
      var x = 1;
      function inner() { x = x + 1; return x; }
    }
    """
    statements, table, _ = resolve_source(source)
    uses = variables_named(statements, "x")
    assert len(uses) == 3
    assert all(table[u.node_id] == 1 for u in uses)


def test_function_name_visible_inside_its_body():
    statements, table, _ = resolve_source("{ function f() { return f; } }")
    (use,) = variables_named(statements, "f")
    assert table[use.node_id] == 1


def test_global_function_name_is_global():
    statements, table, _ = resolve_source("function f() { return f(); }")
    (use,) = variables_named(statements, "f")
    assert use.node_id not in table


@pytest.mark.parametrize(
    "source, message",
    [
        ("{ var a = a; }", "Can't read local variable in its own initializer."),
        ("{ var a = 1; var a = 2; }", "Already a variable with this name in this scope."),
        ("function f(a, a) {}", "Already a variable with this name in this scope."),
        ("return 1;", "Can't return from top-level code."),
        ("{ return; }", "Can't return from top-level code."),
    ]
)
def test_static_errors(source, message):
    _, _, diagnostics = resolve_source(source)
    assert diagnostics.messages == [message]


def test_global_redeclaration_is_allowed():
    _, _, diagnostics = resolve_source("var a = 1; var a = 2; var b = b;")
    assert not diagnostics.had_error


def test_shadowing_in_nested_block_is_allowed():
    _, _, diagnostics = resolve_source("{ var a = 1; { var a = 2; } }")
    assert not diagnostics.had_error


def test_return_inside_function_is_allowed():
    _, _, diagnostics = resolve_source("function f() { { return 1; } }")
    assert not diagnostics.had_error


def test_statement_too_deep_to_resolve_is_reported():
    source = "var a = 1;\nprint " + " + ".join(["a"] * 5000) + ";\n{ var b = 1; print b; }"
    statements, table, diagnostics = resolve_source(source)
    assert diagnostics.messages == ["Expression nests too deeply."]
    assert diagnostics.errors[0].line == 2
    # Resolution carries on with a clean scope stack
    (b,) = variables_named(statements[2].statements[1], "b")
    assert table[b.node_id] == 0

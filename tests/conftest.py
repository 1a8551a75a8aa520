import pytest

from itl.diagnostics import CollectingDiagnostics
from itl.interpreter import Interpreter

# Most tests drive the whole pipeline through an Interpreter whose print
# statements land in a list and whose errors are collected rather than
# written to stderr. The prelude is off so each test starts from bare globals.


@pytest.fixture
def diagnostics():
    return CollectingDiagnostics()


@pytest.fixture
def output():
    return []


@pytest.fixture
def interp(output, diagnostics):
    return Interpreter(output=output.append, diagnostics=diagnostics, prelude=None)


@pytest.fixture
def run(interp, output):
    """Run source and return every line printed so far."""
    def _run(source: str) -> list[str]:
        interp.run(source)
        return list(output)
    return _run

from __future__ import annotations
from typing import Callable, Iterable, Literal, Mapping, Optional

from itl.builtin.natives import register
from itl.diagnostics import ConsoleDiagnostics, Diagnostics
from itl.errors import ItlRuntimeError
from itl.evaluation import evaluator
from itl.evaluation.resolver import Resolver
from itl.reader.lexer import lex
from itl.reader.parser import parse
from itl.reader.tokens import Token, TokenType
from itl.types.callable import NativeFunction
from itl.types.environment import Environment
from itl.types.nodes import Stmt, first_line
from itl.types.signal import ReturnValue


class Interpreter:
    """
    Runs ITL source through lexing, parsing, resolution and evaluation.
    Keeps the global Environment and the resolution table across runs, so an
    interactive session can build on earlier input.
    """

    def __init__(
        self,
        output: Callable[[str], None] | None = None,
        diagnostics: Diagnostics | None = None,
        natives: Mapping[str, NativeFunction] | None = None,
        prelude: str | None | Literal['auto'] = 'auto',
    ):
        self.output: Callable[[str], None] = output if output is not None else print
        self.diagnostics: Diagnostics = (
            diagnostics if diagnostics is not None else ConsoleDiagnostics()
        )
        self.globals: Environment = Environment()
        register(self.globals, natives)
        # node_id -> scope distance, filled by the resolver
        self.locals: dict[int, int] = {}

        if prelude is None:
            pass  # explicit: no prelude
        elif prelude == 'auto':
            # Lazy import to avoid circular imports
            from itl.interpreter.prelude import load_prelude
            load_prelude(self)
        elif prelude:
            self.eval_prelude(prelude)

    def eval_prelude(self, code: str) -> None:
        self.run(code)

    def run(self, source: str) -> None:
        """Lex, parse, resolve and interpret `source`.

        Static errors stop the run before anything executes; a runtime error
        stops it at the failing statement. Both go to the diagnostic sink.
        """
        self.diagnostics.reset()
        tokens = lex(source, self.diagnostics)
        statements = parse(tokens, self.diagnostics)
        if self.diagnostics.had_error:
            return

        Resolver(self.locals, self.diagnostics).resolve(statements)
        if self.diagnostics.had_error:
            return

        self.interpret(statements)

    def interpret(self, statements: Iterable[Stmt]) -> None:
        try:
            for stmt in statements:
                try:
                    evaluator.execute(stmt, self.globals, self)
                except RecursionError:
                    # Deep nesting outside any call; calls report their own overflow
                    where = Token(TokenType.EOF, "", None, first_line(stmt))
                    raise ItlRuntimeError(where, "Stack overflow.") from None
        except ItlRuntimeError as error:
            self.diagnostics.runtime_error(error)

    def execute_block(self, statements: Iterable[Stmt], env: Environment) -> Optional[ReturnValue]:
        return evaluator.execute_block(statements, env, self)

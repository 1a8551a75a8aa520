"""Command-line driver for ITL: runs a script file, or starts the interactive
shell when no file is given. Exit codes follow sysexits: 64 for bad usage,
65 for static errors in the script, 70 for a runtime error.
"""

from __future__ import annotations

import argparse
import cmd
import sys
from pathlib import Path
from typing import Optional, Sequence

from itl.interpreter import Interpreter

EX_USAGE = 64
EX_DATAERR = 65
EX_SOFTWARE = 70


class Shell(cmd.Cmd):
    """Interactive ITL shell. Every line is a separate run over one interpreter."""
    intro = "ITL interpreter\nType ITL statements, or Ctrl-D to exit."
    prompt = "> "

    def __init__(self, interpreter: Interpreter, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.interpreter = interpreter

    def default(self, line):
        """Runs the line as ITL source."""
        self.interpreter.run(line)

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return False

    def do_help(self, arg):
        """Short intro rather than per-command docs."""
        print("Statements end with ';'. Try: var a = 1; print a + 2;")

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return True

    # cmd treats a leading word as a command name; route everything else to ITL
    def onecmd(self, line):
        name = line.strip()
        if name in ("EOF", "help", "?"):
            return super().onecmd(line)
        if not name:
            return self.emptyline()
        self.default(line)
        return False


def run_file(interpreter: Interpreter, path: Path) -> int:
    source = path.read_text(encoding="utf-8")
    interpreter.run(source)
    if interpreter.diagnostics.had_error:
        return EX_DATAERR
    if interpreter.diagnostics.had_runtime_error:
        return EX_SOFTWARE
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="itl", description="Run ITL scripts.")
    parser.add_argument("script", nargs="*", help="file to run (if empty, starts the interactive shell)")
    args = parser.parse_args(argv)

    if len(args.script) > 1:
        print("Usage: itl [script]", file=sys.stderr)
        return EX_USAGE

    interpreter = Interpreter()
    if args.script:
        return run_file(interpreter, Path(args.script[0]))

    Shell(interpreter).cmdloop()
    return 0


if __name__ == "__main__":
    sys.exit(main())

from __future__ import annotations
from pathlib import Path
from typing import Protocol

from itl.config import get_prelude_root


class _HasEvalPrelude(Protocol):
    def eval_prelude(self, code: str) -> None: ...


def prelude_files(root: Path | None = None) -> list[Path]:
    """Every `.itl` file directly under the prelude root, in name order."""
    root = get_prelude_root() if root is None else root
    if not root.is_dir():
        return []
    return sorted(p for p in root.glob('*.itl') if p.is_file())


def load_prelude(itp: _HasEvalPrelude, root: Path | None = None) -> None:
    for path in prelude_files(root):
        itp.eval_prelude(path.read_text(encoding='utf-8'))

"""ITL Language Server package.

This package provides:
- A pygls-based Language Server for ITL.
- A static indexer that runs the lexer, parser and resolver without evaluating.
"""

__all__ = [
    "server",
    "indexer",
]

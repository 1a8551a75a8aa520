"""Host settings read from the process environment.

ITL_PRELUDE_PATH  directory of prelude scripts (a file path selects its directory)
ITL_COLOR         "0" turns colored diagnostics off, anything else turns them on
"""
from __future__ import annotations

import os
import sys
from pathlib import Path

BUNDLED_PRELUDE_DIR = Path(__file__).resolve().parent / 'prelude'


def get_prelude_root() -> Path:
    raw = os.environ.get('ITL_PRELUDE_PATH', '').strip()
    if not raw:
        return BUNDLED_PRELUDE_DIR
    root = Path(raw).expanduser()
    # A missing directory is returned as is and simply yields no prelude files
    return root.parent if root.is_file() else root


def use_color() -> bool:
    raw = os.environ.get('ITL_COLOR')
    if raw is not None:
        return raw.strip() != '0'
    return sys.stderr.isatty()

from __future__ import annotations

import os
from contextlib import suppress
from pathlib import Path
from typing import Optional


def ensure_dir(path: Path, mode: int = 0o755) -> None:
    if path.is_dir():
        return
    path.mkdir(parents=True, exist_ok=True)
    if mode is not None:
        os.chmod(path, mode)


def write_text_atomic(path: Path, text: str, mode: int = 0o644) -> None:
    """Write next to ``path`` and move into place; no temp file survives a failure."""
    tmp = path.with_name(f".{path.name}.tmp")
    try:
        tmp.write_text(text, encoding="utf-8")
        os.chmod(tmp, mode)
        os.replace(tmp, path)
    except BaseException:
        with suppress(OSError):
            tmp.unlink()
        raise


def read_if_exists(path: Path) -> Optional[str]:
    """Content of ``path``, or None when nothing is there. Other errors propagate."""
    if not path.exists():
        return None
    return path.read_text(encoding="utf-8")

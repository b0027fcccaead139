"""Atomic persistence of generated declaration documents."""

from __future__ import annotations

import os
from pathlib import Path
import stat
import sys
import tempfile

from .logging import get_logger

logger = get_logger("writer")


def atomic_write(path: Path, text: str) -> Path:
    """Write ``text`` to ``path`` through a sibling temporary file and rename.

    Readers see either the previous document or the complete new one. The
    written file keeps the permissions of the document it replaces, or gets
    the umask default when it is new. On any failure the temporary file is
    removed and the error propagates.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    mode = _target_mode(path)
    tmp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            dir=str(path.parent),
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        ) as handle:
            tmp_path = Path(handle.name)
            handle.write(text)
            handle.flush()
        # NamedTemporaryFile creates 0600 files.
        os.chmod(tmp_path, mode)
        tmp_path.replace(path)
    finally:
        if tmp_path is not None and sys.exc_info()[0] is not None:
            tmp_path.unlink(missing_ok=True)
    logger.debug("Wrote %d bytes to %s (mode %o)", len(text.encode("utf-8")), path, mode)
    return path


def _target_mode(path: Path) -> int:
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


__all__ = ["atomic_write"]

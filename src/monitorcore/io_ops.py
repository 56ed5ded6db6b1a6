"""File output helpers for generated artifacts."""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path


def atomic_write_with_backup(path: Path, content: str, backup: bool = False) -> int:
    """
    Write file atomically, optionally keeping a ``.bak`` copy of the old one.

    Returns:
        Number of bytes written
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    if path.exists() and backup:
        backup_path = path.with_suffix(path.suffix + ".bak")
        shutil.copy2(path, backup_path)

    data = content.encode("utf-8")

    # Write to temp file then rename
    fd, temp_path = tempfile.mkstemp(dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        if path.exists():
            shutil.copymode(path, temp_path)
        os.replace(temp_path, path)
    except Exception:
        os.unlink(temp_path)
        raise
    return len(data)

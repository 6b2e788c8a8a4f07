'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

import os
import uuid
from pathlib import Path
from typing import Union

Pathish = Union[str, Path]

__all__ = ["fsync_dir", "atomic_write_text"]


def fsync_dir(dir_path: Pathish) -> None:
    """
    Fsync a directory to persist metadata updates (e.g., renames).
    Safe no-op if the directory doesn't exist.
    """
    d = Path(dir_path)
    if not d.exists():
        return
    fd = os.open(str(d), os.O_RDONLY)
    try:
        os.fsync(fd)
    finally:
        os.close(fd)


def _write_tmp_and_replace(dst_path: Path, data: bytes) -> None:
    """
    Internal helper:
      - create a temp file in dst directory
      - write data, fsync temp
      - os.replace -> dst
      - fsync directory
    """
    dst_dir = dst_path.parent
    dst_dir.mkdir(parents=True, exist_ok=True)
    tmp_name = f".{dst_path.name}.tmp-{os.getpid()}-{uuid.uuid4().hex[:8]}"
    tmp_path = dst_dir / tmp_name

    try:
        with open(tmp_path, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, dst_path)
        fsync_dir(dst_dir)
    except BaseException:
        # Don't leave the temp file behind, then re-raise
        if tmp_path.exists():
            tmp_path.unlink()
        raise


def atomic_write_text(dst: Pathish, text: str, encoding: str = "utf-8") -> None:
    """
    Atomically write text to dst path (same-dir temp + replace + fsync).
    Newlines are written as given.
    """
    _write_tmp_and_replace(Path(dst), text.encode(encoding))

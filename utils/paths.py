'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Union

Pathish = Union[str, Path]

__all__ = [
    "APP_DIR_NAME",
    "OUTLINE_SCRATCH_NAME",
    "ENTRY_SCRATCH_NAME",
    "cache_dir",
    "scratch_file_path",
]

APP_DIR_NAME = "navedit"
OUTLINE_SCRATCH_NAME = "outline.txt"
ENTRY_SCRATCH_NAME = "entry.txt"


def cache_dir() -> Path:
    """
    Per-user cache directory for the application:
      $XDG_CACHE_HOME/navedit, or ~/.cache/navedit
    Does not create it.
    """
    base = os.environ.get("XDG_CACHE_HOME")
    if not base or not os.path.isabs(base):
        base = str(Path.home() / ".cache")
    return Path(base) / APP_DIR_NAME


def scratch_file_path(name: str, scratch_dir: Optional[Pathish] = None) -> Path:
    """
    Return the path of a named scratch file, creating its directory
    (but not the file). `scratch_dir` overrides the cache directory.
    """
    d = Path(scratch_dir).expanduser() if scratch_dir is not None else cache_dir()
    d.mkdir(parents=True, exist_ok=True)
    return d / name

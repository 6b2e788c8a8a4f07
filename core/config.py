# core/config.py
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from utils.paths import ENTRY_SCRATCH_NAME, OUTLINE_SCRATCH_NAME, scratch_file_path

DEFAULT_EDITOR = "nvim"
DEFAULT_DJVUSED = "djvused"

@dataclass
class NavEditConfig:
    """Settings for one editing session, filled in by the launcher."""
    document: str
    editor: str = DEFAULT_EDITOR
    djvused: str = DEFAULT_DJVUSED
    scratch_dir: Optional[str] = None
    verbosity: int = 0
    log_file: Optional[str] = None

    def outline_scratch_path(self) -> Path:
        """Scratch file handed to djvused set-outline."""
        return scratch_file_path(OUTLINE_SCRATCH_NAME, self.scratch_dir)

    def entry_scratch_path(self) -> Path:
        """Scratch file handed to the external editor."""
        return scratch_file_path(ENTRY_SCRATCH_NAME, self.scratch_dir)

################################################################################################

'''

Copyright 2025 Aaron Vose (avose@aaronvose.net)

Licensed under the LGPL v2.1; see the file 'LICENSE' for details.

This file holds the code for the info / debug logger.

'''

################################################################################################

import inspect
from datetime import datetime
from typing import List, Tuple

################################################################################################

class LogManager():
    """
    Session-wide in-memory log.

    Records are (timestamp, text) tuples shared by every LogManager instance;
    `verbosity` decides which debug levels are kept:
      0 = always, 1 = load / save / edit, 2 = structural edits, 3+ = navigation detail.
    """
    __log = None

    def __init__(self, verbosity: int = 0):
        if LogManager.__log is None:
            LogManager.__log = [(self._now(), "Begin NavEdit Log")]
        self.verbosity = verbosity

    @staticmethod
    def _now() -> str:
        return datetime.now().strftime("%m/%d/%Y %H:%M:%S")

    def add(self, text: str):
        LogManager.__log.append((self._now(), text))

    def debug(self, text: str, level: int = 0):
        if self.verbosity < level:
            return

        # Tag with the caller's file name (no directories)
        caller = inspect.currentframe().f_back
        filename = caller.f_code.co_filename.replace('\\', '/').split('/')[-1] if caller else "unknown"
        self.add(f"[{filename}] {text}")

    def get(self, index: int = None):
        if index is not None:
            return LogManager.__log[index]
        return LogManager.__log.copy()

    def messages(self) -> List[str]:
        """Just the record texts, oldest first."""
        return [text for _, text in LogManager.__log]

    def count(self):
        return len(LogManager.__log)

    def set_verbosity(self, verbosity: int = 0):
        self.verbosity = verbosity

    def clear(self):
        """Clear all log entries."""
        if LogManager.__log is not None:
            LogManager.__log.clear()
            LogManager.__log.append((self._now(), "Log cleared"))

    def write_to_file(self, filepath: str):
        """Write all log entries to a file."""
        records: List[Tuple[str, str]] = LogManager.__log.copy()
        try:
            with open(filepath, 'w', encoding='utf-8') as f:
                for timestamp, message in records:
                    f.write(f"[{timestamp}] {message}\n")
            self.add(f"Log written to file: {filepath}")
        except OSError as e:
            self.add(f"Failed to write log to file '{filepath}': {e}")

################################################################################################

Log = LogManager()

################################################################################################

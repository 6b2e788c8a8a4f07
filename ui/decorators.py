'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from functools import wraps

def check_read_only(method):
    """Decorator to skip a modifying command in read-only mode; the command returns False."""
    @wraps(method)
    def wrapper(self, *args, **kwargs):
        if self.is_read_only():
            self.status = "Read-only: outline cannot be changed"
            return False
        return method(self, *args, **kwargs)
    return wrapper

'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''

# Shared view constants (cell units)
INDENT_COLS = 2
NODE_CLOSED_GLYPH = "▶ "   # right arrow
NODE_OPEN_GLYPH = "▼ "     # down arrow
NODE_LEAF_GLYPH = "  "

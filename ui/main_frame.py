'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
import wx

from ui.outline_editor import EditorState, OutlineEditor
from ui.outline_view import OutlineView


class MainFrame(wx.Frame):
    """Main application frame for NavEdit: one outline view plus a status bar."""
    def __init__(self, editor: OutlineEditor):
        super().__init__(None, title="NavEdit", size=(700, 600))
        self.SetMinSize((400, 300))
        self.editor = editor

        self.CreateStatusBar()
        self.view = OutlineView(self, editor, on_change=self._on_editor_changed)

        sizer = wx.BoxSizer(wx.VERTICAL)
        sizer.Add(self.view, 1, wx.EXPAND)
        self.SetSizer(sizer)

        self._update_title()
        self.SetStatusText(editor.status or "Ready.")
        self.Bind(wx.EVT_CLOSE, self._on_close)
        self.view.SetFocus()

    def _update_title(self):
        mark = "*" if self.editor.modified else ""
        self.SetTitle(f"NavEdit - {mark}{self.editor.document}")

    def _on_editor_changed(self):
        self._update_title()
        if self.editor.status:
            self.SetStatusText(self.editor.status)

    def _on_close(self, event):
        """Ask before dropping unsaved outline changes."""
        if self.editor.modified and event.CanVeto():
            answer = wx.MessageBox(
                "The outline has unsaved changes. Quit anyway?",
                "Unsaved Changes",
                wx.YES_NO | wx.ICON_QUESTION,
                self,
            )
            if answer != wx.YES:
                self.editor.state = EditorState.NAVIGATING
                event.Veto()
                return
        event.Skip()

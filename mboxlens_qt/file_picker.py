from PySide6.QtWidgets import QFileDialog

from mboxlens.domain.helpers import build_dialog_filter


class QtFilePicker:
    """Modal open/save dialogs returning a chosen path or None."""

    def __init__(self, parent=None):
        self.parent = parent

    def open_file(self, filters):
        path, _ = QFileDialog.getOpenFileName(self.parent, "Open MBOX File", "", build_dialog_filter(filters))
        return path or None

    def save_file(self, default_name, filters):
        path, _ = QFileDialog.getSaveFileName(
            self.parent, "Save Attachment", default_name or "", build_dialog_filter(filters)
        )
        return path or None


__all__ = ["QtFilePicker"]

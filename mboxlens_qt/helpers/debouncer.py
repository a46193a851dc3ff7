from collections.abc import Callable

from PySide6.QtCore import QObject, QTimer


class Debouncer:
    """Delivers only the last value pushed within a quiet window."""

    def __init__(self, interval_ms: int, callback: Callable[[object], None], parent: QObject | None = None) -> None:
        self.callback = callback
        self._pending = None
        self._has_pending = False
        self._timer = QTimer(parent)
        self._timer.setSingleShot(True)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._fire)

    @property
    def pending(self) -> bool:
        return self._has_pending

    def push(self, value: object) -> None:
        self._pending = value
        self._has_pending = True
        self._timer.start()

    def cancel(self) -> None:
        self._timer.stop()
        self._pending = None
        self._has_pending = False

    def flush(self) -> None:
        if not self._has_pending:
            return
        self._timer.stop()
        self._fire()

    def _fire(self) -> None:
        if not self._has_pending:
            return
        value = self._pending
        self._pending = None
        self._has_pending = False
        self.callback(value)


__all__ = ["Debouncer"]

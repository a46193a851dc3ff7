from mboxlens_qt.helpers.debouncer import Debouncer
from mboxlens_qt.helpers.worker_manager import WorkerManager

__all__ = ["Debouncer", "WorkerManager"]

import logging

from PySide6.QtCore import QThreadPool

from mboxlens.constants import QT_THREAD_POOL_MAX_WORKERS
from mboxlens.infra.byte_sink import FileByteSink
from mboxlens.infra.mail_store_client import MailStoreClient
from mboxlens.infra.settings_store import RecentFilesStore, Settings
from mboxlens_qt.file_picker import QtFilePicker
from mboxlens_qt.helpers.worker_manager import WorkerManager
from mboxlens_qt.state_controller import MboxStateController

logger = logging.getLogger(__name__)


def build_state_controller(parent=None, settings=None, mail_store=None):
    """Wire the controller to its production collaborators."""
    settings = settings or Settings()
    if settings.load_error:
        logger.warning("Settings fell back to defaults: %s", settings.load_error)

    thread_pool = QThreadPool(parent)
    thread_pool.setMaxThreadCount(QT_THREAD_POOL_MAX_WORKERS)
    mail_store = mail_store or MailStoreClient(base_url=settings.get("mail_store_url"))

    controller = MboxStateController(
        mail_store=mail_store,
        settings_store=RecentFilesStore(settings),
        file_picker=QtFilePicker(parent),
        byte_sink=FileByteSink(),
        workers=WorkerManager(thread_pool),
        parent=parent,
    )
    return controller


__all__ = ["build_state_controller"]

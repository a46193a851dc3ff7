from dataclasses import replace
import logging

from PySide6.QtCore import QObject, Signal

from mboxlens.constants import EMAIL_PAGE_SIZE, SEARCH_DEBOUNCE_MS, SEARCH_RESULT_LIMIT
from mboxlens.domain.models import PaginationCursor
from mboxlens.domain.state import MboxState
from mboxlens.errors import error_message
from mboxlens_qt.helpers.debouncer import Debouncer
from mboxlens_qt.mixins import (
    ArchiveMixin,
    EmailDetailMixin,
    EmailListMixin,
    RecentFilesMixin,
    SearchMixin,
)

logger = logging.getLogger(__name__)


class MboxStateController(
    ArchiveMixin,
    EmailListMixin,
    SearchMixin,
    EmailDetailMixin,
    RecentFilesMixin,
    QObject,
):
    """Single owner of the application state for an open MBOX archive.

    Remote calls run through ``workers``; their results are applied on the
    controller's thread, one at a time. Every mutation replaces the immutable
    ``MboxState`` snapshot and emits ``state_changed`` with it. Public methods
    never raise for collaborator failures: they write one message into
    ``state.error`` instead.

    Collaborators:
        mail_store: ``open_mbox``, ``get_emails``, ``get_email_body``,
            ``search_emails``, ``get_emails_by_label``, ``get_attachment``,
            ``close_mbox``.
        settings_store: ``load_recent_files``, ``save_recent_files``.
        file_picker: ``open_file(filters)``, ``save_file(default_name, filters)``.
        byte_sink: ``write(path, data)``.
        workers: ``submit(fn, on_result, on_error)``.
    """

    state_changed = Signal(object)

    def __init__(
        self,
        mail_store,
        settings_store,
        file_picker,
        byte_sink,
        workers,
        page_size=EMAIL_PAGE_SIZE,
        search_debounce_ms=SEARCH_DEBOUNCE_MS,
        search_limit=SEARCH_RESULT_LIMIT,
        parent=None,
    ):
        super().__init__(parent)
        self.mail_store = mail_store
        self.settings_store = settings_store
        self.file_picker = file_picker
        self.byte_sink = byte_sink
        self.workers = workers
        self.page_size = max(1, int(page_size))
        self.search_limit = search_limit

        self._state = MboxState(pagination=PaginationCursor(page_size=self.page_size))
        self._open_token = 0
        self._list_token = 0
        self._body_token = 0
        self._search_id = 0
        self._search_in_flight = False
        self._last_search_query = None
        self._search_debouncer = Debouncer(search_debounce_ms, self._on_search_debounced, parent=self)

    @property
    def state(self):
        return self._state

    def _update(self, **changes):
        self._state = replace(self._state, **changes)
        self.state_changed.emit(self._state)

    def _submit(self, fn, on_result, on_error):
        self.workers.submit(fn, on_result, on_error)

    def _record_error(self, prefix, exc):
        message = f"{prefix}: {error_message(exc)}"
        logger.warning(message)
        self._update(error=message)

    def clear_error(self):
        self._update(error=None)


__all__ = ["MboxStateController"]

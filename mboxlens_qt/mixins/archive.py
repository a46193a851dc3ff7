import logging

from mboxlens.constants import MBOX_FILE_FILTERS

logger = logging.getLogger(__name__)


class ArchiveMixin:
    def initialize(self):
        try:
            recent_files = self.settings_store.load_recent_files()
        except Exception as exc:
            logger.error("Failed to read recent files: %s", exc)
            self._mark_initialized()
            return

        self._update(recent_files=tuple(recent_files))
        if recent_files:
            self.load_mbox(recent_files[0].path, on_done=self._mark_initialized)
        else:
            self._mark_initialized()

    def _mark_initialized(self):
        self._update(is_initialized=True)

    def open_file(self):
        try:
            selected = self.file_picker.open_file(MBOX_FILE_FILTERS)
        except Exception as exc:
            self._record_error("Failed to open file dialog", exc)
            return
        if selected:
            self.load_mbox(selected)

    def load_mbox(self, path, on_done=None):
        self._open_token += 1
        token = self._open_token
        self._update(loading_file=True, error=None)

        def _finish():
            if token == self._open_token:
                self._update(loading_file=False)
            if on_done is not None:
                on_done()

        def _on_opened(stats):
            if token != self._open_token:
                logger.debug("Dropping superseded open result for %s", path)
                _finish()
                return
            self._supersede_search()
            self._body_token += 1
            self._update(
                stats=stats,
                current_path=path,
                search_query="",
                selected_label=None,
                search_results_count=None,
                is_searching=False,
                selected_email=None,
                selected_email_body=None,
                loading_email_body=False,
            )
            self._add_to_recent_files(path)
            self.load_emails(on_done=_finish)

        def _on_failed(exc):
            if token != self._open_token:
                logger.debug("Dropping superseded open failure for %s: %s", path, exc)
                _finish()
                return
            self._record_error("Failed to open MBOX", exc)
            self._reset_archive_state()
            self.remove_from_recent_files(path)
            _finish()

        logger.info("Opening MBOX %s", path)
        self._submit(lambda: self.mail_store.open_mbox(path), _on_opened, _on_failed)

    def close_file(self):
        def _on_closed(_payload):
            logger.info("Closed MBOX %s", self._state.current_path)
            self._reset_archive_state()

        self._submit(
            self.mail_store.close_mbox,
            _on_closed,
            lambda exc: self._record_error("Failed to close file", exc),
        )

    def _reset_archive_state(self):
        self._supersede_search()
        self._next_list_token()
        self._body_token += 1
        self._update(
            stats=None,
            emails=(),
            pagination=self._empty_cursor(),
            loading_emails=False,
            loading_more=False,
            selected_email=None,
            selected_email_body=None,
            loading_email_body=False,
            search_query="",
            selected_label=None,
            search_results_count=None,
            is_searching=False,
            current_path=None,
        )

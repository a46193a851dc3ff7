import logging

from mboxlens.domain.models import PaginationCursor, compute_has_more

logger = logging.getLogger(__name__)


class EmailListMixin:
    """Visible-list loading: first page, incremental pages and label filters.

    Every operation that replaces the visible list takes a new list token.
    A result is applied only while its token is still current, so a slow
    page or label fetch can never overwrite a newer list.
    """

    def _next_list_token(self):
        self._list_token += 1
        return self._list_token

    def _empty_cursor(self):
        return PaginationCursor(offset=0, page_size=self.page_size, has_more=False)

    def _total_messages(self):
        stats = self._state.stats
        if stats is None:
            return 0
        return stats.total_messages

    def _cursor_after_page(self, offset, fetched):
        return PaginationCursor(
            offset=offset + fetched,
            page_size=self.page_size,
            has_more=compute_has_more(offset, fetched, self._total_messages()),
        )

    def load_emails(self, on_done=None):
        token = self._next_list_token()
        page_size = self.page_size
        self._update(loading_emails=True, loading_more=False, pagination=self._empty_cursor())

        def _on_loaded(emails):
            if token != self._list_token:
                logger.debug("Dropping stale email page (token %s, current %s)", token, self._list_token)
            else:
                self._update(
                    emails=tuple(emails),
                    loading_emails=False,
                    pagination=self._cursor_after_page(0, len(emails)),
                )
            if on_done is not None:
                on_done()

        def _on_failed(exc):
            if token == self._list_token:
                self._update(loading_emails=False)
                self._record_error("Failed to load emails", exc)
            if on_done is not None:
                on_done()

        self._submit(lambda: self.mail_store.get_emails(0, page_size), _on_loaded, _on_failed)

    def load_more_emails(self):
        state = self._state
        if state.loading_more or not state.pagination.has_more or state.stats is None:
            return

        token = self._list_token
        offset = state.pagination.offset
        page_size = self.page_size
        self._update(loading_more=True)

        def _on_page(emails):
            if token != self._list_token:
                logger.debug("Dropping page at offset %s for a replaced list", offset)
                return
            self._update(
                emails=self._state.emails + tuple(emails),
                loading_more=False,
                pagination=self._cursor_after_page(offset, len(emails)),
            )

        def _on_failed(exc):
            if token != self._list_token:
                return
            self._update(loading_more=False)
            self._record_error("Failed to load more emails", exc)

        self._submit(lambda: self.mail_store.get_emails(offset, page_size), _on_page, _on_failed)

    def filter_by_label(self, label):
        if self._state.stats is None:
            logger.debug("Ignoring label filter %r with no archive open", label)
            return
        self._supersede_search()
        self._update(selected_label=label, search_query="", search_results_count=None, is_searching=False)
        if not label:
            self.load_emails()
            return

        token = self._next_list_token()
        self._update(loading_emails=True, loading_more=False, pagination=self._empty_cursor())

        def _on_loaded(emails):
            if token != self._list_token:
                logger.debug("Dropping stale label results for %s", label)
                return
            self._update(
                emails=tuple(emails),
                loading_emails=False,
                pagination=PaginationCursor(offset=len(emails), page_size=self.page_size, has_more=False),
            )

        def _on_failed(exc):
            if token != self._list_token:
                return
            self._update(loading_emails=False)
            self._record_error("Failed to filter by label", exc)

        self._submit(lambda: self.mail_store.get_emails_by_label(label), _on_loaded, _on_failed)

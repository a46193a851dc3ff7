import logging

from mboxlens.domain.models import PaginationCursor

logger = logging.getLogger(__name__)


class SearchMixin:
    """Keystroke-driven search.

    ``search`` only records the query and feeds the debouncer. Each debounced
    query runs as a session with a strictly increasing id; results, errors and
    the end of ``is_searching`` are applied only for the latest session.
    """

    def search(self, query):
        changes = {"search_query": query, "selected_label": None, "is_searching": True}
        if self._state.selected_label is not None:
            # Drop any label fetch still in flight for the filter being cleared.
            self._next_list_token()
            changes.update(loading_emails=False, loading_more=False)
        self._update(**changes)
        self._search_debouncer.push(query)

    def flush_search(self):
        self._search_debouncer.flush()

    def _on_search_debounced(self, query):
        if query == self._last_search_query:
            if not self._search_in_flight:
                self._update(is_searching=False)
            return
        self._last_search_query = query
        self._execute_search(query)

    def _supersede_search(self):
        self._search_debouncer.cancel()
        self._search_id += 1
        self._search_in_flight = False
        self._last_search_query = None

    def _is_latest_search(self, search_id):
        return search_id == self._search_id

    def _finish_search(self, search_id):
        if not self._is_latest_search(search_id):
            return
        self._search_in_flight = False
        self._update(is_searching=False)

    def _execute_search(self, query):
        self._search_id += 1
        search_id = self._search_id
        self._search_in_flight = True

        if not query.strip():
            self._update(search_results_count=None)
            self.load_emails(on_done=lambda: self._finish_search(search_id))
            return

        token = self._next_list_token()
        limit = self.search_limit
        # A first page still in flight for the replaced list would never clear this.
        self._update(loading_emails=False, loading_more=False)

        def _on_results(results):
            if self._is_latest_search(search_id) and token == self._list_token:
                self._update(
                    emails=tuple(results.emails),
                    search_results_count=results.total_count,
                    pagination=PaginationCursor(
                        offset=len(results.emails), page_size=self.page_size, has_more=False
                    ),
                )
            else:
                logger.debug("Discarding results of superseded search session %s", search_id)
            self._finish_search(search_id)

        def _on_failed(exc):
            if self._is_latest_search(search_id):
                self._record_error("Search failed", exc)
            self._finish_search(search_id)

        logger.debug("Search session %s: %r", search_id, query)
        self._submit(lambda: self.mail_store.search_emails(query, limit), _on_results, _on_failed)

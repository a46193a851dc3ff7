import logging
import threading

import requests

from mboxlens.constants import (
    DEFAULT_MAIL_STORE_URL,
    HTTP_CONNECT_TIMEOUT_SEC,
    HTTP_GET_RETRIES,
    HTTP_READ_TIMEOUT_SEC,
)
from mboxlens.domain.models import EmailBody, EmailEntry, LabelCount, MboxStats, SearchResults
from mboxlens.errors import MailStoreError

logger = logging.getLogger(__name__)

# Commands that only read backend state and are safe to resend after a transport failure.
READ_ONLY_COMMANDS = frozenset(
    {
        "get_emails",
        "get_email_count",
        "get_email_body",
        "search_emails",
        "get_emails_by_label",
        "get_attachment",
        "get_labels",
    }
)


class MailStoreClient:
    """Call surface over the mail-store backend that parses and indexes MBOX files.

    Every command is a JSON POST to ``{base_url}/commands/{name}``. Calls are
    blocking and carry no cache; run them off the UI thread.
    """

    def __init__(
        self,
        base_url=None,
        session=None,
        request_timeout=(HTTP_CONNECT_TIMEOUT_SEC, HTTP_READ_TIMEOUT_SEC),
        get_retries=HTTP_GET_RETRIES,
    ):
        self.base_url = (base_url or DEFAULT_MAIL_STORE_URL).rstrip("/")
        self.session = session or requests.Session()
        self.request_timeout = request_timeout
        self.get_retries = max(0, int(get_retries or 0))
        self._session_lock = threading.Lock()

    def _url(self, command):
        return f"{self.base_url}/commands/{command}"

    @staticmethod
    def _error_text(response):
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict) and payload.get("error"):
            return str(payload["error"])
        reason = getattr(response, "reason", "") or ""
        return f"HTTP {response.status_code} {reason}".strip()

    def _request(self, command, args=None):
        transport_retries = self.get_retries if command in READ_ONLY_COMMANDS else 0
        attempt = 0
        url = self._url(command)

        while True:
            try:
                with self._session_lock:
                    resp = self.session.request(
                        "POST",
                        url,
                        json=args or {},
                        timeout=self.request_timeout,
                    )
            except (requests.exceptions.Timeout, requests.exceptions.ConnectionError) as exc:
                if attempt >= transport_retries:
                    raise MailStoreError(command, f"Mail store unreachable: {exc}") from exc
                attempt += 1
                logger.debug("Retrying %s after transport failure (%s/%s)", command, attempt, transport_retries)
                continue

            if resp.status_code >= 400:
                raise MailStoreError(command, self._error_text(resp))
            return resp

    def _call(self, command, args=None):
        resp = self._request(command, args)
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            raise MailStoreError(command, f"Invalid JSON response from mail store command: {command}") from exc

    def open_mbox(self, path):
        return MboxStats.from_payload(self._call("open_mbox", {"path": path}))

    def get_emails(self, offset, limit):
        payload = self._call("get_emails", {"offset": offset, "limit": limit})
        return [EmailEntry.from_payload(item) for item in payload or []]

    def get_email_count(self):
        payload = self._call("get_email_count")
        if isinstance(payload, bool) or not isinstance(payload, int):
            raise MailStoreError("get_email_count", "Email count must be an integer.")
        return payload

    def get_email_body(self, index):
        return EmailBody.from_payload(self._call("get_email_body", {"index": index}))

    def search_emails(self, query, limit):
        return SearchResults.from_payload(self._call("search_emails", {"query": query, "limit": limit}))

    def get_emails_by_label(self, label):
        payload = self._call("get_emails_by_label", {"label": label})
        return [EmailEntry.from_payload(item) for item in payload or []]

    def get_attachment(self, email_index, attachment_index):
        command = "get_attachment"
        resp = self._request(command, {"emailIndex": email_index, "attachmentIndex": attachment_index})
        content_type = (resp.headers.get("Content-Type") or "").split(";", 1)[0].strip().lower()
        if content_type != "application/json":
            return bytes(resp.content)
        try:
            payload = resp.json()
            if not isinstance(payload, list):
                raise TypeError("not a list")
            return bytes(payload)
        except (TypeError, ValueError) as exc:
            raise MailStoreError(command, "Attachment payload must be a list of byte values.") from exc

    def get_labels(self):
        payload = self._call("get_labels")
        return [LabelCount.from_payload(item) for item in payload or []]

    def close_mbox(self):
        self._request("close_mbox")


__all__ = ["MailStoreClient", "READ_ONLY_COMMANDS"]

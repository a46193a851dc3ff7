"""Value types exchanged with the mail-store backend.

Payloads arrive as JSON objects whose keys follow the backend's snake_case
naming. Each ``from_payload`` constructor validates shape and raises
``ValidationError`` rather than letting a malformed record reach UI state.
"""

from dataclasses import dataclass

from mboxlens.errors import ValidationError


def _require_mapping(payload, kind):
    if not isinstance(payload, dict):
        raise ValidationError(f"{kind} payload must be an object.")
    return payload


def _int_field(payload, key, kind):
    value = payload.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{kind}.{key} must be an integer.")
    return value


def _str_field(payload, key, kind, default=None):
    value = payload.get(key, default)
    if not isinstance(value, str):
        raise ValidationError(f"{kind}.{key} must be a string.")
    return value


def _optional_str_field(payload, key, kind):
    value = payload.get(key)
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{kind}.{key} must be a string or null.")
    return value


def _list_field(payload, key, kind):
    value = payload.get(key) or []
    if not isinstance(value, list):
        raise ValidationError(f"{kind}.{key} must be a list.")
    return value


@dataclass(frozen=True)
class EmailAddress:
    name: str
    address: str

    @classmethod
    def from_payload(cls, payload):
        payload = _require_mapping(payload, "EmailAddress")
        return cls(
            name=_str_field(payload, "name", "EmailAddress", ""),
            address=_str_field(payload, "address", "EmailAddress", ""),
        )


@dataclass(frozen=True)
class EmailEntry:
    index: int
    offset: int
    length: int
    date: str
    from_name: str
    from_address: str
    to: tuple = ()
    cc: tuple = ()
    subject: str = ""
    has_attachments: bool = False
    labels: tuple = ()

    @classmethod
    def from_payload(cls, payload):
        payload = _require_mapping(payload, "EmailEntry")
        labels = _list_field(payload, "labels", "EmailEntry")
        if not all(isinstance(label, str) for label in labels):
            raise ValidationError("EmailEntry.labels must contain strings.")
        return cls(
            index=_int_field(payload, "index", "EmailEntry"),
            offset=_int_field(payload, "offset", "EmailEntry"),
            length=_int_field(payload, "length", "EmailEntry"),
            date=_str_field(payload, "date", "EmailEntry", ""),
            from_name=_str_field(payload, "from_name", "EmailEntry", ""),
            from_address=_str_field(payload, "from_address", "EmailEntry", ""),
            to=tuple(EmailAddress.from_payload(item) for item in _list_field(payload, "to", "EmailEntry")),
            cc=tuple(EmailAddress.from_payload(item) for item in _list_field(payload, "cc", "EmailEntry")),
            subject=_str_field(payload, "subject", "EmailEntry", ""),
            has_attachments=bool(payload.get("has_attachments")),
            labels=tuple(labels),
        )


@dataclass(frozen=True)
class AttachmentInfo:
    filename: str
    content_type: str
    size: int
    part_index: int

    @classmethod
    def from_payload(cls, payload):
        payload = _require_mapping(payload, "AttachmentInfo")
        return cls(
            filename=_str_field(payload, "filename", "AttachmentInfo", ""),
            content_type=_str_field(payload, "content_type", "AttachmentInfo", "application/octet-stream"),
            size=_int_field(payload, "size", "AttachmentInfo"),
            part_index=_int_field(payload, "part_index", "AttachmentInfo"),
        )


@dataclass(frozen=True)
class EmailBody:
    text: str | None
    html: str | None
    raw_headers: str
    attachments: tuple = ()

    @classmethod
    def from_payload(cls, payload):
        payload = _require_mapping(payload, "EmailBody")
        return cls(
            text=_optional_str_field(payload, "text", "EmailBody"),
            html=_optional_str_field(payload, "html", "EmailBody"),
            raw_headers=_str_field(payload, "raw_headers", "EmailBody", ""),
            attachments=tuple(
                AttachmentInfo.from_payload(item) for item in _list_field(payload, "attachments", "EmailBody")
            ),
        )


@dataclass(frozen=True)
class LabelCount:
    label: str
    count: int

    @classmethod
    def from_payload(cls, payload):
        payload = _require_mapping(payload, "LabelCount")
        return cls(
            label=_str_field(payload, "label", "LabelCount"),
            count=_int_field(payload, "count", "LabelCount"),
        )


@dataclass(frozen=True)
class MboxStats:
    total_messages: int
    total_with_attachments: int
    labels: tuple = ()

    @classmethod
    def from_payload(cls, payload):
        payload = _require_mapping(payload, "MboxStats")
        return cls(
            total_messages=_int_field(payload, "total_messages", "MboxStats"),
            total_with_attachments=_int_field(payload, "total_with_attachments", "MboxStats"),
            labels=tuple(LabelCount.from_payload(item) for item in _list_field(payload, "labels", "MboxStats")),
        )


@dataclass(frozen=True)
class SearchResults:
    emails: tuple
    total_count: int

    @classmethod
    def from_payload(cls, payload):
        payload = _require_mapping(payload, "SearchResults")
        return cls(
            emails=tuple(EmailEntry.from_payload(item) for item in _list_field(payload, "emails", "SearchResults")),
            total_count=_int_field(payload, "total_count", "SearchResults"),
        )


@dataclass(frozen=True)
class RecentFile:
    path: str
    name: str
    last_opened: str

    @classmethod
    def from_payload(cls, payload):
        payload = _require_mapping(payload, "RecentFile")
        return cls(
            path=_str_field(payload, "path", "RecentFile"),
            name=_str_field(payload, "name", "RecentFile"),
            last_opened=_str_field(payload, "lastOpened", "RecentFile"),
        )

    def to_payload(self):
        return {"path": self.path, "name": self.name, "lastOpened": self.last_opened}


@dataclass(frozen=True)
class PaginationCursor:
    offset: int = 0
    page_size: int = 100
    has_more: bool = False


def compute_has_more(offset, fetched, total):
    """Return whether entries remain after a page of ``fetched`` at ``offset``."""
    if fetched <= 0:
        return False
    return offset + fetched < total


__all__ = [
    "AttachmentInfo",
    "EmailAddress",
    "EmailBody",
    "EmailEntry",
    "LabelCount",
    "MboxStats",
    "PaginationCursor",
    "RecentFile",
    "SearchResults",
    "compute_has_more",
]

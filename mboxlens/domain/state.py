from dataclasses import dataclass, field

from mboxlens.domain.models import EmailBody, EmailEntry, MboxStats, PaginationCursor


@dataclass(frozen=True)
class MboxState:
    """Immutable snapshot of everything the UI observes."""

    loading_file: bool = False
    loading_emails: bool = False
    loading_more: bool = False
    loading_email_body: bool = False
    is_searching: bool = False
    is_initialized: bool = False
    stats: MboxStats | None = None
    emails: tuple = ()
    search_results_count: int | None = None
    selected_email: EmailEntry | None = None
    selected_email_body: EmailBody | None = None
    search_query: str = ""
    selected_label: str | None = None
    current_path: str | None = None
    error: str | None = None
    recent_files: tuple = ()
    pagination: PaginationCursor = field(default_factory=PaginationCursor)

    @property
    def is_file_open(self):
        return self.stats is not None

    @property
    def labels(self):
        if self.stats is None:
            return ()
        return self.stats.labels

    @property
    def has_more(self):
        return self.pagination.has_more


__all__ = ["MboxState"]

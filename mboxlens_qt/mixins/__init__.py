from mboxlens_qt.mixins.archive import ArchiveMixin
from mboxlens_qt.mixins.email_detail import EmailDetailMixin
from mboxlens_qt.mixins.email_list import EmailListMixin
from mboxlens_qt.mixins.recent_files import RecentFilesMixin
from mboxlens_qt.mixins.search import SearchMixin

__all__ = [
    "ArchiveMixin",
    "EmailDetailMixin",
    "EmailListMixin",
    "RecentFilesMixin",
    "SearchMixin",
]

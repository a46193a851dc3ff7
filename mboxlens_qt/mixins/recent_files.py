from datetime import datetime, timezone
import logging

from mboxlens.constants import MAX_RECENT_FILES
from mboxlens.domain.helpers import get_file_name
from mboxlens.domain.models import RecentFile

logger = logging.getLogger(__name__)


def _iso_timestamp():
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class RecentFilesMixin:
    def _add_to_recent_files(self, path):
        entry = RecentFile(path=path, name=get_file_name(path), last_opened=_iso_timestamp())
        existing = [item for item in self._state.recent_files if item.path != path]
        self._store_recent_files([entry, *existing][:MAX_RECENT_FILES])

    def remove_from_recent_files(self, path):
        updated = [item for item in self._state.recent_files if item.path != path]
        self._store_recent_files(updated)

    def _store_recent_files(self, files):
        self._update(recent_files=tuple(files))
        try:
            self.settings_store.save_recent_files(files)
        except Exception as exc:
            logger.warning("Failed to persist recent files: %s", exc)

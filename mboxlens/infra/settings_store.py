import contextlib
import copy
import json
import logging
import os
import tempfile

from mboxlens.constants import DEFAULT_MAIL_STORE_URL, MAX_RECENT_FILES, RECENT_FILES_KEY
from mboxlens.domain.models import RecentFile
from mboxlens.errors import ValidationError
from mboxlens.paths import CONFIG_DIR, SETTINGS_FILE

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS = {
    "mail_store_url": DEFAULT_MAIL_STORE_URL,
    RECENT_FILES_KEY: [],
}


class Settings:
    """Persistent key-value settings backed by a JSON file.

    Keys listed in ``DEFAULT_SETTINGS`` keep their default when the saved
    value has a different JSON type; unknown keys are carried through.
    Writes go to a temporary file that replaces the old one.
    """

    def __init__(self, path=None):
        self.path = path or SETTINGS_FILE
        self.load_error = None
        self.data = copy.deepcopy(DEFAULT_SETTINGS)
        self.load()

    def load(self):
        self.load_error = None
        if not os.path.exists(self.path):
            return
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                saved = json.load(f)
        except (OSError, json.JSONDecodeError, TypeError, ValueError) as exc:
            self.load_error = str(exc)
            logger.warning("Ignoring unreadable settings file %s: %s", self.path, exc)
            return
        if not isinstance(saved, dict):
            self.load_error = "Settings payload must be a JSON object."
            logger.warning("Ignoring settings file %s: %s", self.path, self.load_error)
            return
        for key, value in saved.items():
            default = DEFAULT_SETTINGS.get(key)
            if default is not None and not isinstance(value, type(default)):
                logger.warning("Settings key %r has type %s, keeping default", key, type(value).__name__)
                continue
            self.data[key] = value

    def save(self):
        directory = os.path.dirname(self.path) or CONFIG_DIR
        os.makedirs(directory, exist_ok=True)
        fd, temp_path = tempfile.mkstemp(dir=directory, prefix=os.path.basename(self.path))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self.data, f, indent=2)
            os.replace(temp_path, self.path)
        finally:
            if os.path.exists(temp_path):
                with contextlib.suppress(OSError):
                    os.remove(temp_path)

    def get(self, key, default=None):
        return self.data.get(key, default)

    def set(self, key, value):
        self.data[key] = value
        self.save()


class RecentFilesStore:
    """Loads and saves the bounded recent-files record."""

    def __init__(self, settings):
        self.settings = settings

    def load_recent_files(self):
        raw = self.settings.get(RECENT_FILES_KEY, [])
        try:
            return [RecentFile.from_payload(item) for item in raw]
        except ValidationError as exc:
            logger.warning("Discarding malformed recent files record: %s", exc)
            return []

    def save_recent_files(self, files):
        trimmed = list(files)[:MAX_RECENT_FILES]
        self.settings.set(RECENT_FILES_KEY, [entry.to_payload() for entry in trimmed])
        return trimmed


__all__ = ["DEFAULT_SETTINGS", "RecentFilesStore", "Settings"]

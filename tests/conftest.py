import pytest
from PySide6.QtCore import QCoreApplication

from mboxlens.domain.models import (
    AttachmentInfo,
    EmailBody,
    EmailEntry,
    LabelCount,
    MboxStats,
    RecentFile,
    SearchResults,
)
from mboxlens_qt.state_controller import MboxStateController


def make_entry(index, subject=None, labels=()):
    return EmailEntry(
        index=index,
        offset=index * 1000,
        length=1000,
        date="2024-03-01T10:00:00Z",
        from_name=f"Sender {index}",
        from_address=f"sender{index}@example.com",
        subject=subject or f"Subject {index}",
        labels=tuple(labels),
    )


class DeferredWorkers:
    """Holds submitted jobs until the test resolves them, in any order."""

    def __init__(self):
        self.jobs = []

    def submit(self, fn, on_result, on_error=None):
        self.jobs.append((fn, on_result, on_error))

    @property
    def pending(self):
        return len(self.jobs)

    def run(self, index=0):
        fn, on_result, on_error = self.jobs.pop(index)
        try:
            payload = fn()
        except Exception as exc:
            on_error(exc)
            return
        on_result(payload)

    def run_all(self):
        while self.jobs:
            self.run(0)


class FakeMailStore:
    def __init__(self, total=120):
        self.calls = []
        self.failures = {}
        self.missing_paths = set()
        self.search_results = {}
        self.label_results = {}
        self.attachments = {}
        self.set_total(total)

    def set_total(self, total, reported_total=None):
        self.entries = [make_entry(index) for index in range(total)]
        self.stats = MboxStats(
            total_messages=total if reported_total is None else reported_total,
            total_with_attachments=1,
            labels=(LabelCount("work", 2), LabelCount("personal", 1)),
        )

    def _record(self, command, *args):
        self.calls.append((command, *args))
        exc = self.failures.get(command)
        if exc is not None:
            raise exc

    def calls_for(self, command):
        return [call for call in self.calls if call[0] == command]

    def open_mbox(self, path):
        self._record("open_mbox", path)
        if path in self.missing_paths:
            raise FileNotFoundError(f"No such file: {path}")
        return self.stats

    def get_emails(self, offset, limit):
        self._record("get_emails", offset, limit)
        return self.entries[offset:offset + limit]

    def get_email_body(self, index):
        self._record("get_email_body", index)
        attachment = AttachmentInfo(filename="report.pdf", content_type="application/pdf", size=3, part_index=1)
        return EmailBody(text=f"body {index}", html=None, raw_headers=f"X-Index: {index}", attachments=(attachment,))

    def search_emails(self, query, limit):
        self._record("search_emails", query, limit)
        return self.search_results.get(query, SearchResults(emails=(), total_count=0))

    def get_emails_by_label(self, label):
        self._record("get_emails_by_label", label)
        return list(self.label_results.get(label, []))

    def get_attachment(self, email_index, attachment_index):
        self._record("get_attachment", email_index, attachment_index)
        return self.attachments[(email_index, attachment_index)]

    def close_mbox(self):
        self._record("close_mbox")


class MemoryRecentFilesStore:
    def __init__(self, files=None):
        self.files = list(files or [])
        self.saved = []
        self.load_error = None

    def load_recent_files(self):
        if self.load_error is not None:
            raise self.load_error
        return list(self.files)

    def save_recent_files(self, files):
        self.files = list(files)[:10]
        self.saved.append([entry.path for entry in self.files])
        return self.files


class ScriptedFilePicker:
    def __init__(self):
        self.open_result = None
        self.save_result = None
        self.error = None
        self.calls = []

    def open_file(self, filters):
        self.calls.append(("open", filters))
        if self.error is not None:
            raise self.error
        return self.open_result

    def save_file(self, default_name, filters):
        self.calls.append(("save", default_name, filters))
        if self.error is not None:
            raise self.error
        return self.save_result


class RecordingByteSink:
    def __init__(self):
        self.writes = {}

    def write(self, path, data):
        self.writes[path] = bytes(data)
        return path


class Harness:
    def __init__(self, recent_files=None, page_size=50):
        self.store = FakeMailStore()
        self.workers = DeferredWorkers()
        self.settings = MemoryRecentFilesStore(recent_files)
        self.picker = ScriptedFilePicker()
        self.sink = RecordingByteSink()
        self.states = []
        self.controller = MboxStateController(
            mail_store=self.store,
            settings_store=self.settings,
            file_picker=self.picker,
            byte_sink=self.sink,
            workers=self.workers,
            page_size=page_size,
        )
        self.controller.state_changed.connect(self.states.append)

    @property
    def state(self):
        return self.controller.state

    def open_archive(self, path="/mail/archive.mbox"):
        self.controller.load_mbox(path)
        self.workers.run_all()
        return self.state

    def search_now(self, query):
        self.controller.search(query)
        self.controller.flush_search()


def recent(path, name=None):
    return RecentFile(path=path, name=name or path.rsplit("/", 1)[-1], last_opened="2024-01-01T00:00:00.000Z")


@pytest.fixture(scope="session")
def qt_app():
    return QCoreApplication.instance() or QCoreApplication([])


@pytest.fixture
def harness(qt_app):
    return Harness()


@pytest.fixture
def harness_factory(qt_app):
    return Harness


@pytest.fixture
def entry_factory():
    return make_entry


@pytest.fixture
def recent_factory():
    return recent

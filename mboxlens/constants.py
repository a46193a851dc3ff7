APP_NAME = "MBOX Lens"

DEFAULT_MAIL_STORE_URL = "http://127.0.0.1:8765"
HTTP_CONNECT_TIMEOUT_SEC = 5
HTTP_READ_TIMEOUT_SEC = 120
HTTP_GET_RETRIES = 1

EMAIL_PAGE_SIZE = 100
SEARCH_DEBOUNCE_MS = 150
SEARCH_RESULT_LIMIT = 500

RECENT_FILES_KEY = "recentFiles"
MAX_RECENT_FILES = 10

MBOX_FILE_FILTERS = (
    ("MBOX Files", ("mbox",)),
    ("All Files", ("*",)),
)
ALL_FILES_FILTER = ("All Files", ("*",))

BYTES_PER_KB = 1024
BYTES_PER_MB = 1024 * 1024

QT_THREAD_POOL_MAX_WORKERS = 4

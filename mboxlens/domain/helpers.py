import mimetypes

from mboxlens.constants import ALL_FILES_FILTER, BYTES_PER_KB, BYTES_PER_MB


def get_file_name(path):
    """Return the last path segment, accepting both / and \\ separators."""
    if not path:
        return ""
    segment = path.rstrip("/\\").replace("\\", "/").rsplit("/", 1)[-1]
    return segment or path


def format_size(size_bytes):
    """Format file size for display."""
    if not size_bytes:
        return "0 B"
    if size_bytes < BYTES_PER_KB:
        return f"{size_bytes} B"
    if size_bytes < BYTES_PER_MB:
        return f"{size_bytes / BYTES_PER_KB:.1f} KB"
    return f"{size_bytes / BYTES_PER_MB:.1f} MB"


def build_dialog_filter(filters):
    """Render (name, extensions) pairs as a Qt name-filter string."""
    rendered = []
    for name, extensions in filters or ():
        patterns = " ".join("*" if ext == "*" else f"*.{ext.lstrip('.')}" for ext in extensions)
        rendered.append(f"{name} ({patterns})")
    return ";;".join(rendered)


def extension_for_content_type(content_type):
    base_type = (content_type or "").split(";", 1)[0].strip().lower()
    if not base_type:
        return None
    extension = mimetypes.guess_extension(base_type)
    if not extension:
        return None
    return extension.lstrip(".")


def attachment_save_filters(content_type):
    """Save-dialog filters for an attachment: inferred type first, then wildcard."""
    extension = extension_for_content_type(content_type)
    if not extension:
        return (ALL_FILES_FILTER,)
    return ((f"{extension.upper()} Files", (extension,)), ALL_FILES_FILTER)

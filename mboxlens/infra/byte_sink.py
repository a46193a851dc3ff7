import os


class FileByteSink:
    """Writes downloaded payloads to the local filesystem."""

    def write(self, path, data):
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, "wb") as handle:
            handle.write(data)
        return path


__all__ = ["FileByteSink"]

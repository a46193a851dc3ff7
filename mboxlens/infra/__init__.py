"""Infrastructure modules for mboxlens."""

from . import byte_sink, mail_store_client, settings_store

__all__ = ["byte_sink", "mail_store_client", "settings_store"]

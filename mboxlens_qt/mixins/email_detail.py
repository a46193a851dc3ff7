import logging

from mboxlens.domain.helpers import attachment_save_filters, format_size

logger = logging.getLogger(__name__)


class EmailDetailMixin:
    def select_email(self, email):
        self._body_token += 1
        token = self._body_token
        self._update(selected_email=email, selected_email_body=None, loading_email_body=True)

        def _on_body(body):
            if token != self._body_token:
                logger.debug("Dropping body for email %s; selection moved on", email.index)
                return
            self._update(selected_email_body=body, loading_email_body=False)

        def _on_failed(exc):
            if token != self._body_token:
                return
            self._update(loading_email_body=False)
            self._record_error("Failed to load email", exc)

        self._submit(lambda: self.mail_store.get_email_body(email.index), _on_body, _on_failed)

    def clear_selection(self):
        self._body_token += 1
        self._update(selected_email=None, selected_email_body=None, loading_email_body=False)

    def download_attachment(self, email_index, attachment):
        try:
            target_path = self.file_picker.save_file(
                attachment.filename,
                attachment_save_filters(attachment.content_type),
            )
        except Exception as exc:
            self._record_error("Failed to download attachment", exc)
            return
        if not target_path:
            return

        def _download():
            data = self.mail_store.get_attachment(email_index, attachment.part_index)
            self.byte_sink.write(target_path, data)
            return len(data)

        def _on_saved(size):
            logger.info("Saved attachment %s to %s (%s)", attachment.filename, target_path, format_size(size))

        self._submit(
            _download,
            _on_saved,
            lambda exc: self._record_error("Failed to download attachment", exc),
        )

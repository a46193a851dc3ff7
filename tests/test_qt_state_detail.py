from mboxlens.domain.models import AttachmentInfo


def test_selecting_email_clears_previous_body_immediately(harness):
    harness.open_archive()
    first, second = harness.state.emails[:2]
    harness.controller.select_email(first)
    harness.workers.run_all()
    assert harness.state.selected_email_body.text == "body 0"

    harness.controller.select_email(second)

    assert harness.state.selected_email == second
    assert harness.state.selected_email_body is None
    assert harness.state.loading_email_body is True


def test_late_body_for_previous_selection_is_never_shown(harness):
    harness.open_archive()
    first, second = harness.state.emails[:2]

    harness.controller.select_email(first)
    harness.controller.select_email(second)
    harness.workers.run(0)

    assert harness.state.selected_email == second
    assert harness.state.selected_email_body is None
    assert harness.state.loading_email_body is True

    harness.workers.run(0)

    assert harness.state.selected_email_body.text == "body 1"
    assert harness.state.loading_email_body is False


def test_previous_body_arriving_after_current_is_dropped(harness):
    harness.open_archive()
    first, second = harness.state.emails[:2]

    harness.controller.select_email(first)
    harness.controller.select_email(second)
    harness.workers.run(1)
    harness.workers.run(0)

    assert harness.state.selected_email_body.raw_headers == "X-Index: 1"


def test_body_failure_records_error(harness):
    harness.open_archive()
    harness.store.failures["get_email_body"] = RuntimeError("offset out of range")

    harness.controller.select_email(harness.state.emails[0])
    harness.workers.run_all()

    assert harness.state.error == "Failed to load email: offset out of range"
    assert harness.state.loading_email_body is False
    assert harness.state.selected_email_body is None


def test_clear_selection_drops_pending_body(harness):
    harness.open_archive()
    harness.controller.select_email(harness.state.emails[0])

    harness.controller.clear_selection()
    harness.workers.run_all()

    assert harness.state.selected_email is None
    assert harness.state.selected_email_body is None
    assert harness.state.loading_email_body is False


def test_download_attachment_writes_fetched_bytes(harness):
    harness.open_archive()
    attachment = AttachmentInfo(filename="report.pdf", content_type="application/pdf", size=3, part_index=2)
    harness.store.attachments[(4, 2)] = b"%PDF"
    harness.picker.save_result = "/downloads/report.pdf"
    before = harness.state

    harness.controller.download_attachment(4, attachment)
    harness.workers.run_all()

    assert harness.store.calls_for("get_attachment") == [("get_attachment", 4, 2)]
    assert harness.sink.writes == {"/downloads/report.pdf": b"%PDF"}
    _, default_name, filters = harness.picker.calls[0]
    assert default_name == "report.pdf"
    assert filters[0] == ("PDF Files", ("pdf",))
    assert filters[-1] == ("All Files", ("*",))
    assert harness.state == before


def test_download_attachment_cancelled_fetches_nothing(harness):
    harness.open_archive()
    attachment = AttachmentInfo(filename="notes.txt", content_type="text/plain", size=10, part_index=0)

    harness.controller.download_attachment(1, attachment)

    assert harness.workers.pending == 0
    assert harness.store.calls_for("get_attachment") == []


def test_download_attachment_failure_records_error(harness):
    harness.open_archive()
    attachment = AttachmentInfo(filename="photo.bin", content_type="", size=10, part_index=3)
    harness.store.failures["get_attachment"] = RuntimeError("part not found")
    harness.picker.save_result = "/downloads/photo.bin"

    harness.controller.download_attachment(1, attachment)
    harness.workers.run_all()

    assert harness.state.error == "Failed to download attachment: part not found"
    assert harness.sink.writes == {}
    assert harness.picker.calls[0][2] == (("All Files", ("*",)),)


def test_download_attachment_dialog_failure_records_error(harness):
    harness.open_archive()
    harness.picker.error = RuntimeError("no portal")
    attachment = AttachmentInfo(filename="a.txt", content_type="text/plain", size=1, part_index=0)

    harness.controller.download_attachment(1, attachment)

    assert harness.state.error == "Failed to download attachment: no portal"
    assert harness.workers.pending == 0

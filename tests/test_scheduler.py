# tests/test_scheduler.py

from datetime import datetime

from announcer.scheduler import AnnouncementScheduler, process_scheduled_tasks

from .fakes import FakeResponse, FakeRowsSource, FakeSpeaker


def test_announces_rows_within_threshold(now, speaker, announcement_logger, rows_source_factory):
    source = rows_source_factory([
        [datetime(2023, 10, 1, 10, 0, 0), "msg1"],
        [datetime(2023, 10, 1, 10, 0, 10), "msg2"],
    ])

    results = process_scheduled_tasks(source, speaker, now=now, threshold_ms=35000,
                                      announcement_logger=announcement_logger)

    assert speaker.messages == ["10時ちょうどです。msg1", "10時ちょうどです。msg2"]
    assert [r.status_code for r in results] == [200, 200]
    assert announcement_logger.responses == [
        (200, "OK", "10時ちょうどです。msg1"),
        (200, "OK", "10時ちょうどです。msg2"),
    ]


def test_skips_invalid_and_out_of_threshold(now, speaker, announcement_logger, rows_source_factory):
    source = rows_source_factory([
        ["not a date", "msg1"],
        [datetime(2023, 10, 1, 10, 1, 0), "msg2"],
    ])

    results = process_scheduled_tasks(source, speaker, now=now, threshold_ms=35000,
                                      announcement_logger=announcement_logger)

    assert results == []
    assert speaker.messages == []


def test_non_2xx_response_is_logged_not_raised(now, announcement_logger, rows_source_factory):
    speaker = FakeSpeaker(response=FakeResponse(status_code=500, text="error"))
    source = rows_source_factory([[now, "test"]])

    results = process_scheduled_tasks(source, speaker, now=now, threshold_ms=35000,
                                      announcement_logger=announcement_logger)

    assert results[0].status_code == 500
    assert announcement_logger.responses == [(500, "error", "10時ちょうどです。test")]


def test_transport_error_continues_with_next_row(now, announcement_logger, rows_source_factory):
    speaker = FakeSpeaker(failing=["10時ちょうどです。broken"])
    source = rows_source_factory([
        [now, "broken"],
        [now, "fine"],
    ])

    results = process_scheduled_tasks(source, speaker, now=now, threshold_ms=35000,
                                      announcement_logger=announcement_logger)

    assert [r.message for r in results] == ["10時ちょうどです。fine"]
    assert announcement_logger.errors[0][0] == "10時ちょうどです。broken"


class FailingSource:
    def get_rows(self):
        raise RuntimeError("sheet unavailable")


def test_scheduler_run_once_survives_source_error():
    scheduler = AnnouncementScheduler(FailingSource(), FakeSpeaker(), interval_seconds=30)

    assert scheduler.run_once() == []
    status = scheduler.get_status()
    assert status["running"] is False
    assert status["interval_seconds"] == 30
    assert status["last_executed"] is not None
    assert status["next_run"] is not None


def test_scheduler_run_once_uses_current_time():
    now = datetime.now()
    speaker = FakeSpeaker()
    scheduler = AnnouncementScheduler(FakeRowsSource([[now, "now"]]), speaker, interval_seconds=30)

    results = scheduler.run_once()

    assert len(results) == 1
    assert scheduler.get_status()["last_announced"] == 1
    assert speaker.messages[0].endswith("です。now")

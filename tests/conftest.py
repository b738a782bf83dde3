# tests/conftest.py

import os
import tempfile
from datetime import datetime

# Config はインポート時に環境変数を読むため、先にログ出力先を一時ディレクトリへ向ける
os.environ.setdefault("LOG_FILE", os.path.join(tempfile.mkdtemp(), "test.log"))

import pytest  # noqa: E402

from .fakes import FakeAnnouncementLogger, FakeRowsSource, FakeSpeaker  # noqa: E402


@pytest.fixture()
def now() -> datetime:
    return datetime(2023, 10, 1, 10, 0, 0)


@pytest.fixture()
def speaker() -> FakeSpeaker:
    return FakeSpeaker()


@pytest.fixture()
def announcement_logger() -> FakeAnnouncementLogger:
    return FakeAnnouncementLogger()


@pytest.fixture()
def rows_source_factory():
    def make(rows):
        return FakeRowsSource(rows)
    return make

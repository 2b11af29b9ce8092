"""Shared test fixtures."""

from pathlib import Path

import pytest

from mailscan.models import SearchCriteria

SAMPLE_LOG = (
    "2024-01-01 10:00:00 connected\n"
    "2024-01-01 10:00:01 from=a@x.com\n"
    "2024-01-02 09:00:00 connected\n"
    "2024-01-02 09:00:01 from=b@x.com\n"
)

MULTILINE_LOG = (
    "2025-03-10 08:15:02 [4521] connection from mx1.example.com\n"
    "EHLO mx1.example.com\n"
    "MAIL FROM:<alice@example.com>\n"
    "RCPT TO:<bob@example.org>\n"
    "2025-03-10 08:15:09 [4522] connection from mx2.example.com\n"
    "EHLO mx2.example.com\n"
    "MAIL FROM:<carol@example.com>\n"
    "RCPT TO:<alice@example.com>\n"
    "2025-03-11 11:02:44 [4601] connection from mx1.example.com\n"
    "MAIL FROM:<dave@example.net>\n"
)

_ENV_VARS = ("MAILSCAN_CONFIG", "MAILSCAN_WORKERS", "MAILSCAN_LOG_LEVEL")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep MAILSCAN_* variables (including ones set by .env files) out of tests."""
    for name in _ENV_VARS:
        # setenv first so the later removal is undone at teardown as well
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


@pytest.fixture
def write_log(tmp_path):
    """Return a helper writing a log file below tmp_path."""

    def _write(name: str, content: str | bytes) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_bytes(content.encode("utf-8"))
        return path

    return _write


@pytest.fixture
def log_tree(write_log, tmp_path):
    """A small tree of SMTP logs with nested directories."""
    write_log("smtp1/2025-03-10.log", MULTILINE_LOG)
    write_log("smtp1/old/2024-01.log", SAMPLE_LOG)
    write_log("smtp2/empty.log", "")
    write_log("smtp2/noise.log", "nothing here\nat all\n")
    return tmp_path


@pytest.fixture
def criteria():
    """Criteria matching the first sender in SAMPLE_LOG."""
    return SearchCriteria(email="a@x.com")


@pytest.fixture
def sample_log():
    """Four single-line records over two days."""
    return SAMPLE_LOG


@pytest.fixture
def multiline_log():
    """Three multi-line SMTP transactions."""
    return MULTILINE_LOG

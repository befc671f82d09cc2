"""Tests for the command-line entry point."""

import logging

import pytest

from commonstatus_exporter import __main__ as entry_point


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo the handler configure_logging installs."""
    package_logger = logging.getLogger("commonstatus_exporter")
    yield
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)


def test_invalid_timeout_exits_before_serving(monkeypatch: pytest.MonkeyPatch) -> None:
    """A ConfigError is fatal and the server never starts."""
    started: list[object] = []
    monkeypatch.setenv("COMMONSTATUS_CONNECTION_TIMEOUT", "eight")
    monkeypatch.setattr(entry_point.uvicorn, "run", lambda *a, **kw: started.append(a))

    assert entry_point.main() == 1
    assert started == []


def test_serves_with_configured_port(monkeypatch: pytest.MonkeyPatch) -> None:
    """The app is served on the configured host and port."""
    calls: list[dict[str, object]] = []
    monkeypatch.setenv("COMMONSTATUS_CONNECTION_TIMEOUT", "2")
    monkeypatch.setenv("COMMONSTATUS_EXPORTER_PORT", "9300")
    monkeypatch.setenv("COMMONSTATUS_EXPORTER_LOG_LEVEL", "nonsense")
    monkeypatch.setattr(
        entry_point.uvicorn, "run", lambda app, **kwargs: calls.append(kwargs)
    )

    assert entry_point.main() == 0
    assert calls[0]["port"] == 9300
    assert logging.getLogger("commonstatus_exporter").level == logging.INFO

import logging

import pytest

from reports_api.core.logging_config import NamespaceFilter, configure_logging

MANAGED_LOGGERS = [
    "reports_api",
    "reports_api.features.reports",
    "reports_api.features.reports.service",
    "reports_api.features.download.router",
    "reports_api.main",
]


class RecordingHandler(logging.Handler):
    """Keeps every record that passes the handler's filters."""

    def __init__(self):
        super().__init__()
        self.records: list[logging.LogRecord] = []

    def emit(self, record):
        self.records.append(record)

    @property
    def messages(self) -> list[str]:
        return [f"{r.name}:{r.levelname}:{r.getMessage()}" for r in self.records]


@pytest.fixture
def logging_env():
    """
    Provides a recording handler and resets the package loggers around each test
    so that configuration from one test does not leak into another.
    """
    saved = {}
    for name in MANAGED_LOGGERS:
        logger = logging.getLogger(name)
        saved[name] = (logger.handlers[:], logger.filters[:], logger.level)
        logger.handlers = []
        logger.filters = []
        logger.setLevel(logging.NOTSET)

    handler = RecordingHandler()
    yield handler

    for name, (handlers, filters, level) in saved.items():
        logger = logging.getLogger(name)
        logger.handlers = handlers
        logger.filters = filters
        logger.setLevel(level)


def test_configure_logging_is_idempotent(logging_env):
    root = configure_logging()
    configure_logging()
    console_handlers = [h for h in root.handlers if getattr(h, "_reports_api_console", False)]
    assert len(console_handlers) == 1


def test_reports_feature_traces_at_debug(logging_env, monkeypatch):
    monkeypatch.setattr("reports_api.core.logging_config.LOG_LEVEL", "INFO")
    root = configure_logging()
    root.addHandler(logging_env)

    logging.getLogger("reports_api.features.reports.service").debug("Request to get Report : 1")
    logging.getLogger("reports_api.features.download.router").debug("Download debug")
    logging.getLogger("reports_api.features.download.router").info("Download info")

    messages = logging_env.messages
    assert "reports_api.features.reports.service:DEBUG:Request to get Report : 1" in messages
    assert "reports_api.features.download.router:DEBUG:Download debug" not in messages
    assert "reports_api.features.download.router:INFO:Download info" in messages


def test_namespace_filter_allow(logging_env):
    root = logging.getLogger("reports_api")
    root.setLevel(logging.DEBUG)
    root.addHandler(logging_env)
    logging_env.addFilter(NamespaceFilter(allowed_namespaces=["reports_api.features.reports"]))

    logging.getLogger("reports_api.features.reports.service").info("Report message (allowed)")
    logging.getLogger("reports_api.main").info("Main message (filtered)")

    messages = logging_env.messages
    assert "reports_api.features.reports.service:INFO:Report message (allowed)" in messages
    assert "reports_api.main:INFO:Main message (filtered)" not in messages


def test_namespace_filter_allow_all_if_empty(logging_env):
    root = logging.getLogger("reports_api")
    root.setLevel(logging.DEBUG)
    root.addHandler(logging_env)
    logging_env.addFilter(NamespaceFilter(allowed_namespaces=[]))

    logging.getLogger("reports_api.features.reports").info("Report message (filter empty)")
    logging.getLogger("reports_api.main").info("Main message (filter empty)")

    assert len(logging_env.records) == 2

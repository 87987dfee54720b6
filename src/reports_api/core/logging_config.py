import logging
import sys

from .config import LOG_LEVEL


class NamespaceFilter(logging.Filter):
    def __init__(self, allowed_namespaces=None):
        super().__init__()
        self.allowed_namespaces = allowed_namespaces if allowed_namespaces is not None else []

    def filter(self, record):
        if not self.allowed_namespaces:
            return True # If no namespaces are specified, allow all records
        # Allow record if its name starts with any of the allowed namespaces
        return any(record.name.startswith(ns) for ns in self.allowed_namespaces)


log_formatter = logging.Formatter(
    fmt="%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def configure_logging(allowed_namespaces=None) -> logging.Logger:
    """
    Attaches a stdout handler to the package root logger.

    Child loggers created with logging.getLogger(__name__), such as
    "reports_api.features.reports.service", inherit from it. Calling this
    more than once does not add duplicate handlers.
    """
    app_logger = logging.getLogger("reports_api")
    app_logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))

    if not any(getattr(h, "_reports_api_console", False) for h in app_logger.handlers):
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(log_formatter)
        console_handler._reports_api_console = True
        if allowed_namespaces:
            console_handler.addFilter(NamespaceFilter(allowed_namespaces))
        app_logger.addHandler(console_handler)

    # The reports feature traces every incoming request at DEBUG
    logging.getLogger("reports_api.features.reports").setLevel(logging.DEBUG)

    return app_logger

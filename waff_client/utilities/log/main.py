"""Queue-backed logging setup for applications embedding the adapter."""

from __future__ import annotations

import logging
from logging.handlers import QueueHandler, QueueListener
from queue import Queue

from waff_client.settings.main import LogSettings
from waff_client.utilities.log.handlers import RouterHandler, SplunkHECHandler

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"


class LoggingService:
    """Configure a logger whose records are handed off to sinks on a listener thread.

    Console output is always attached; Splunk forwarding is added when the
    settings enable it and carry a HEC url and token.
    """

    def __init__(self, logger_name: str = "waff_client", settings: LogSettings | None = None) -> None:
        self.settings: LogSettings = settings if settings else LogSettings()
        self.propagate = False
        self.sinks: list[logging.Handler] = []

        self.logger_name = logger_name
        self.logger = logging.getLogger(self.logger_name)
        self.logger_level = int(self.settings.log_level)

        self.log_queue: Queue[logging.LogRecord] | None = None
        self.log_listener: QueueListener | None = None

    def set_propagate(self, propagate: bool) -> None:
        self.propagate = propagate

    def append_sink(self, sink: logging.Handler) -> None:
        self.sinks.append(sink)

    def configure_logger(self) -> logging.Logger:
        self.logger.setLevel(self.logger_level)
        self.logger.propagate = self.propagate

        # Already configured, avoid duplicate handlers
        if self.logger.handlers:
            return self.logger

        if self.settings.log_to_splunk and self.settings.splunk_hec_url and self.settings.splunk_token:
            self.append_sink(SplunkHECHandler(self.settings.splunk_hec_url, self.settings.splunk_token))

        console = logging.StreamHandler()
        console.setLevel(self.logger_level)
        console.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        self.sinks.append(console)

        router = RouterHandler(self.sinks)

        self.log_queue = self.log_queue or Queue(maxsize=self.settings.log_max_queue)
        if not self.log_listener:
            self.log_listener = QueueListener(self.log_queue, router, respect_handler_level=True)
        self.logger.addHandler(QueueHandler(self.log_queue))

        self.start()
        return self.logger

    def start(self) -> None:
        if self.log_listener and self.log_listener._thread is None:
            self.log_listener.start()

    def stop(self) -> None:
        """Flush queued records and detach the queue handler."""
        if self.log_listener and self.log_listener._thread is not None:
            self.log_listener.stop()
        for handler in list(self.logger.handlers):
            if isinstance(handler, QueueHandler) and handler.queue is self.log_queue:
                self.logger.removeHandler(handler)

"""Logging sinks: router fan-out and Splunk HEC forwarding."""

from __future__ import annotations

import logging
import time

import requests  # type: ignore[import-untyped]


class RouterHandler(logging.Handler):
    """Fan a record out to every sink handler.

    With ``swallow_errors`` a failing sink is reported through
    ``handleError`` and the remaining sinks still receive the record.
    Set it to False in tests to see sink exceptions directly.
    """

    def __init__(self, handlers: list[logging.Handler], swallow_errors: bool = True) -> None:
        super().__init__()
        self.handlers = handlers
        self.swallow_errors = swallow_errors

    def emit(self, record: logging.LogRecord) -> None:
        for h in self.handlers:
            try:
                h.handle(record)
            except Exception:
                if not self.swallow_errors:
                    raise
                self.handleError(record)


class SplunkHECHandler(logging.Handler):
    """Forward log records to Splunk HEC endpoint."""

    def __init__(self, hec_url: str, token: str, source: str = "waff_client") -> None:
        super().__init__()
        self.url = hec_url.rstrip("/") + "/event"
        self.headers = {"Authorization": f"Splunk {token}"}
        self.source = source

    def emit(self, record: logging.LogRecord) -> None:
        """Post event payload to Splunk HEC, swallowing sink errors."""
        try:
            event = {
                "time": time.time(),
                "source": self.source,
                "event": {
                    "level": record.levelname,
                    "logger": record.name,
                    "message": record.getMessage(),
                    "operation": getattr(record, "operation", None),
                    "offer_number": getattr(record, "offer_number", None),
                },
            }
            requests.post(self.url, headers=self.headers, json=event, timeout=2.5)
        except Exception:
            self.handleError(record)

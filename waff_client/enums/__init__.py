"""Public enum exports used across the adapter."""

from waff_client.enums.logging import LogLevel
from waff_client.enums.operations import OFFER_SCOPED, RemoteOperation, ResultCode

__all__ = [
    "LogLevel",
    "RemoteOperation",
    "ResultCode",
    "OFFER_SCOPED",
]

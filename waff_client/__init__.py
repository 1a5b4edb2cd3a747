"""Client adapter for the WAFF (weiterbildung.at) offer management service."""

from waff_client.client import NO_LOCATION, DateRange, WaffClient
from waff_client.errors import (
    MalformedResponseError,
    OfferNotSelectedError,
    RemoteServiceError,
    ServiceConnectionError,
    SoapFaultError,
    UndefinedInputError,
    UnknownOperationError,
    WaffError,
)

__all__ = [
    "WaffClient",
    "DateRange",
    "NO_LOCATION",
    "WaffError",
    "ServiceConnectionError",
    "RemoteServiceError",
    "SoapFaultError",
    "UndefinedInputError",
    "OfferNotSelectedError",
    "UnknownOperationError",
    "MalformedResponseError",
]

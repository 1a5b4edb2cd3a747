"""Exception types raised by the WAFF adapter.

Classes:
    WaffError: base class for catch-all handling.
    ServiceConnectionError: endpoint unreachable or WSDL unusable.
    RemoteServiceError: non-zero ResultCode returned by the service.
    SoapFaultError: SOAP fault raised by the service instead of a result.
    UndefinedInputError: caller input the adapter cannot interpret.
    OfferNotSelectedError: offer-scoped call without an offer number.
    UnknownOperationError: operation missing from the WSDL or registry.
    MalformedResponseError: reply that is not a result envelope.
"""

from __future__ import annotations

from waff_client.enums.operations import ResultCode


class WaffError(Exception):
    """Base class for adapter failures."""


class ServiceConnectionError(WaffError, ConnectionError):
    """Raised when the service endpoint or its WSDL cannot be reached or read."""


class RemoteServiceError(WaffError):
    """Raised when the service answers with a non-zero ResultCode.

    The remote message and code are kept verbatim; ``str(exc)`` is the message.
    """

    def __init__(self, message: str, code: int) -> None:
        super().__init__(message)
        self.message = message
        self.code = code

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class SoapFaultError(RemoteServiceError):
    """Raised when the service responds with a SOAP fault."""

    def __init__(self, message: str, fault_code: str | None = None) -> None:
        super().__init__(message, ResultCode.SOAP_FAULT)
        self.fault_code = fault_code


class UndefinedInputError(WaffError, ValueError):
    """Raised for input that cannot be interpreted, e.g. unparsable dates."""


class OfferNotSelectedError(WaffError):
    """Raised when an offer-scoped operation runs before an offer number is known."""


class UnknownOperationError(WaffError, AttributeError):
    """Raised for operations the WSDL or the scoping registry does not know."""


class MalformedResponseError(WaffError):
    """Raised when a reply does not unwrap into ResultCode/ErrorMessage/ReturnValue."""

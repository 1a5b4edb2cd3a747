"""Client adapter for the WAFF offer management SOAP service.

``WaffClient`` logs in once, then turns offer, date, theme and location
operations into remote calls. Every reply is unwrapped to its ResultCode
envelope; a non-zero code raises ``RemoteServiceError``.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from waff_client.enums.operations import OFFER_SCOPED, RemoteOperation, ResultCode
from waff_client.errors import (
    OfferNotSelectedError,
    RemoteServiceError,
    UndefinedInputError,
    UnknownOperationError,
)
from waff_client.settings.main import ServiceSettings
from waff_client.utilities.functions.converters import as_theme_list, format_offer_date, unwrap_envelope
from waff_client.utilities.request import ServiceRequest

logger = logging.getLogger(__name__)

# Location id meaning "no location"
NO_LOCATION = 0

LocationTerm = int | str | Mapping[str, Any]


class DateRange(BaseModel):
    """One schedule entry of an offer, with dates already in wire format."""

    model_config = ConfigDict(frozen=True)

    start: str
    end: str
    location: Any = NO_LOCATION

    @field_validator("start", "end", mode="before")
    @classmethod
    def _format(cls, value: Any) -> str:
        return format_offer_date(value)


def _is_no_location(term: Any) -> bool:
    return isinstance(term, int) and not isinstance(term, bool) and term == NO_LOCATION


class WaffClient:
    """Authenticated adapter around the WAFF service.

    Args:
        username: Service user; falls back to ``settings.username``.
        password: Service password; falls back to ``settings.password``.
        settings: Endpoint configuration, read from the environment when omitted.
        request: Transport layer; a new ``ServiceRequest`` when omitted.

    Raises:
        ServiceConnectionError: If the WSDL cannot be loaded.
        RemoteServiceError: If the login is rejected.
    """

    def __init__(
        self,
        username: str | None = None,
        password: str | None = None,
        settings: ServiceSettings | None = None,
        request: ServiceRequest | None = None,
    ) -> None:
        self._settings = settings if settings else ServiceSettings()
        self._request = request if request else ServiceRequest(timeout=self._settings.timeout)
        self._client = self._request.create_soap_client(self._settings.wsdl_url, cache=self._settings.cache_wsdl)

        self._operations: dict[str, bool] = dict(OFFER_SCOPED)
        self._offer_number: str = ""
        self._token: str = ""

        credentials = {
            "username": self._settings.username if username is None else username,
            "password": self._settings.password if password is None else password,
        }
        self._token = self.invoke(RemoteOperation.LOGIN, credentials)
        logger.info("Logged in to %s as %r", self._settings.wsdl_url, credentials["username"])

    @property
    def token(self) -> str:
        return self._token

    @property
    def offer_number(self) -> str:
        return self._offer_number

    # --- Invocation ---

    def invoke(
        self,
        operation: str,
        arguments: Mapping[str, Any] | None = None,
        offer_scoped: bool = False,
        offer_number: str | None = None,
    ) -> Any:
        """Call a remote operation and return its ReturnValue.

        ``token`` is always injected, and for offer-scoped calls ``OfferNumber``
        as well (``offer_number`` or else the current offer), replacing any
        caller-supplied value. The caller's mapping is left untouched.

        Raises:
            OfferNotSelectedError: Offer-scoped call with no offer number known.
            UnknownOperationError: The WSDL has no such operation.
            RemoteServiceError: The service answered with a non-zero ResultCode.
        """
        payload = dict(arguments or {})
        payload["token"] = self._token
        if offer_scoped:
            number = offer_number if offer_number is not None else self._offer_number
            if number in (None, ""):
                raise OfferNotSelectedError(
                    f"{operation} needs an offer number; call set_offer() or set_offer_number() first"
                )
            payload["OfferNumber"] = number

        try:
            service_method = getattr(self._client.service, str(operation))
        except AttributeError as exc:
            raise UnknownOperationError(f"Service has no operation {operation!r}") from exc

        logger.debug("Invoking %s", operation, extra={"operation": str(operation),
                                                       "offer_number": payload.get("OfferNumber")})
        reply = self._request.soap_call(service_method, str(operation), **payload)

        envelope = unwrap_envelope(reply)
        code = envelope["ResultCode"]
        if code != ResultCode.OK:
            message = envelope.get("ErrorMessage") or ""
            logger.warning("%s failed with code %s: %s", operation, code, message,
                           extra={"operation": str(operation)})
            raise RemoteServiceError(message, code)
        return envelope.get("ReturnValue")

    # --- Generic forwarding ---

    def register_operation(self, name: str, offer_scoped: bool) -> WaffClient:
        """Declare how a remote operation is scoped so it can be forwarded by name."""
        self._operations[name] = offer_scoped
        return self

    def call(
        self,
        operation: str,
        arguments: Mapping[str, Any] | None = None,
        offer_scoped: bool | None = None,
        offer_number: str | None = None,
    ) -> Any:
        """Forward any remote operation.

        Scoping comes from ``offer_scoped`` when given, otherwise from the
        operation registry.

        Raises:
            UnknownOperationError: Scoping is neither given nor registered.
        """
        if offer_scoped is None:
            if operation not in self._operations:
                raise UnknownOperationError(
                    f"Scoping of {operation!r} is unknown; pass offer_scoped or register_operation() it"
                )
            offer_scoped = self._operations[operation]
        return self.invoke(operation, arguments, offer_scoped=offer_scoped, offer_number=offer_number)

    def __getattr__(self, name: str) -> Callable[..., Any]:
        if name.startswith("_") or name not in self.__dict__.get("_operations", {}):
            raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")
        return functools.partial(self.call, name)

    # --- Offers ---

    def set_offer_number(self, number: str) -> WaffClient:
        self._offer_number = number
        return self

    def set_offer(self, attributes: Mapping[str, Any]) -> WaffClient:
        """Create or update an offer and make it the current one."""
        try:
            number = attributes["OfferNumber"]
        except KeyError as exc:
            raise UndefinedInputError("Offer attributes need an 'OfferNumber'") from exc

        self._offer_number = number
        self.invoke(RemoteOperation.UPDATE_OFFER, attributes)
        return self

    def set_specification(self, attributes: Mapping[str, Any], offer_number: str | None = None) -> WaffClient:
        """Create or update the specification of the current offer."""
        self.invoke(RemoteOperation.UPDATE_SPECIFICATION, attributes, offer_scoped=True, offer_number=offer_number)
        return self

    # --- Dates ---

    def clear_dates(self, offer_number: str | None = None) -> WaffClient:
        self.invoke(RemoteOperation.CLEAR_DATES, offer_scoped=True, offer_number=offer_number)
        return self

    def set_dates(self, *dates: DateRange | Mapping[str, Any], offer_number: str | None = None) -> WaffClient:
        """Replace all dates of the offer.

        Each entry is a ``DateRange`` or a mapping with ``start``, ``end`` and an
        optional ``location`` (0, an external id, a name or a location record).
        All entries are validated before the existing dates are cleared.

        Raises:
            UndefinedInputError: If a start or end cannot be read as a date.
        """
        ranges = [self._to_date_range(date) for date in dates]

        self.clear_dates(offer_number=offer_number)
        for date_range in ranges:
            self.invoke(
                RemoteOperation.ADD_DATE,
                {
                    "Start": date_range.start,
                    "End": date_range.end,
                    "idLocation": self.get_location(date_range.location),
                },
                offer_scoped=True,
                offer_number=offer_number,
            )
        return self

    def set_date(self, start: Any, end: Any, location: LocationTerm = NO_LOCATION,
                 offer_number: str | None = None) -> WaffClient:
        return self.set_dates({"start": start, "end": end, "location": location}, offer_number=offer_number)

    @staticmethod
    def _to_date_range(date: DateRange | Mapping[str, Any]) -> DateRange:
        if isinstance(date, DateRange):
            return date
        try:
            return DateRange.model_validate(dict(date))
        except ValidationError as exc:
            raise UndefinedInputError(f"Invalid date entry {date!r}: {exc}") from exc

    # --- Themes ---

    def clear_themes(self, offer_number: str | None = None) -> WaffClient:
        self.invoke(RemoteOperation.CLEAR_THEMES, offer_scoped=True, offer_number=offer_number)
        return self

    def set_themes(self, *themes: str | list[str], offer_number: str | None = None) -> WaffClient:
        """Replace all themes of the offer; list arguments are flattened in order."""
        self.clear_themes(offer_number=offer_number)
        for argument in themes:
            for theme in as_theme_list(argument):
                self.invoke(RemoteOperation.ADD_THEME, {"Theme": theme}, offer_scoped=True, offer_number=offer_number)
        return self

    # --- Locations ---

    def _lookup(self, operation: RemoteOperation, arguments: dict[str, Any]) -> Any | None:
        """Return the id found by a lookup operation.

        None stands for a miss, i.e. the service rejected the lookup. Any
        successful ReturnValue, 0 included, is the answer and ends the search.
        """
        try:
            found = self.invoke(operation, arguments)
        except RemoteServiceError as exc:
            logger.debug("%s found nothing for %r: %s", operation, arguments, exc.message)
            return None
        return found

    def get_location(self, term: LocationTerm) -> Any:
        """Resolve a location id by external id, then by name.

        ``term`` is an external id / name, or a record with ``externalID``
        and/or ``LocationName``. Returns 0 when ``term`` is 0 or nothing matches;
        a miss is never an error.
        """
        if _is_no_location(term):
            return NO_LOCATION

        if isinstance(term, Mapping):
            external_id = term.get("externalID")
            name = term.get("LocationName")
        else:
            external_id = name = term

        if external_id is not None:
            found = self._lookup(RemoteOperation.GET_LOCATION_BY_XID, {"externalID": external_id})
            if found is not None:
                return found

        if name is not None:
            found = self._lookup(RemoteOperation.GET_LOCATION, {"LocationName": name})
            if found is not None:
                return found

        return NO_LOCATION

    def find_or_new_location(self, attributes: Mapping[str, Any]) -> Any:
        """Return the id of a matching location, creating the location when none resolves."""
        location_id = self.get_location(attributes)
        if location_id:
            return location_id

        logger.info("No location matches %r, creating it", attributes.get("LocationName"))
        return self.invoke(RemoteOperation.ADD_LOCATION, attributes)

    # --- Statistics ---

    def log_stats(self, log: logging.Logger | None = None) -> dict[str, Any]:
        return self._request.log_stats(log or logger)

"""Conversions between caller input, zeep replies and service wire values."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import asdict, is_dataclass
from datetime import datetime
from typing import Any

from dateutil import parser as date_parser
from pydantic import TypeAdapter, ValidationError
from zeep.xsd.valueobjects import CompoundValue

from waff_client.errors import MalformedResponseError, UndefinedInputError

_SENTINEL = object()

# Wire format of Start/End on addDate
OFFER_DATE_FORMAT = "%d.%m.%Y %H:%M"

ENVELOPE_FIELDS = ("ResultCode", "ErrorMessage", "ReturnValue")

_datetime_adapter: TypeAdapter[datetime] = TypeAdapter(datetime)

# "2024/01/05" is year-month-day; anything else numeric reads day first
_YEAR_FIRST = re.compile(r"\s*\d{4}\D")


def object_to_dict(obj: Any) -> dict[str, Any] | Any:
    """
    Best-effort conversion of obj to a plain `dict` of its public, non-callable fields.
    """

    if is_dataclass(obj) and not isinstance(obj, type):
        obj = asdict(obj)

    if isinstance(obj, Mapping):
        return {k: v for k, v in obj.items()
                if not callable(v) and (isinstance(k, str) and not k.startswith("_"))}

    # If it is generic object with attribute __dict__
    obj_dict: dict[str, Any] | object = getattr(obj, "__dict__", _SENTINEL)
    if isinstance(obj_dict, dict):
        return {key: val for key, val in obj_dict.items()
                if not key.startswith("_") and not callable(val)}

    # If class contains __slots__ only
    if hasattr(obj, "__slots__"):
        clean = {}
        slots = obj.__slots__
        if isinstance(slots, str):
            slots = (slots,)

        for slot in slots:
            if slot.startswith("_"):
                continue
            val = getattr(obj, slot, _SENTINEL)
            if val is not _SENTINEL and not callable(val):
                clean[slot] = val
        return clean

    # primitives, lists, tuples, enums, other types
    return obj


def _fields(obj: Any) -> Mapping[str, Any]:
    """Field view of a reply object without reading values eagerly where possible."""
    if isinstance(obj, CompoundValue):
        return obj.__values__
    if isinstance(obj, Mapping):
        return obj
    fields = object_to_dict(obj)
    if not isinstance(fields, Mapping):
        raise MalformedResponseError(f"Reply of type {type(obj).__name__} has no fields")
    return fields


def unwrap_envelope(reply: Any) -> Mapping[str, Any]:
    """Return the ResultCode/ErrorMessage/ReturnValue mapping held by a reply.

    The service wraps every result in a single-field response object whose
    field name varies per operation (``LoginResult``, ``addDateResult``, ...),
    so the wrapper is unwrapped positionally. zeep usually strips that wrapper
    already, in which case the reply is the envelope itself.

    Raises:
        MalformedResponseError: If no envelope can be found.
    """
    fields = _fields(reply)
    if "ResultCode" not in fields:
        if len(fields) != 1:
            raise MalformedResponseError(
                f"Expected a single-field response wrapper, got fields {list(fields)}"
            )
        fields = _fields(next(iter(fields.values())))

    if "ResultCode" not in fields:
        raise MalformedResponseError(f"Response carries no ResultCode: {list(fields)}")
    return fields


def format_offer_date(value: Any) -> str:
    """Render a date expression as ``dd.mm.YYYY HH:MM``.

    ISO strings, ``datetime`` objects and unix timestamps go through pydantic.
    Other strings are read free-form, e.g. ``05.01.2024 09:00``,
    ``2024/01/05 09:00`` or ``5 January 2024 09:00``.

    Raises:
        UndefinedInputError: If the value cannot be read as a date.
    """
    try:
        return _datetime_adapter.validate_python(value).strftime(OFFER_DATE_FORMAT)
    except ValidationError as exc:
        if not isinstance(value, str) or not value.strip():
            raise UndefinedInputError(f"Cannot interpret {value!r} as a date") from exc

    try:
        parsed = date_parser.parse(value, dayfirst=not _YEAR_FIRST.match(value))
    except (ValueError, OverflowError) as exc:
        raise UndefinedInputError(f"Cannot interpret {value!r} as a date") from exc
    return parsed.strftime(OFFER_DATE_FORMAT)


def as_theme_list(value: Any) -> list[Any]:
    """Treat a string (or any non-iterable) as one theme, other iterables as many."""
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        return [value]
    return list(value)

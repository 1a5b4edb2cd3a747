"""Remote operations known to the adapter and their offer scoping."""

from enum import IntEnum, StrEnum


class RemoteOperation(StrEnum):
    """Operation names as published in the service WSDL."""

    LOGIN = "Login"
    UPDATE_OFFER = "updateOffer"
    UPDATE_SPECIFICATION = "updateSpecification"
    CLEAR_DATES = "clearDates"
    ADD_DATE = "addDate"
    CLEAR_THEMES = "clearThemes"
    ADD_THEME = "addTheme"
    GET_LOCATION_BY_XID = "getLocationByXID"
    GET_LOCATION = "getLocation"
    ADD_LOCATION = "addLocation"


class ResultCode(IntEnum):
    OK = 0
    # Not sent by the service; assigned locally to SOAP faults
    SOAP_FAULT = -1


# Operations that carry the current offer number alongside the token
OFFER_SCOPED: dict[str, bool] = {
    RemoteOperation.LOGIN: False,
    RemoteOperation.UPDATE_OFFER: False,
    RemoteOperation.UPDATE_SPECIFICATION: True,
    RemoteOperation.CLEAR_DATES: True,
    RemoteOperation.ADD_DATE: True,
    RemoteOperation.CLEAR_THEMES: True,
    RemoteOperation.ADD_THEME: True,
    RemoteOperation.GET_LOCATION_BY_XID: False,
    RemoteOperation.GET_LOCATION: False,
    RemoteOperation.ADD_LOCATION: False,
}

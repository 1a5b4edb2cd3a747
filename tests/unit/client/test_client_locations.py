import pytest
from zeep.exceptions import Fault, TransportError

from waff_client.errors import RemoteServiceError, ServiceConnectionError

TEST_TOKEN = "token-123"


# ---------------------------------------------------------------------------
# get_location
# ---------------------------------------------------------------------------

def test_get_location_zero_makes_no_call(client, fake_service) -> None:
    assert client.get_location(0) == 0
    assert fake_service.calls == []


def test_get_location_string_zero_is_a_term(client, fake_service) -> None:
    fake_service.reply("getLocationByXID", value=3)
    assert client.get_location("0") == 3
    assert len(fake_service.calls) == 1


def test_get_location_by_external_id(client, fake_service) -> None:
    fake_service.reply("getLocationByXID", value=12)
    assert client.get_location("VENUE-1") == 12
    assert fake_service.calls == [("getLocationByXID", {"externalID": "VENUE-1", "token": TEST_TOKEN})]


def test_get_location_falls_back_to_name(client, fake_service) -> None:
    fake_service.reply("getLocationByXID", code=1, message="not found")
    fake_service.reply("getLocation", value=7)
    assert client.get_location("Bildungszentrum") == 7
    assert fake_service.operations() == ["getLocationByXID", "getLocation"]
    assert fake_service.calls[1][1] == {"LocationName": "Bildungszentrum", "token": TEST_TOKEN}


def test_get_location_both_missing_returns_zero(client, fake_service) -> None:
    fake_service.reply("getLocationByXID", code=1, message="not found")
    fake_service.reply("getLocation", code=1, message="not found")
    assert client.get_location("Nirgendwo") == 0
    assert fake_service.operations() == ["getLocationByXID", "getLocation"]


def test_get_location_record_uses_its_keys(client, fake_service) -> None:
    fake_service.reply("getLocationByXID", code=1, message="not found")
    fake_service.reply("getLocation", value=8)
    record = {"externalID": "X-8", "LocationName": "Halle 8", "City": "Wien"}
    assert client.get_location(record) == 8
    assert fake_service.calls[0][1]["externalID"] == "X-8"
    assert fake_service.calls[1][1]["LocationName"] == "Halle 8"


def test_get_location_record_without_external_id_skips_id_lookup(client, fake_service) -> None:
    fake_service.reply("getLocation", value=5)
    assert client.get_location({"LocationName": "Halle 5"}) == 5
    assert fake_service.operations() == ["getLocation"]


def test_get_location_soap_fault_counts_as_miss(client, fake_service) -> None:
    fake_service.raise_on("getLocationByXID", Fault("Server was unable to process request"))
    fake_service.reply("getLocation", value=4)
    assert client.get_location("Halle 4") == 4


def test_get_location_transport_failure_propagates(client, fake_service) -> None:
    fake_service.raise_on("getLocationByXID", TransportError("bad gateway", status_code=502))
    with pytest.raises(ServiceConnectionError):
        client.get_location("Halle 4")


# ---------------------------------------------------------------------------
# find_or_new_location
# ---------------------------------------------------------------------------

def test_find_or_new_location_returns_existing(client, fake_service) -> None:
    fake_service.reply("getLocationByXID", value=21)
    assert client.find_or_new_location({"externalID": "X-21", "LocationName": "Halle 21"}) == 21
    assert "addLocation" not in fake_service.operations()


def test_find_or_new_location_creates_when_unresolved(client, fake_service) -> None:
    fake_service.reply("getLocation", code=1, message="not found")
    fake_service.reply("addLocation", value=99)
    attributes = {"LocationName": "X", "City": "Linz"}
    assert client.find_or_new_location(attributes) == 99
    assert fake_service.operations() == ["getLocation", "addLocation"]
    assert fake_service.calls[-1] == ("addLocation", {"LocationName": "X", "City": "Linz", "token": TEST_TOKEN})


def test_find_or_new_location_creation_failure_propagates(client, fake_service) -> None:
    fake_service.reply("getLocation", code=1, message="not found")
    fake_service.reply("addLocation", code=6, message="PLZ ungültig")
    with pytest.raises(RemoteServiceError) as exc_info:
        client.find_or_new_location({"LocationName": "X"})
    assert exc_info.value.code == 6


def test_get_location_successful_zero_ends_search(client, fake_service) -> None:
    fake_service.reply("getLocationByXID", value=0)
    fake_service.reply("getLocation", value=7)
    assert client.get_location("Halle") == 0
    assert fake_service.operations() == ["getLocationByXID"]

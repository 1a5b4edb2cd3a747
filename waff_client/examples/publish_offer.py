"""Publish a course offer with its schedule, themes and venue.

Demonstrates:
    - WaffClient construction from WAFF_* environment settings
    - set_offer() / set_specification() chaining on the current offer
    - find_or_new_location() feeding set_dates()
    - RemoteServiceError carrying the service's code and message

Run:
    WAFF_USERNAME=... WAFF_PASSWORD=... python -m waff_client.examples.publish_offer
"""


from waff_client import RemoteServiceError, ServiceConnectionError, WaffClient
from waff_client.settings import general_settings
from waff_client.utilities.log.main import LoggingService

logger = LoggingService("waff_client", settings=general_settings.log_settings).configure_logger()


def main() -> None:
    """Publish one sample offer and print the call statistics."""
    try:
        client = WaffClient(settings=general_settings.service)
    except ServiceConnectionError as exc:
        logger.error("Service not reachable: %s", exc)
        return
    except RemoteServiceError as exc:
        logger.error("Login rejected (%s): %s", exc.code, exc.message)
        return

    try:
        venue = {
            "externalID": "VENUE-17",
            "LocationName": "Bildungszentrum Favoriten",
            "Street": "Laxenburger Strasse 90",
            "ZIP": "1100",
            "City": "Wien",
        }
        client.find_or_new_location(venue)

        (client
            .set_offer({"OfferNumber": "EX-2024-001", "Title": "Excel für Einsteiger"})
            .set_specification({"Content": "Formeln, Diagramme, Pivot-Tabellen", "Hours": 16})
            .set_dates(
                {"start": "2024-03-04 09:00", "end": "2024-03-04 17:00", "location": venue},
                {"start": "2024-03-05 09:00", "end": "2024-03-05 17:00", "location": venue},
            )
            .set_themes("EDV", ["Office", "Tabellenkalkulation"]))
    except RemoteServiceError as exc:
        logger.error("Service rejected the offer (%s): %s", exc.code, exc.message)

    client.log_stats(logger)


if __name__ == "__main__":
    main()

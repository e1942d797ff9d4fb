import logging

from geopy.location import Location
from geopy.point import Point

from backend import config
from scenebuilder.errors import GeocodeError

logger = logging.getLogger(__name__)

# Known places resolved without a geocoding backend
GAZETTEER = {
    "san diego": (32.715736, -117.161087),
    "balboa park": (32.734148, -117.144553),
    "gaslamp quarter": (32.711536, -117.159747),
    "la jolla": (32.832811, -117.271271),
    "coronado": (32.685886, -117.183089),
}


class GeocoderService:
    """Address → coordinates.

    Real geocoding is out of scope: known place names come from a small
    local gazetteer and anything else resolves to the configured default
    point, unless strict mode is on.
    """

    def __init__(self, strict: bool | None = None):
        self.strict = config.STRICT_GEOCODING if strict is None else strict
        self._default = Point(config.DEFAULT_LATITUDE, config.DEFAULT_LONGITUDE)

    def geocode(self, address: str) -> Location:
        """Resolve *address* to a geopy ``Location``.

        Raises ``GeocodeError`` when the address is blank, or unknown in
        strict mode.
        """
        query = (address or "").strip()
        if not query:
            raise GeocodeError("Address must not be empty")

        key = " ".join(query.lower().replace(",", " ").split())
        if key in GAZETTEER:
            lat, lon = GAZETTEER[key]
            logger.info(f"Found gazetteer entry for '{query}'")
            return Location(query, Point(lat, lon), {"source": "gazetteer"})

        if self.strict:
            raise GeocodeError(f"Could not geocode address: {address}")

        logger.info(f"No match for '{query}', using default location")
        return Location(query, self._default, {"source": "default"})

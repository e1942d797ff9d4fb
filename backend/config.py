import os

from dotenv import load_dotenv

load_dotenv()

# Default point returned for addresses the gazetteer does not know
# (downtown San Diego).
DEFAULT_LATITUDE = float(os.environ.get("SCENEBUILDER_DEFAULT_LAT", "32.715736"))
DEFAULT_LONGITUDE = float(os.environ.get("SCENEBUILDER_DEFAULT_LON", "-117.161087"))

# Set SCENEBUILDER_STRICT_GEOCODING=1 to reject unknown addresses instead
STRICT_GEOCODING = os.environ.get("SCENEBUILDER_STRICT_GEOCODING", "").strip() in ("1", "true", "yes")

DEFAULT_RADIUS_M = 500.0
MAX_ADDRESS_LENGTH = 255

CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get(
        "SCENEBUILDER_CORS_ORIGINS",
        "http://localhost:5173,http://127.0.0.1:5173",
    ).split(",")
    if origin.strip()
]

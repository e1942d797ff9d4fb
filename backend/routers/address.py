import logging

from fastapi import APIRouter, HTTPException

from backend.geocoder import GeocoderService
from backend.models import Coordinates, ProcessAddressRequest, ProcessAddressResponse
from scenebuilder.errors import GeocodeError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["address"])

geocoder = GeocoderService()


@router.post("/process-address", response_model=ProcessAddressResponse)
def process_address(request: ProcessAddressRequest):
    """Resolve a street address to latitude / longitude."""
    try:
        location = geocoder.geocode(request.address)
    except GeocodeError as exc:
        raise HTTPException(status_code=404, detail=str(exc))

    return ProcessAddressResponse(
        coordinates=Coordinates(
            latitude=location.latitude,
            longitude=location.longitude,
        ),
        display_name=location.address,
    )

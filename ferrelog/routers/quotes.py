# ferrelog/routers/quotes.py
from fastapi import APIRouter, Depends

from ferrelog.core.auth import require_auth
from ferrelog.core.config import get_settings
from ferrelog.schemas.zone import AdviceRead, AdviceRequest, MapsLinkRead, QuoteRead, Zone
from ferrelog.services.quote_service import QuoteService

router = APIRouter(prefix="/quotes", tags=["Quotes"])

service = QuoteService(get_settings())


# -------- Public endpoints --------


@router.get("/zones", response_model=list[Zone])
def list_zones():
    """
    Distance bands with their flat shipping price, in display order.
    """
    return service.list_zones()


@router.get("/zones/{zone_id}", response_model=QuoteRead)
def quote_zone(zone_id: str):
    """
    Price and estimated delivery time for one zone.

    - 404 if the zone id is not in the catalog.
    """
    return service.quote(zone_id)


@router.get("/maps-link", response_model=MapsLinkRead)
def maps_link():
    """
    Google Maps directions link from the store, to read the distance.
    """
    return MapsLinkRead(url=service.maps_link())


# -------- Staff endpoints --------


@router.post(
    "/advice",
    response_model=AdviceRead,
    dependencies=[Depends(require_auth)],
)
async def ask_advice(payload: AdviceRequest):
    """
    Ask the logistics assistant (costs, customer notices, transport doubts).

    Always answers 200; failures come back as a fixed message.
    """
    return AdviceRead(respuesta=await service.advice(payload.prompt))

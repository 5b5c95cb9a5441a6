# ferrelog/services/quote_service.py
from fastapi import HTTPException, status

from ferrelog.core import ai_client
from ferrelog.core.config import Settings
from ferrelog.core.zones import get_zone, list_zones, maps_directions_link
from ferrelog.schemas.zone import QuoteRead, Zone


class QuoteService:
    """
    Shipping quotes by distance zone, plus the logistics assistant.

    Stateless: zones are static reference data.
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    def list_zones(self) -> list[Zone]:
        return list_zones()

    def quote(self, zone_id: str) -> QuoteRead:
        zone = get_zone(zone_id)
        if zone is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Zona desconocida: {zone_id}",
            )
        return QuoteRead(
            zone_id=zone.id,
            zone_name=zone.name,
            price=zone.price,
            estimated_time=zone.estimated_time,
        )

    def maps_link(self) -> str:
        return maps_directions_link(self.settings.STORE_MAPS_ORIGIN)

    async def advice(self, prompt: str) -> str:
        return await ai_client.get_logistics_advice(prompt)

# ferrelog/core/zones.py
from urllib.parse import urlencode

from ferrelog.schemas.zone import Zone

# Ordered distance bands. Labels show the price range quoted to
# customers; `price` is the representative flat price charged.
ZONES: tuple[Zone, ...] = (
    Zone(id="1", name="0 - 3 km ($40)", price=40, estimated_time="Mismo día", min_km=0, max_km=3),
    Zone(id="2", name="4 - 6 km ($60 - $70)", price=65, estimated_time="24 horas", min_km=4, max_km=6),
    Zone(id="3", name="7 - 10 km ($75 - $85)", price=80, estimated_time="24 horas", min_km=7, max_km=10),
    Zone(id="4", name="11 - 15 km ($90 - $150)", price=120, estimated_time="24-48 horas", min_km=11, max_km=15),
    Zone(id="5", name="16 - 25 km ($165 - $180)", price=172, estimated_time="48 horas", min_km=16, max_km=25),
    Zone(id="6", name="26 - 35 km ($190 - $220)", price=205, estimated_time="48-72 horas", min_km=26, max_km=35),
    Zone(id="7", name="36 - 45 km ($230 - $250)", price=240, estimated_time="72 horas", min_km=36, max_km=45),
    Zone(id="8", name="46 - 60 km ($260 - $285)", price=272, estimated_time="72+ horas", min_km=46, max_km=60),
)

_ZONES_BY_ID: dict[str, Zone] = {z.id: z for z in ZONES}

MAPS_DIRECTIONS_URL = "https://www.google.com/maps/dir/"


def list_zones() -> list[Zone]:
    return list(ZONES)


def get_zone(zone_id: str) -> Zone | None:
    """Return the zone for `zone_id`, or None if it is not in the catalog."""
    return _ZONES_BY_ID.get(zone_id.strip())


def price_table_text() -> str:
    """
    One-line price table, e.g. "0-3km: $40, 4-6km: $65, ...".

    Embedded in the assistant instructions so its answers match
    the catalog.
    """
    return ", ".join(
        f"{z.min_km}-{z.max_km}km: ${z.price:g}" for z in ZONES
    )


def maps_directions_link(origin: str) -> str:
    """Google Maps directions URL starting at the store."""
    return MAPS_DIRECTIONS_URL + "?" + urlencode({"api": "1", "origin": origin})

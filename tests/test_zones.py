from ferrelog.core.zones import (
    ZONES,
    get_zone,
    list_zones,
    maps_directions_link,
    price_table_text,
)

API = "/api/v1"


def test_zone_one_is_same_day_forty():
    zone = get_zone("1")
    assert zone is not None
    assert zone.price == 40
    assert zone.estimated_time == "Mismo día"


def test_get_zone_strips_input_and_rejects_unknown():
    assert get_zone(" 3 ").id == "3"
    assert get_zone("99") is None
    assert get_zone("") is None


def test_zones_are_ordered_non_overlapping_bands():
    zones = list_zones()
    assert len(zones) == 8
    assert [z.id for z in zones] == [str(i) for i in range(1, 9)]
    for previous, current in zip(zones, zones[1:]):
        assert current.min_km > previous.max_km
        assert current.price > previous.price


def test_price_table_text_lists_every_band():
    text = price_table_text()
    assert text.startswith("0-3km: $40, 4-6km: $65")
    assert text.count("km:") == len(ZONES)


def test_maps_link_starts_at_store():
    url = maps_directions_link("XF29+6J5 Jilotepec")
    assert url.startswith("https://www.google.com/maps/dir/?api=1&origin=")
    assert "XF29%2B6J5" in url


def test_zone_catalog_is_public(anon_client):
    response = anon_client.get(f"{API}/quotes/zones")
    assert response.status_code == 200
    assert len(response.json()) == 8


def test_quote_endpoint(anon_client):
    response = anon_client.get(f"{API}/quotes/zones/1")
    assert response.status_code == 200
    assert response.json() == {
        "zone_id": "1",
        "zone_name": "0 - 3 km ($40)",
        "price": 40,
        "estimated_time": "Mismo día",
    }


def test_quote_unknown_zone_is_404(anon_client):
    response = anon_client.get(f"{API}/quotes/zones/99")
    assert response.status_code == 404


def test_maps_link_endpoint(anon_client):
    response = anon_client.get(f"{API}/quotes/maps-link")
    assert response.status_code == 200
    assert response.json()["url"].startswith("https://www.google.com/maps/dir/")

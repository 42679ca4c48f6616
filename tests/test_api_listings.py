# tests/test_api_listings.py
import httpx
from fastapi.testclient import TestClient

from hive_idx.adapters.cache.memory import MemoryCache
from hive_idx.adapters.clients.reso_web_api import ListingsClient, ResoConfig
from hive_idx.entrypoints.fastapi_app import create_app


def _app(backend, api_key="test-token"):
    client = ListingsClient(
        ResoConfig(api_key=api_key, api_base_url="https://api.example.test/odata"),
        cache=MemoryCache(),
        transport=httpx.MockTransport(backend),
    )
    return TestClient(create_app(client))


def test_health(backend):
    with _app(backend) as http:
        assert http.get("/health").json() == {"status": "ok"}


def test_list_listings(backend):
    backend.reply({"value": [{"ListingKey": "A1", "City": "Greer"}], "@odata.count": 25})
    with _app(backend) as http:
        r = http.get("/listings", params={"city": "Greer", "limit": "12", "p": "2"})

    assert r.status_code == 200
    body = r.json()
    assert body["items"] == [{"ListingKey": "A1", "City": "Greer"}]
    assert body["total"] == 25
    assert body["page"] == 2
    assert body["pages"] == 3
    assert body["error"] is None
    assert backend.requests[0].url.params["$skip"] == "12"


def test_list_listings_reports_upstream_error(backend):
    backend.reply(b"nope", status=500)
    with _app(backend) as http:
        r = http.get("/listings")
    assert r.status_code == 200
    assert r.json()["error"] == "bad_response"
    assert r.json()["items"] == []


def test_missing_api_key_is_503(backend):
    with _app(backend, api_key="") as http:
        r = http.get("/listings")
    assert r.status_code == 503
    assert backend.calls == 0


def test_listing_detail(backend):
    backend.reply({"value": [{"ListingKey": "X9", "YearBuilt": 1999}]})
    with _app(backend) as http:
        r = http.get("/listings/X9")
    assert r.status_code == 200
    assert r.json() == {"item": {"ListingKey": "X9", "YearBuilt": 1999}, "found": True, "error": None}


def test_listing_detail_not_found(backend):
    backend.reply({"value": []})
    with _app(backend) as http:
        r = http.get("/listings/GONE")
    assert r.status_code == 404


def test_listing_detail_upstream_down(backend):
    backend.fail()
    with _app(backend) as http:
        r = http.get("/listings/X9")
    assert r.status_code == 200
    assert r.json() == {"item": {}, "found": False, "error": "http"}


def test_list_listings_passes_through_opaque_items(backend):
    backend.reply({"value": ["A1", 7, {"ListingKey": "B2"}]})
    with _app(backend) as http:
        r = http.get("/listings")
    assert r.status_code == 200
    assert r.json()["items"] == ["A1", 7, {"ListingKey": "B2"}]
    assert r.json()["total"] == 3


def test_list_listings_negative_count(backend):
    backend.reply({"value": [], "@odata.count": -1})
    with _app(backend) as http:
        r = http.get("/listings")
    assert r.status_code == 200
    assert r.json()["total"] == 0
    assert r.json()["pages"] == 1


def test_debug_config_hides_upstream_key(backend):
    with _app(backend, api_key="super-secret-token") as http:
        body = http.get("/debug/config").json()
    assert body["api_key_set"] is True
    assert body["endpoint"] == "https://api.example.test/odata/Property"
    assert "super-secret-token" not in str(body)

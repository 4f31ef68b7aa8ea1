import sys
import os
import pytest
import httpx

# Add src to sys.path
sys.path.append(os.path.join(os.path.dirname(__file__), "../src"))

from main import app
from app.config import ClusteringConfig
from app.mapcluster.services.markers import MapMarkerService
from core.dependencies import get_marker_service


@pytest.fixture
def client():
    app.dependency_overrides[get_marker_service] = lambda: MapMarkerService(ClusteringConfig())
    transport = httpx.ASGITransport(app=app)
    yield httpx.AsyncClient(transport=transport, base_url="http://test")
    app.dependency_overrides.clear()


@pytest.mark.asyncio
async def test_health(client):
    async with client:
        response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_cluster_points(client):
    body = {
        "zoom": 16,
        "points": [
            {"id": "A", "latitude": 45.0, "longitude": 16.0, "payload": {"description": "Trg"}},
            {"id": "B", "latitude": 45.00008, "longitude": 16.0},
            {"id": "C", "latitude": 45.00016, "longitude": 16.0},
        ],
    }
    async with client:
        response = await client.post("/api/markers", json=body)

    assert response.status_code == 200
    data = response.json()
    assert data["total_points"] == 3
    assert data["total_markers"] == 2
    assert data["radius"] == 0.0001
    assert data["clustered"] is True

    cluster, individual = data["markers"]
    assert cluster["type"] == "cluster"
    assert cluster["count"] == 2
    assert cluster["member_ids"] == ["A", "B"]
    assert cluster["position"] == [45.0, 16.0]
    assert cluster["icon"] == {"class_name": "cluster-small", "size": 35}
    assert cluster["preview"][0]["payload"] == {"description": "Trg"}
    assert individual["type"] == "individual"
    assert individual["item"]["id"] == "C"


@pytest.mark.asyncio
async def test_cluster_points_at_max_zoom(client):
    body = {
        "zoom": 19,
        "points": [{"id": str(i), "latitude": 45.0, "longitude": 16.0} for i in range(4)],
    }
    async with client:
        response = await client.post("/api/markers", json=body)

    data = response.json()
    assert data["clustered"] is False
    assert [m["type"] for m in data["markers"]] == ["individual"] * 4


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"points": []},
        {"zoom": 12, "points": [{"id": "x", "latitude": 95.0, "longitude": 16.0}]},
        {"zoom": 12, "points": [{"id": "x", "latitude": 45.0}]},
    ],
)
async def test_cluster_points_rejects_invalid_requests(client, body):
    async with client:
        response = await client.post("/api/markers", json=body)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_cluster_photos(client):
    body = {
        "zoom": 8,
        "search": "zagreb",
        "photos": [
            {"id": "1", "imageUrl": "https://img/1.jpg", "location": "Zagreb", "year": "1965",
             "coordinates": {"latitude": 45.815, "longitude": 15.9819, "address": "Ilica 1"}},
            {"id": "2", "location": "Zagreb", "year": "1972",
             "coordinates": {"latitude": 45.8151, "longitude": 15.982}},
            {"id": "3", "location": "Split", "year": "1931",
             "coordinates": {"latitude": 43.5081, "longitude": 16.4402}},
            {"id": "4", "location": "Zagreb", "year": "1980"},
            {"id": "5", "location": "Zagreb", "year": "1980",
             "coordinates": {"latitude": "not a number", "longitude": 15.9}},
        ],
    }
    async with client:
        response = await client.post("/api/markers/photos", json=body)

    assert response.status_code == 200
    data = response.json()
    assert data["total_points"] == 2
    assert data["available_decades"] == [1930, 1960, 1970]
    assert data["statistics"] == {
        "located_photos": 3,
        "distinct_locations": 2,
        "specific_addresses": 1,
        "decades": 3,
    }
    assert len(data["markers"]) == 1
    assert data["markers"][0]["member_ids"] == ["1", "2"]
    assert data["markers"][0]["preview"][0]["payload"]["image_url"] == "https://img/1.jpg"


@pytest.mark.asyncio
@pytest.mark.parametrize("zoom, radius, clustered", [(12, 0.002, True), (16, 0.0001, True), (19, 0.0001, False)])
async def test_radius_endpoint(client, zoom, radius, clustered):
    async with client:
        response = await client.get("/api/markers/radius", params={"zoom": zoom})

    assert response.status_code == 200
    assert response.json() == {"zoom": zoom, "radius": radius, "clustered": clustered}


@pytest.mark.asyncio
async def test_shared_version_does_not_leak_markers_between_requests():
    service = MapMarkerService(ClusteringConfig())
    app.dependency_overrides[get_marker_service] = lambda: service
    first = {"version": "v1", "zoom": 12, "points": [{"id": "A1", "latitude": 45.0, "longitude": 16.0}]}
    second = {
        "version": "v1",
        "zoom": 12,
        "points": [
            {"id": "B1", "latitude": 43.5, "longitude": 16.4},
            {"id": "B2", "latitude": 43.5001, "longitude": 16.4},
        ],
    }
    try:
        async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as client:
            await client.post("/api/markers", json=first)
            response = await client.post("/api/markers", json=second)
    finally:
        app.dependency_overrides.clear()

    data = response.json()
    assert data["total_points"] == 2
    assert data["total_markers"] == 1
    assert data["markers"][0]["member_ids"] == ["B1", "B2"]

"""Integration tests for the tour catalog and admin tour endpoints."""

from uuid import uuid4

import pytest


async def _create_tour(client, headers, data):
    response = await client.post("/api/admin/tours", json=data, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_create_tour_endpoint(test_client, admin_headers, sample_tour_data):
    """Test the tour creation endpoint."""
    data = await _create_tour(test_client, admin_headers, sample_tour_data)

    assert data["name"] == "Toubkal Ascent"
    assert data["slug"] == "toubkal-ascent"
    assert data["originalPrice"] == 220
    assert data["isFrom"] is True
    assert data["pricingTiers"][0]["groupSize"] == "2 to 3 people"
    assert data["itinerary"][1]["stats"] is None
    assert data["active"] is True
    assert "id" in data
    assert "createdAt" in data


@pytest.mark.asyncio
async def test_create_tour_missing_auth(test_client, sample_tour_data):
    """Test tour creation without a session."""
    response = await test_client.post("/api/admin/tours", json=sample_tour_data)

    assert response.status_code == 401
    data = response.json()
    assert data["status"] == 401
    assert data["error"] == "Unauthorized"


@pytest.mark.asyncio
async def test_create_tour_non_admin(test_client, user_headers, sample_tour_data):
    """A signed-in user without the admin role is rejected and nothing is written."""
    response = await test_client.post("/api/admin/tours", json=sample_tour_data, headers=user_headers)
    assert response.status_code == 401

    listing = await test_client.get("/api/tours")
    assert listing.json() == []


@pytest.mark.asyncio
async def test_admin_routes_require_admin(test_client, user_headers):
    """Every admin route answers 401 without an admin session."""
    some_id = str(uuid4())
    calls = [
        ("GET", "/api/admin/tours"),
        ("GET", f"/api/admin/tours/{some_id}"),
        ("PATCH", f"/api/admin/tours/{some_id}"),
        ("DELETE", f"/api/admin/tours/{some_id}"),
        ("GET", "/api/admin/trip-requests"),
        ("GET", f"/api/admin/trip-requests/{some_id}"),
        ("PATCH", f"/api/admin/trip-requests/{some_id}"),
        ("GET", "/api/admin/messages"),
        ("GET", f"/api/admin/messages/{some_id}"),
        ("PATCH", f"/api/admin/messages/{some_id}"),
        ("DELETE", f"/api/admin/messages/{some_id}"),
        ("GET", "/api/admin/stats"),
    ]

    for method, path in calls:
        for headers in ({}, user_headers, {"Authorization": "Bearer not-a-token"}):
            json_body = {} if method == "PATCH" else None
            response = await test_client.request(method, path, headers=headers, json=json_body)
            assert response.status_code == 401, f"{method} {path}"


@pytest.mark.asyncio
async def test_session_cookie_accepted(test_client, admin_token):
    """The admin session may arrive as a cookie."""
    response = await test_client.get("/api/admin/tours", headers={"Cookie": f"timola_session={admin_token}"})

    assert response.status_code == 200


@pytest.mark.asyncio
async def test_create_tour_missing_field(test_client, admin_headers, sample_tour_data):
    """Missing required field gives 400 naming it."""
    sample_tour_data.pop("price")

    response = await test_client.post("/api/admin/tours", json=sample_tour_data, headers=admin_headers)

    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "Missing required field: price"
    assert data["status"] == 400


@pytest.mark.asyncio
async def test_create_tour_invalid_slug(test_client, admin_headers, sample_tour_data):
    """Request validation failures are reported as 400 with violations."""
    sample_tour_data["slug"] = "Not A Slug"

    response = await test_client.post("/api/admin/tours", json=sample_tour_data, headers=admin_headers)

    assert response.status_code == 400
    data = response.json()
    assert "violations" in data
    assert data["violations"][0]["path"] == "slug"
    assert data["error"].startswith("Invalid value for slug")


@pytest.mark.asyncio
async def test_create_tour_duplicate_slug(test_client, admin_headers, sample_tour_data):
    """Duplicate slug is a 409."""
    await _create_tour(test_client, admin_headers, sample_tour_data)

    response = await test_client.post("/api/admin/tours", json=sample_tour_data, headers=admin_headers)

    assert response.status_code == 409
    assert response.json()["conflicting_resource"]["slug"] == "toubkal-ascent"


@pytest.mark.asyncio
async def test_toubkal_scenario(test_client, admin_headers, sample_tour_data):
    """Create, fetch by slug, delete, then the slug is gone."""
    created = await _create_tour(test_client, admin_headers, sample_tour_data)

    response = await test_client.get("/api/tours/toubkal-ascent")
    assert response.status_code == 200
    detail = response.json()
    assert detail["id"] == created["id"]
    assert detail["name"] == "Toubkal Ascent"
    assert '<h2 class="text-xl font-bold mt-8 mb-4">Day 1</h2>' in detail["itineraryDetailHtml"]
    assert "<strong" in detail["itineraryDetailHtml"]
    assert detail["additionalInfoHtml"] == ""

    response = await test_client.delete(f"/api/admin/tours/{created['id']}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == {"success": True}

    response = await test_client.get("/api/tours/toubkal-ascent")
    assert response.status_code == 404
    assert response.json()["error"] == "Tour not found"


@pytest.mark.asyncio
async def test_circuit_alias(test_client, admin_headers, sample_tour_data):
    """The circuits path serves the same tour detail."""
    created = await _create_tour(test_client, admin_headers, sample_tour_data)

    response = await test_client.get("/api/circuits/toubkal-ascent")

    assert response.status_code == 200
    assert response.json()["id"] == created["id"]


@pytest.mark.asyncio
async def test_public_listing_hides_inactive(test_client, admin_headers, sample_tour_data):
    """Inactive tours are listed for admins only."""
    created = await _create_tour(test_client, admin_headers, sample_tour_data)
    await test_client.patch(f"/api/admin/tours/{created['id']}", json={"active": False}, headers=admin_headers)

    public = await test_client.get("/api/tours")
    detail = await test_client.get("/api/tours/toubkal-ascent")
    admin = await test_client.get("/api/admin/tours", headers=admin_headers)

    assert public.json() == []
    assert detail.status_code == 404
    assert [t["slug"] for t in admin.json()["tours"]] == ["toubkal-ascent"]


@pytest.mark.asyncio
async def test_public_listing_featured_filter(test_client, admin_headers, sample_tour_data):
    """featured=true narrows the public list."""
    await _create_tour(test_client, admin_headers, sample_tour_data)
    await _create_tour(test_client, admin_headers, {
        "name": "Marrakech Food Walk",
        "slug": "marrakech-food-walk",
        "description": "Street food in the medina",
        "duration": 1,
        "price": 40,
    })

    featured = await test_client.get("/api/tours", params={"featured": "true"})
    everything = await test_client.get("/api/tours")

    assert [t["slug"] for t in featured.json()] == ["toubkal-ascent"]
    assert len(everything.json()) == 2


@pytest.mark.asyncio
async def test_admin_list_pagination(test_client, admin_headers):
    """The admin list returns the pagination envelope."""
    for i in range(12):
        await _create_tour(test_client, admin_headers, {
            "name": f"Tour {i}",
            "slug": f"tour-{i}",
            "description": "Day trip",
            "duration": 1,
            "price": 10 + i,
        })

    first = await test_client.get("/api/admin/tours", headers=admin_headers)
    second = await test_client.get("/api/admin/tours", params={"page": 2}, headers=admin_headers)

    assert first.status_code == 200
    assert first.json()["pagination"] == {"total": 12, "pages": 2, "currentPage": 1, "limit": 10}
    assert len(first.json()["tours"]) == 10
    assert len(second.json()["tours"]) == 2

    ids = [t["id"] for t in first.json()["tours"] + second.json()["tours"]]
    assert len(set(ids)) == 12


@pytest.mark.asyncio
async def test_admin_list_rejects_bad_page(test_client, admin_headers):
    """page must be at least 1."""
    response = await test_client.get("/api/admin/tours", params={"page": 0}, headers=admin_headers)

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_partial_update(test_client, admin_headers, sample_tour_data):
    """PATCH changes only the supplied fields and keeps id and createdAt."""
    created = await _create_tour(test_client, admin_headers, sample_tour_data)

    response = await test_client.patch(
        f"/api/admin/tours/{created['id']}",
        json={"tagline": "New tagline", "id": str(uuid4()), "createdAt": "2000-01-01T00:00:00"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    updated = response.json()
    assert updated["tagline"] == "New tagline"
    assert updated["id"] == created["id"]
    assert updated["createdAt"] == created["createdAt"]
    for key in ("name", "slug", "description", "price", "highlights", "pricingTiers"):
        assert updated[key] == created[key]


@pytest.mark.asyncio
async def test_get_unknown_tour(test_client, admin_headers):
    """Unknown id is a 404."""
    response = await test_client.get(f"/api/admin/tours/{uuid4()}", headers=admin_headers)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_twice(test_client, admin_headers, sample_tour_data):
    """Deleting an already deleted tour is a 404."""
    created = await _create_tour(test_client, admin_headers, sample_tour_data)

    first = await test_client.delete(f"/api/admin/tours/{created['id']}", headers=admin_headers)
    second = await test_client.delete(f"/api/admin/tours/{created['id']}", headers=admin_headers)

    assert first.status_code == 200
    assert second.status_code == 404


@pytest.mark.asyncio
async def test_markup_is_escaped_on_detail(test_client, admin_headers, sample_tour_data):
    """Raw HTML in itinerary text comes back inert."""
    sample_tour_data["itineraryDetail"] = "<script>alert(1)</script>\n[click](javascript:alert(1))"
    await _create_tour(test_client, admin_headers, sample_tour_data)

    detail = (await test_client.get("/api/tours/toubkal-ascent")).json()

    assert "<script>" not in detail["itineraryDetailHtml"]
    assert "&lt;script&gt;" in detail["itineraryDetailHtml"]
    assert "javascript:" not in detail["itineraryDetailHtml"]


@pytest.mark.asyncio
async def test_metrics_endpoint(test_client):
    """Test the Prometheus metrics endpoint."""
    response = await test_client.get("/metrics")

    assert response.status_code == 200
    assert "tours_created_total" in response.text


@pytest.mark.asyncio
async def test_rejected_admin_calls_leave_rows_untouched(
    test_client, admin_headers, user_headers, sample_tour_data, sample_trip_request_data, sample_contact_data
):
    """Mutations refused with 401 change nothing in the store."""
    tour = await _create_tour(test_client, admin_headers, sample_tour_data)
    trip_request = (await test_client.post("/api/trip-requests", json=sample_trip_request_data)).json()
    message = (await test_client.post("/api/contact", json=sample_contact_data)).json()
    trip_request_before = (
        await test_client.get(f"/api/admin/trip-requests/{trip_request['id']}", headers=admin_headers)
    ).json()

    calls = [
        ("PATCH", f"/api/admin/tours/{tour['id']}", {"name": "Renamed", "active": False}),
        ("DELETE", f"/api/admin/tours/{tour['id']}", None),
        ("PATCH", f"/api/admin/trip-requests/{trip_request['id']}", {"status": "cancelled", "adminNotes": "x"}),
        ("GET", f"/api/admin/messages/{message['id']}", None),
        ("PATCH", f"/api/admin/messages/{message['id']}", {"status": "replied"}),
        ("DELETE", f"/api/admin/messages/{message['id']}", None),
    ]
    for headers in ({}, user_headers):
        for method, path, body in calls:
            response = await test_client.request(method, path, headers=headers, json=body)
            assert response.status_code == 401, f"{method} {path}"

    tour_after = await test_client.get(f"/api/admin/tours/{tour['id']}", headers=admin_headers)
    trip_request_after = await test_client.get(
        f"/api/admin/trip-requests/{trip_request['id']}", headers=admin_headers
    )
    messages = await test_client.get("/api/admin/messages", headers=admin_headers)

    assert tour_after.status_code == 200
    assert tour_after.json() == tour
    assert trip_request_after.json() == trip_request_before
    assert [(m["id"], m["status"]) for m in messages.json()["messages"]] == [(message["id"], "unread")]


@pytest.mark.asyncio
@pytest.mark.parametrize("path, error", [
    ("/api/admin/tours/not-a-tour-id", "Tour not found"),
    ("/api/admin/trip-requests/12345", "Trip request not found"),
    ("/api/admin/messages/abc", "Message not found"),
])
async def test_unparseable_id_is_not_found(test_client, admin_headers, path, error):
    """Ids that are not UUIDs are answered like unknown ids."""
    response = await test_client.get(path, headers=admin_headers)

    assert response.status_code == 404
    assert response.json()["error"] == error


@pytest.mark.asyncio
async def test_unparseable_id_on_mutations(test_client, admin_headers):
    """PATCH and DELETE treat an unparseable id as unknown."""
    patch = await test_client.patch("/api/admin/tours/xyz", json={"tagline": "New"}, headers=admin_headers)
    delete = await test_client.delete("/api/admin/messages/xyz", headers=admin_headers)

    assert patch.status_code == 404
    assert delete.status_code == 404

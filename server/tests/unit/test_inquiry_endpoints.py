"""Integration tests for trip requests, contact messages, stats and the sitemap."""

from uuid import uuid4

import pytest

TRIP_REQUEST_STATUSES = ["new", "contacted", "in-progress", "quoted", "confirmed", "cancelled"]


async def _submit_trip_request(client, data):
    response = await client.post("/api/trip-requests", json=data)
    assert response.status_code == 201, response.text
    return response.json()


async def _submit_contact(client, data):
    response = await client.post("/api/contact", json=data)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_submit_trip_request(test_client, admin_headers, sample_trip_request_data):
    """A public submission is acknowledged and visible to admins as new."""
    body = await _submit_trip_request(test_client, sample_trip_request_data)

    assert body["success"] is True
    assert body["message"] == "Trip request submitted successfully"

    response = await test_client.get(f"/api/admin/trip-requests/{body['id']}", headers=admin_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "new"
    assert data["fullName"] == "Amina Benali"
    assert data["travelDates"] == "2026-05-10 to 2026-05-12"


@pytest.mark.asyncio
async def test_trip_request_invalid_phone(test_client, admin_headers, sample_trip_request_data):
    """phone 'abc' is rejected and nothing is stored."""
    sample_trip_request_data["phone"] = "abc"

    response = await test_client.post("/api/trip-requests", json=sample_trip_request_data)

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid phone format"

    listing = await test_client.get("/api/admin/trip-requests", headers=admin_headers)
    assert listing.json()["pagination"]["total"] == 0


@pytest.mark.asyncio
async def test_trip_request_missing_field(test_client, sample_trip_request_data):
    """The missing field is named in the error."""
    sample_trip_request_data.pop("travelDates")

    response = await test_client.post("/api/trip-requests", json=sample_trip_request_data)

    assert response.status_code == 400
    assert response.json()["error"] == "Missing required field: travelDates"


@pytest.mark.asyncio
async def test_trip_request_for_tour(test_client, admin_headers, sample_tour_data, sample_trip_request_data):
    """Booking a tour snapshots its name."""
    tour = (await test_client.post("/api/admin/tours", json=sample_tour_data, headers=admin_headers)).json()
    sample_trip_request_data["circuitId"] = tour["id"]

    body = await _submit_trip_request(test_client, sample_trip_request_data)
    data = (await test_client.get(f"/api/admin/trip-requests/{body['id']}", headers=admin_headers)).json()

    assert data["circuitId"] == tour["id"]
    assert data["circuitName"] == "Toubkal Ascent"


@pytest.mark.asyncio
async def test_trip_request_status_freedom(test_client, admin_headers, sample_trip_request_data):
    """Every status can be set from every state."""
    body = await _submit_trip_request(test_client, sample_trip_request_data)
    url = f"/api/admin/trip-requests/{body['id']}"

    for status in reversed(TRIP_REQUEST_STATUSES):
        response = await test_client.patch(url, json={"status": status}, headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["status"] == status


@pytest.mark.asyncio
async def test_trip_request_unknown_status(test_client, admin_headers, sample_trip_request_data):
    """Statuses outside the closed set are a 400."""
    body = await _submit_trip_request(test_client, sample_trip_request_data)

    response = await test_client.patch(
        f"/api/admin/trip-requests/{body['id']}",
        json={"status": "archived"},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.json()["violations"][0]["path"] == "status"


@pytest.mark.asyncio
async def test_trip_request_admin_notes(test_client, admin_headers, sample_trip_request_data):
    """Admin notes can be written without touching the status."""
    body = await _submit_trip_request(test_client, sample_trip_request_data)

    response = await test_client.patch(
        f"/api/admin/trip-requests/{body['id']}",
        json={"adminNotes": "Prefers French-speaking guide"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json()["adminNotes"] == "Prefers French-speaking guide"
    assert response.json()["status"] == "new"


@pytest.mark.asyncio
async def test_trip_request_list_and_filter(test_client, admin_headers, sample_trip_request_data):
    """The admin list is paginated and filterable by status."""
    ids = [(await _submit_trip_request(test_client, sample_trip_request_data))["id"] for _ in range(3)]
    await test_client.patch(f"/api/admin/trip-requests/{ids[0]}", json={"status": "quoted"}, headers=admin_headers)

    page = await test_client.get("/api/admin/trip-requests", params={"limit": 2}, headers=admin_headers)
    quoted = await test_client.get("/api/admin/trip-requests", params={"status": "quoted"}, headers=admin_headers)

    assert page.json()["pagination"] == {"total": 3, "pages": 2, "currentPage": 1, "limit": 2}
    assert len(page.json()["tripRequests"]) == 2
    assert [tr["id"] for tr in quoted.json()["tripRequests"]] == [ids[0]]


@pytest.mark.asyncio
async def test_trip_request_not_found(test_client, admin_headers):
    """Unknown trip request id is a 404."""
    response = await test_client.get(f"/api/admin/trip-requests/{uuid4()}", headers=admin_headers)

    assert response.status_code == 404
    assert response.json()["error"] == "Trip request not found"


@pytest.mark.asyncio
async def test_trip_requests_cannot_be_deleted(test_client, admin_headers, sample_trip_request_data):
    """There is no delete route for trip requests."""
    body = await _submit_trip_request(test_client, sample_trip_request_data)

    response = await test_client.delete(f"/api/admin/trip-requests/{body['id']}", headers=admin_headers)

    assert response.status_code == 405


@pytest.mark.asyncio
async def test_contact_message_lifecycle(test_client, admin_headers, sample_contact_data):
    """Submit, open (marks read), reply, delete, delete again."""
    body = await _submit_contact(test_client, sample_contact_data)
    assert body["success"] is True
    url = f"/api/admin/messages/{body['id']}"

    listing = await test_client.get("/api/admin/messages", headers=admin_headers)
    assert listing.json()["messages"][0]["status"] == "unread"

    opened = await test_client.get(url, headers=admin_headers)
    assert opened.status_code == 200
    assert opened.json()["status"] == "read"

    replied = await test_client.patch(url, json={"status": "replied"}, headers=admin_headers)
    assert replied.json()["status"] == "replied"

    first = await test_client.delete(url, headers=admin_headers)
    second = await test_client.delete(url, headers=admin_headers)
    assert first.json() == {"success": True}
    assert second.status_code == 404


@pytest.mark.asyncio
async def test_contact_missing_subject(test_client, sample_contact_data):
    """Contact form requires a subject."""
    sample_contact_data["subject"] = " "

    response = await test_client.post("/api/contact", json=sample_contact_data)

    assert response.status_code == 400
    assert response.json()["error"] == "Missing required field: subject"


@pytest.mark.asyncio
async def test_message_status_filter(test_client, admin_headers, sample_contact_data):
    """The messages list can be filtered to unread only."""
    opened = await _submit_contact(test_client, sample_contact_data)
    await _submit_contact(test_client, sample_contact_data)
    await test_client.get(f"/api/admin/messages/{opened['id']}", headers=admin_headers)

    response = await test_client.get("/api/admin/messages", params={"status": "unread"}, headers=admin_headers)

    data = response.json()
    assert data["pagination"]["total"] == 1
    assert data["messages"][0]["id"] != opened["id"]


@pytest.mark.asyncio
async def test_dashboard_stats(test_client, admin_headers, sample_tour_data, sample_trip_request_data, sample_contact_data):
    """Stats count every entity and the actionable subsets."""
    await test_client.post("/api/admin/tours", json=sample_tour_data, headers=admin_headers)
    await _submit_trip_request(test_client, sample_trip_request_data)
    handled = await _submit_trip_request(test_client, sample_trip_request_data)
    await test_client.patch(
        f"/api/admin/trip-requests/{handled['id']}", json={"status": "contacted"}, headers=admin_headers
    )
    await _submit_contact(test_client, sample_contact_data)

    response = await test_client.get("/api/admin/stats", headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {
        "tours": {"total": 1, "active": 1, "featured": 1},
        "tripRequests": {"total": 2, "new": 1},
        "messages": {"total": 1, "unread": 1},
    }


@pytest.mark.asyncio
async def test_sitemap(test_client, admin_headers, sample_tour_data):
    """The sitemap lists static pages and active tours."""
    await test_client.post("/api/admin/tours", json=sample_tour_data, headers=admin_headers)

    response = await test_client.get("/sitemap.xml")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/xml")
    assert "<loc>https://timolaadventures.com</loc>" in response.text
    assert "<loc>https://timolaadventures.com/tours</loc>" in response.text
    assert "<loc>https://timolaadventures.com/tours/toubkal-ascent</loc>" in response.text
    assert "<changefreq>weekly</changefreq>" in response.text

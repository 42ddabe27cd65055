"""Candidate endpoints."""

from backoffice.core.permissions import Roles


async def test_create_with_process_and_management(client, recruiter_headers, pipeline):
    response = await client.post(
        "/candidates",
        json={
            "name": "Diego",
            "email": "diego@example.com",
            "process_id": pipeline["process_id"],
            "match_percent": 88,
            "client_comments": {"comment": "Referred"},
            "management_id": pipeline["management_id"],
            "position": "QA Engineer",
            "rate": "4.5",
        },
        headers=recruiter_headers,
    )

    assert response.status_code == 201, response.text
    body = response.json()
    assert body["candidate_process"]["process_id"] == pipeline["process_id"]
    assert body["candidate_process"]["stage"] == "entrevistas"
    assert body["candidate_process"]["client_comments"]["comment"] == "Referred"
    assert body["candidate_management"]["status"] == "activo"
    assert body["candidate_management"]["rate"] == "4.5"


async def test_engagement_needs_position_and_rate(client, recruiter_headers, org):
    response = await client.post(
        "/candidates",
        json={"name": "Diego", "management_id": org["management_id"]},
        headers=recruiter_headers,
    )

    assert response.status_code == 400
    listing = await client.get("/candidates", headers=recruiter_headers)
    assert listing.json()["total"] == 0


async def test_duplicate_email_or_phone(client, recruiter_headers, pipeline):
    by_email = await client.post(
        "/candidates", json={"name": "Ana 2", "email": "ANA@example.com"}, headers=recruiter_headers
    )
    by_phone = await client.post(
        "/candidates", json={"name": "Bruno 2", "phone": "+56900000001"}, headers=recruiter_headers
    )

    assert by_email.status_code == 409
    assert by_phone.status_code == 409


async def test_check_candidate_in_process(client, recruiter_headers, pipeline):
    inside = await client.post(
        "/candidates/check",
        json={"process_id": pipeline["process_id"], "email": "ana@example.com"},
        headers=recruiter_headers,
    )
    outside = await client.post(
        "/candidates/check",
        json={"process_id": pipeline["process_id"], "email": "nobody@example.com"},
        headers=recruiter_headers,
    )

    assert inside.json()["exists"] is True
    assert outside.json()["exists"] is False


async def test_search_and_pagination(client, recruiter_headers, pipeline):
    response = await client.get("/candidates?query=bru", headers=recruiter_headers)

    assert response.status_code == 200
    assert response.json()["total"] == 1
    assert response.json()["batch"][0]["name"] == "Bruno"

    second_page = await client.get("/candidates?page=2", headers=recruiter_headers)
    assert second_page.json()["total"] == 3
    assert second_page.json()["batch"] == []


async def test_detail_lists_processes(client, recruiter_headers, pipeline):
    response = await client.get(f"/candidates/{pipeline['candidate_ids'][0]}", headers=recruiter_headers)

    assert response.status_code == 200, response.text
    [process] = response.json()["processes"]
    assert process["process_id"] == pipeline["process_id"]


async def test_delete_removes_associations(client, recruiter_headers, pipeline):
    ana = pipeline["candidate_ids"][0]

    response = await client.delete(f"/candidates/{ana}", headers=recruiter_headers)

    assert response.status_code == 200
    assert (await client.get(f"/candidates/{ana}", headers=recruiter_headers)).status_code == 404
    rows = await client.get(f"/candidate-process?candidate_id={ana}", headers=recruiter_headers)
    assert rows.json() == []


async def test_client_cannot_create_candidates(client, headers_for):
    response = await client.post("/candidates", json={"name": "Eve"}, headers=headers_for(Roles.CLIENT))

    assert response.status_code == 403

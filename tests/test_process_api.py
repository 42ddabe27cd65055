"""Process endpoints: listing, scoping and closure."""

import pytest

from backoffice.core.permissions import Roles
from backoffice.errors import InternalError
from backoffice.repositories.process_repository import ProcessRepository


async def select(client, headers, process_id, candidate_id):
    response = await client.put(
        f"/candidate-process/process/{process_id}",
        json={"action": "select", "candidateId": candidate_id},
        headers=headers,
    )
    assert response.status_code == 200, response.text


async def engagements(client, headers, company_id):
    response = await client.get(f"/candidate-management?company_id={company_id}", headers=headers)
    assert response.status_code == 200, response.text
    return response.json()


async def test_close_promotes_selected_candidates(client, recruiter_headers, pipeline):
    process_id = pipeline["process_id"]
    ana, bruno, _ = pipeline["candidate_ids"]
    await select(client, recruiter_headers, process_id, ana)
    await select(client, recruiter_headers, process_id, bruno)

    response = await client.put(f"/process/{process_id}", json={"action": "close"}, headers=recruiter_headers)

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["promoted"] == 2
    assert body["process"]["status"] == "Cerrado"
    assert body["process"]["closed_at"] is not None

    rows = await engagements(client, recruiter_headers, pipeline["company_id"])
    assert sorted(row["candidate_id"] for row in rows) == sorted([ana, bruno])
    for row in rows:
        assert row["management_id"] == pipeline["management_id"]
        assert row["position"] == "Backend Developer"
        assert row["status"] == "activo"
        assert row["start_date"] is not None


async def test_close_without_selected_candidates(client, recruiter_headers, pipeline):
    response = await client.put(
        f"/process/{pipeline['process_id']}", json={"action": "close"}, headers=recruiter_headers
    )

    assert response.status_code == 200, response.text
    assert response.json()["promoted"] == 0
    assert await engagements(client, recruiter_headers, pipeline["company_id"]) == []


async def test_failed_close_stores_nothing(client, recruiter_headers, pipeline, monkeypatch):
    process_id = pipeline["process_id"]
    await select(client, recruiter_headers, process_id, pipeline["candidate_ids"][0])

    async def failing_mark_closed(self, *args, **kwargs):
        raise InternalError("Could not close process")

    monkeypatch.setattr(ProcessRepository, "mark_closed", failing_mark_closed)

    response = await client.put(f"/process/{process_id}", json={"action": "close"}, headers=recruiter_headers)

    assert response.status_code == 500
    assert await engagements(client, recruiter_headers, pipeline["company_id"]) == []
    process = await client.get(f"/process/{process_id}", headers=recruiter_headers)
    assert process.json()["status"] == "activo"
    assert process.json()["closed_at"] is None


async def test_unknown_process_action(client, recruiter_headers, pipeline):
    response = await client.put(
        f"/process/{pipeline['process_id']}", json={"action": "reopen"}, headers=recruiter_headers
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Unrecognized action: reopen"}


async def test_close_missing_process(client, recruiter_headers, org):
    response = await client.put("/process/999", json={"action": "close"}, headers=recruiter_headers)

    assert response.status_code == 404


async def test_plain_update(client, recruiter_headers, pipeline):
    response = await client.put(
        f"/process/{pipeline['process_id']}",
        json={"job_offer": "Senior Backend Developer", "pre_filtered": True},
        headers=recruiter_headers,
    )

    assert response.status_code == 200, response.text
    assert response.json()["job_offer"] == "Senior Backend Developer"
    assert response.json()["pre_filtered"] is True


async def test_list_and_detail(client, recruiter_headers, pipeline):
    listing = await client.get("/process", headers=recruiter_headers)

    assert listing.status_code == 200
    assert listing.json()["total"] == 1
    [item] = listing.json()["batch"]
    assert item["company_name"] == "Acme"
    assert item["management_name"] == "TI"
    assert item["candidate_count"] == 3

    detail = await client.get(f"/process/{pipeline['process_id']}", headers=recruiter_headers)
    assert detail.status_code == 200
    assert len(detail.json()["candidates"]) == 3


async def test_client_sees_only_linked_managements(client, admin_headers, headers_for, pipeline):
    other = await client.post(
        "/management",
        json={"name": "Finanzas", "company_id": pipeline["company_id"]},
        headers=admin_headers,
    )
    await client.post(
        "/process",
        json={"job_offer": "Analyst", "management_id": other.json()["id"]},
        headers=admin_headers,
    )

    roles = {role["name"]: role["id"] for role in (await client.get("/roles", headers=admin_headers)).json()}
    user = await client.post(
        "/users",
        json={"name": "Client", "email": "client@acme.com", "role_id": roles[Roles.CLIENT], "password": "secret"},
        headers=admin_headers,
    )
    assert user.status_code == 201, user.text
    link = await client.post(
        "/user-management",
        json={"user_id": user.json()["id"], "management_id": pipeline["management_id"]},
        headers=admin_headers,
    )
    assert link.status_code == 201, link.text

    client_headers = headers_for(Roles.CLIENT, user_id=user.json()["id"])
    listing = await client.get("/process", headers=client_headers)
    count = await client.get("/process/count", headers=client_headers)

    assert listing.status_code == 200
    assert [item["id"] for item in listing.json()["batch"]] == [pipeline["process_id"]]
    assert count.json() == {"total": 1}
    assert (await client.get("/process/count", headers=admin_headers)).json() == {"total": 2}


async def test_process_writes_need_staff(client, headers_for, org):
    response = await client.post(
        "/process",
        json={"job_offer": "Designer", "management_id": org["management_id"]},
        headers=headers_for(Roles.CLIENT_MANAGER),
    )

    assert response.status_code == 403


@pytest.mark.parametrize(
    "url",
    ["/process", "/candidates", "/users", "/pre-invoices?company_id=1"],
)
@pytest.mark.parametrize("page", [0, -1])
async def test_page_below_one_is_rejected(client, admin_headers, url, page):
    separator = "&" if "?" in url else "?"

    response = await client.get(f"{url}{separator}page={page}", headers=admin_headers)

    assert response.status_code == 400
    assert "error" in response.json()

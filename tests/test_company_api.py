"""Companies, managements and user scoping links."""

from backoffice.core.permissions import Roles


async def role_ids(client, headers):
    return {role["name"]: role["id"] for role in (await client.get("/roles", headers=headers)).json()}


async def test_first_company_is_alphabetical(client, admin_headers):
    for name in ("Zeta", "Beta", "Omega"):
        await client.post("/company", json={"name": name}, headers=admin_headers)

    response = await client.get("/company/first", headers=admin_headers)

    assert response.json()["name"] == "Beta"


async def test_delete_company_cascades_but_keeps_candidates(client, admin_headers, recruiter_headers, pipeline):
    await client.put(
        f"/process/{pipeline['process_id']}",
        json={"action": "close"},
        headers=recruiter_headers,
    )

    response = await client.delete(f"/company/{pipeline['company_id']}", headers=admin_headers)

    assert response.status_code == 200, response.text
    assert (await client.get(f"/company/{pipeline['company_id']}", headers=admin_headers)).status_code == 404
    assert (await client.get(f"/management/{pipeline['management_id']}", headers=admin_headers)).status_code == 404
    assert (await client.get(f"/process/{pipeline['process_id']}", headers=admin_headers)).status_code == 404
    assert (await client.get("/candidate-process", headers=admin_headers)).json() == []
    assert (await client.get("/candidates", headers=admin_headers)).json()["total"] == 3


async def test_management_list_filters_by_company(client, admin_headers, org):
    other = await client.post("/company", json={"name": "Globex"}, headers=admin_headers)
    await client.post("/management", json={"name": "Ventas", "company_id": other.json()["id"]}, headers=admin_headers)

    response = await client.get(f"/management?company_id={org['company_id']}", headers=admin_headers)

    assert [management["name"] for management in response.json()] == ["TI"]


async def test_role_change_swaps_scoping_links(client, admin_headers, org):
    roles = await role_ids(client, admin_headers)
    user = await client.post(
        "/users",
        json={"name": "Carlos", "email": "carlos@acme.com", "role_id": roles[Roles.CLIENT_MANAGER]},
        headers=admin_headers,
    )
    user_id = user.json()["id"]
    await client.post(
        "/user-company",
        json={"user_id": user_id, "company_id": org["company_id"]},
        headers=admin_headers,
    )

    updated = await client.put(
        f"/users/{user_id}",
        json={"role_id": roles[Roles.CLIENT], "management_id": org["management_id"]},
        headers=admin_headers,
    )

    assert updated.status_code == 200, updated.text
    assert updated.json()["role"]["name"] == Roles.CLIENT
    assert (await client.get(f"/users/{user_id}/companies", headers=admin_headers)).json() == []
    managements = (await client.get(f"/users/{user_id}/managements", headers=admin_headers)).json()
    assert [link["management"]["id"] for link in managements] == [org["management_id"]]

    users = await client.get(f"/management/{org['management_id']}/users", headers=admin_headers)
    assert [item["id"] for item in users.json()] == [user_id]


async def test_company_list_scoped_for_client_manager(client, admin_headers, headers_for, org):
    roles = await role_ids(client, admin_headers)
    await client.post("/company", json={"name": "Globex"}, headers=admin_headers)
    user = await client.post(
        "/users",
        json={"name": "Marta", "email": "marta@acme.com", "role_id": roles[Roles.CLIENT_MANAGER]},
        headers=admin_headers,
    )
    await client.post(
        "/user-company",
        json={"user_id": user.json()["id"], "company_id": org["company_id"]},
        headers=admin_headers,
    )

    response = await client.get("/company", headers=headers_for(Roles.CLIENT_MANAGER, user_id=user.json()["id"]))

    assert [company["name"] for company in response.json()] == ["Acme"]


async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["api_ok"] is True
    assert body["db_ok"] is True
    assert body["alembic_head"] == "0001_initial_schema"

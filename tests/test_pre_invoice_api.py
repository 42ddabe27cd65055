"""Pre-invoice endpoints."""

from decimal import Decimal

import pytest_asyncio

from backoffice.core.permissions import Roles


async def client_manager_for(client, admin_headers, headers_for, company_id, email):
    """Headers of a new client_manager linked to ``company_id``."""
    roles = {role["name"]: role["id"] for role in (await client.get("/roles", headers=admin_headers)).json()}
    manager = await client.post(
        "/users",
        json={"name": "Manager", "email": email, "role_id": roles[Roles.CLIENT_MANAGER]},
        headers=admin_headers,
    )
    assert manager.status_code == 201, manager.text
    link = await client.post(
        "/user-company",
        json={"user_id": manager.json()["id"], "company_id": company_id},
        headers=admin_headers,
    )
    assert link.status_code == 201, link.text
    return headers_for(Roles.CLIENT_MANAGER, user_id=manager.json()["id"])


@pytest_asyncio.fixture
async def billing(client, recruiter_headers, pipeline):
    """A draft pre-invoice billing Ana: 500 + 19% VAT."""
    ana = pipeline["candidate_ids"][0]
    response = await client.post(
        "/pre-invoices",
        json={
            "company_id": pipeline["company_id"],
            "description": "October services",
            "professionals": [
                {"id": ana, "hoursWorked": 10, "hourValue": 50, "subtotal": 500, "vat": 19, "service": "Backend"}
            ],
        },
        headers=recruiter_headers,
    )
    assert response.status_code == 201, response.text
    return {**pipeline, "invoice": response.json()}


async def test_create_computes_item_totals(billing):
    invoice = billing["invoice"]

    assert invoice["status"] == "borrador"
    [item] = invoice["items"]
    assert Decimal(item["subtotal"]) == Decimal("500")
    assert Decimal(item["vat"]) == Decimal("19")
    assert item["total"] == "595"
    assert Decimal(invoice["total_value"]) == Decimal("595")


async def test_put_replaces_items(client, recruiter_headers, billing):
    invoice_id = billing["invoice"]["id"]
    _, bruno, carla = billing["candidate_ids"]

    response = await client.put(
        f"/pre-invoices/{invoice_id}",
        json={
            "description": "Corrected",
            "professionals": [
                {"id": bruno, "hoursWorked": 8, "hourValue": 25, "vat": 19},
                {"id": carla, "hoursWorked": 4, "hourValue": 30},
            ],
        },
        headers=recruiter_headers,
    )

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["description"] == "Corrected"
    assert sorted(item["candidate_id"] for item in body["items"]) == sorted([bruno, carla])
    totals = sorted(Decimal(item["total"]) for item in body["items"])
    assert totals == [Decimal("120"), Decimal("238")]
    assert Decimal(body["total_value"]) == Decimal("358")

    emptied = await client.put(f"/pre-invoices/{invoice_id}", json={"professionals": []}, headers=recruiter_headers)
    assert emptied.json()["items"] == []


async def test_approve_and_reject(client, admin_headers, headers_for, billing):
    invoice_id = billing["invoice"]["id"]
    manager_headers = await client_manager_for(
        client, admin_headers, headers_for, billing["company_id"], "manager@acme.com"
    )

    approved = await client.patch(
        f"/pre-invoices/{invoice_id}",
        json={"action": "approve"},
        headers=manager_headers,
    )
    assert approved.status_code == 200, approved.text
    assert approved.json()["updatedInvoice"]["status"] == "aprobado"

    rejected = await client.patch(
        f"/pre-invoices/{invoice_id}",
        json={"action": "reject"},
        headers=headers_for(Roles.ADMIN),
    )
    assert rejected.json()["updatedInvoice"]["status"] == "rechazado"


async def test_unknown_status_action(client, admin_headers, billing):
    invoice_id = billing["invoice"]["id"]

    response = await client.patch(f"/pre-invoices/{invoice_id}", json={"action": "archive"}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json() == {"error": "Unrecognized action: archive"}
    detail = await client.get(f"/pre-invoices/{invoice_id}", headers=admin_headers)
    assert detail.json()["preInvoice"]["status"] == "borrador"


async def test_recruiter_cannot_approve(client, recruiter_headers, billing):
    response = await client.patch(
        f"/pre-invoices/{billing['invoice']['id']}",
        json={"action": "approve"},
        headers=recruiter_headers,
    )

    assert response.status_code == 403


async def test_list_summarizes_professionals(client, recruiter_headers, billing):
    response = await client.get(f"/pre-invoices?company_id={billing['company_id']}", headers=recruiter_headers)

    assert response.status_code == 200, response.text
    assert response.json()["total"] == 1
    [row] = response.json()["batch"]
    assert row["professionals"] == "Ana"
    assert row["item_count"] == 1


async def test_list_requires_company(client, recruiter_headers, billing):
    response = await client.get("/pre-invoices", headers=recruiter_headers)

    assert response.status_code == 400


async def test_detail_lists_billed_candidates(client, recruiter_headers, billing):
    response = await client.get(f"/pre-invoices/{billing['invoice']['id']}", headers=recruiter_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["preInvoice"]["id"] == billing["invoice"]["id"]
    assert [candidate["name"] for candidate in body["candidates"]] == ["Ana"]


async def test_client_manager_limited_to_linked_companies(client, admin_headers, headers_for, billing):
    other_company = await client.post("/company", json={"name": "Globex"}, headers=admin_headers)
    manager_headers = await client_manager_for(
        client, admin_headers, headers_for, other_company.json()["id"], "manager@globex.com"
    )

    listing = await client.get(f"/pre-invoices?company_id={billing['company_id']}", headers=manager_headers)
    detail = await client.get(f"/pre-invoices/{billing['invoice']['id']}", headers=manager_headers)
    own = await client.get(f"/pre-invoices?company_id={other_company.json()['id']}", headers=manager_headers)

    assert listing.status_code == 403
    assert detail.status_code == 404
    assert own.json() == {"total": 0, "batch": []}


async def test_items_recomputed_on_update(client, recruiter_headers, billing):
    invoice_id = billing["invoice"]["id"]
    bruno = billing["candidate_ids"][1]

    created = await client.post(
        "/pre-invoice-items",
        json={"pre_invoice_id": invoice_id, "candidate_id": bruno, "hours": 2, "rate": 100, "vat": 19},
        headers=recruiter_headers,
    )
    assert created.status_code == 201, created.text
    assert created.json()["total"] == "238"

    updated = await client.put(
        f"/pre-invoice-items/{created.json()['id']}",
        json={"hours": 3},
        headers=recruiter_headers,
    )
    assert updated.json()["subtotal"] == "300"
    assert updated.json()["total"] == "357"

    items = await client.get(f"/pre-invoice-items?pre_invoice_id={invoice_id}", headers=recruiter_headers)
    assert len(items.json()) == 2


async def test_delete_pre_invoice(client, recruiter_headers, billing):
    invoice_id = billing["invoice"]["id"]

    response = await client.delete(f"/pre-invoices/{invoice_id}", headers=recruiter_headers)

    assert response.status_code == 200
    assert (await client.get(f"/pre-invoices/{invoice_id}", headers=recruiter_headers)).status_code == 404
    items = await client.get(f"/pre-invoice-items?pre_invoice_id={invoice_id}", headers=recruiter_headers)
    assert items.json() == []


async def test_client_manager_cannot_approve_other_companies(client, admin_headers, headers_for, billing):
    invoice_id = billing["invoice"]["id"]
    other_company = await client.post("/company", json={"name": "Globex"}, headers=admin_headers)
    manager_headers = await client_manager_for(
        client, admin_headers, headers_for, other_company.json()["id"], "manager@globex.com"
    )

    detail = await client.get(f"/pre-invoices/{invoice_id}", headers=manager_headers)
    patched = await client.patch(f"/pre-invoices/{invoice_id}", json={"action": "approve"}, headers=manager_headers)

    assert detail.status_code == 404
    assert patched.status_code == 404
    unchanged = await client.get(f"/pre-invoices/{invoice_id}", headers=admin_headers)
    assert unchanged.json()["preInvoice"]["status"] == "borrador"


async def test_exact_line_totals_through_the_api(client, recruiter_headers, billing):
    bruno = billing["candidate_ids"][1]

    created = await client.post(
        "/pre-invoice-items",
        json={"pre_invoice_id": billing["invoice"]["id"], "candidate_id": bruno, "subtotal": "1", "vat": "19.555"},
        headers=recruiter_headers,
    )

    assert created.status_code == 201, created.text
    assert created.json()["vat"] == "19.555"
    assert created.json()["total"] == "1.19555"


async def test_negative_or_overlong_amounts_rejected(client, recruiter_headers, billing):
    bruno = billing["candidate_ids"][1]
    base = {"pre_invoice_id": billing["invoice"]["id"], "candidate_id": bruno}

    negative = await client.post("/pre-invoice-items", json={**base, "subtotal": "-10"}, headers=recruiter_headers)
    overlong = await client.post("/pre-invoice-items", json={**base, "vat": "19.55555"}, headers=recruiter_headers)
    professional = await client.put(
        f"/pre-invoices/{billing['invoice']['id']}",
        json={"professionals": [{"id": bruno, "subtotal": -1}]},
        headers=recruiter_headers,
    )

    assert negative.status_code == 400
    assert overlong.status_code == 400
    assert professional.status_code == 400

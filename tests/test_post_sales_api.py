"""Post-sales evaluations and the engagement rate."""

from decimal import Decimal

import pytest_asyncio


@pytest_asyncio.fixture
async def engagement(client, recruiter_headers, pipeline):
    response = await client.post(
        "/candidate-management",
        json={
            "candidate_id": pipeline["candidate_ids"][0],
            "management_id": pipeline["management_id"],
            "position": "Backend Developer",
            "rate": "0",
        },
        headers=recruiter_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


async def evaluate(client, headers, engagement_id, scores):
    stack, communication, motivation, compliance = scores
    response = await client.post(
        "/post-sales-activities",
        json={
            "candidate_management_id": engagement_id,
            "date": "2026-10-01",
            "eval_stack": stack,
            "eval_communication": communication,
            "eval_motivation": motivation,
            "eval_compliance": compliance,
        },
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


async def test_rate_follows_every_evaluation(client, recruiter_headers, engagement):
    first = await evaluate(client, recruiter_headers, engagement["id"], (5, 4, 3, 4))
    assert Decimal(first["rate"]) == Decimal("4")

    second = await evaluate(client, recruiter_headers, engagement["id"], (2, 3, 2, 3))
    assert Decimal(second["rate"]) == Decimal("3.25")

    detail = await client.get(f"/candidate-management/{engagement['id']}", headers=recruiter_headers)
    assert Decimal(detail.json()["rate"]) == Decimal("3.25")
    assert len(detail.json()["post_sales_activities"]) == 2


async def test_unknown_engagement(client, recruiter_headers, org):
    response = await client.post(
        "/post-sales-activities",
        json={"candidate_management_id": 999, "eval_stack": 5},
        headers=recruiter_headers,
    )

    assert response.status_code == 404


async def test_engagement_without_position_rejected(client, recruiter_headers, pipeline):
    response = await client.post(
        "/candidate-management",
        json={"candidate_id": pipeline["candidate_ids"][0], "management_id": pipeline["management_id"]},
        headers=recruiter_headers,
    )

    assert response.status_code == 400


async def test_past_end_date_marks_engagement_ended(client, recruiter_headers, pipeline):
    response = await client.post(
        "/candidate-management",
        json={
            "candidate_id": pipeline["candidate_ids"][1],
            "management_id": pipeline["management_id"],
            "position": "QA",
            "rate": "3",
            "end_date": "2020-01-31",
        },
        headers=recruiter_headers,
    )

    assert response.json()["status"] == "desvinculado"

    rows = await client.get("/candidate-management/all", headers=recruiter_headers)
    [row] = rows.json()
    assert row["name"] == "Bruno"
    assert row["client"] == "Acme"
    assert row["status"] == "desvinculado"


async def test_engagement_list_update_and_delete(client, recruiter_headers, pipeline, engagement):
    listed = await client.get(
        "/candidate-management",
        params={"company_id": pipeline["company_id"]},
        headers=recruiter_headers,
    )
    assert [row["id"] for row in listed.json()] == [engagement["id"]]

    other_company = await client.get(
        "/candidate-management", params={"company_id": 999}, headers=recruiter_headers
    )
    assert other_company.json() == []

    updated = await client.put(
        f"/candidate-management/{engagement['id']}",
        json={"end_date": "2020-01-31"},
        headers=recruiter_headers,
    )
    assert updated.status_code == 200
    assert updated.json()["status"] == "desvinculado"

    deleted = await client.delete(f"/candidate-management/{engagement['id']}", headers=recruiter_headers)
    assert deleted.status_code == 200

    missing = await client.get(f"/candidate-management/{engagement['id']}", headers=recruiter_headers)
    assert missing.status_code == 404

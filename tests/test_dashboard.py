"""Dashboard aggregation."""

from datetime import datetime, timezone

import pytest

from backoffice.services.dashboard_service import average_close_days, close_days, close_time_history
from backoffice.utils.time import months_ago, utc_now


def at(year, month, day, hour=0):
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


@pytest.mark.unit
def test_close_days_is_at_least_one():
    assert close_days(at(2026, 1, 1), at(2026, 1, 1, 3)) == 1
    assert close_days(at(2026, 1, 1), at(2026, 1, 11)) == 10


@pytest.mark.unit
def test_average_close_days():
    assert average_close_days([]) == 0
    assert average_close_days([(at(2026, 1, 1), at(2026, 1, 5)), (at(2026, 2, 1), at(2026, 2, 11))]) == 7


@pytest.mark.unit
def test_close_time_history_groups_by_closing_month():
    history = close_time_history(
        [
            (at(2026, 3, 1), at(2026, 3, 21)),
            (at(2026, 1, 1), at(2026, 1, 3)),
            (at(2026, 3, 10), at(2026, 3, 20)),
        ]
    )

    assert history.labels == ["2026-01", "2026-03"]
    assert history.values == [2, 15]


@pytest.mark.unit
def test_months_ago_clamps_day():
    assert months_ago(at(2026, 5, 31), 3) == at(2026, 2, 28)
    assert months_ago(at(2026, 1, 15), 3) == at(2025, 10, 15)


async def test_stats_after_closing_a_process(client, recruiter_headers, pipeline):
    process_id = pipeline["process_id"]
    await client.put(
        f"/candidate-process/process/{process_id}",
        json={"action": "select", "candidateId": pipeline["candidate_ids"][0]},
        headers=recruiter_headers,
    )
    await client.post(
        "/process",
        json={"job_offer": "Data Engineer", "management_id": pipeline["management_id"]},
        headers=recruiter_headers,
    )
    closed = await client.put(f"/process/{process_id}", json={"action": "close"}, headers=recruiter_headers)
    assert closed.status_code == 200, closed.text

    response = await client.get(
        f"/dashboard/stats?company_id={pipeline['company_id']}", headers=recruiter_headers
    )

    assert response.status_code == 200, response.text
    stats = response.json()
    assert stats["active_processes"] == 1
    assert stats["closed_processes"] == 1
    assert stats["closed_this_quarter"] == 1
    assert stats["active_professionals"] == 1
    assert stats["average_close_days"] == 1
    assert stats["close_time_history"]["labels"] == [utc_now().strftime("%Y-%m")]
    assert stats["days_since_last_active_process"] == 0


async def test_stats_for_unknown_company_are_zero(client, recruiter_headers, pipeline):
    response = await client.get("/dashboard/stats?company_id=999", headers=recruiter_headers)

    assert response.json()["active_processes"] == 0
    assert response.json()["close_time_history"] == {"labels": [], "values": []}

"""Pipeline stage dispatcher and candidate-process endpoints."""

from backoffice.core.permissions import Roles


async def stages(client, headers, process_id):
    response = await client.get(f"/candidate-process/process/{process_id}", headers=headers)
    assert response.status_code == 200, response.text
    return {candidate["id"]: candidate["stage"] for candidate in response.json()["candidates"]}


async def test_select_then_back_to_interviews(client, recruiter_headers, pipeline):
    process_id = pipeline["process_id"]
    ana, bruno, carla = pipeline["candidate_ids"]
    url = f"/candidate-process/process/{process_id}"

    selected = await client.put(url, json={"action": "select", "candidateId": bruno}, headers=recruiter_headers)
    assert selected.status_code == 200, selected.text
    assert selected.json()["action"] == "select"
    assert selected.json()["updated"]["stage"] == "seleccionado"
    assert await stages(client, recruiter_headers, process_id) == {
        ana: "entrevistas",
        bruno: "seleccionado",
        carla: "entrevistas",
    }

    back = await client.put(url, json={"action": "back-interview", "candidateId": bruno}, headers=recruiter_headers)
    assert back.status_code == 200, back.text
    assert set((await stages(client, recruiter_headers, process_id)).values()) == {"entrevistas"}


async def test_disqualify(client, recruiter_headers, pipeline):
    process_id = pipeline["process_id"]
    carla = pipeline["candidate_ids"][2]

    response = await client.put(
        f"/candidate-process/process/{process_id}",
        json={"action": "disqualify", "candidateId": carla},
        headers=recruiter_headers,
    )

    assert response.status_code == 200, response.text
    assert (await stages(client, recruiter_headers, process_id))[carla] == "descartado"


async def test_unknown_action_changes_nothing(client, recruiter_headers, pipeline):
    process_id = pipeline["process_id"]
    before = await stages(client, recruiter_headers, process_id)

    response = await client.put(
        f"/candidate-process/process/{process_id}",
        json={"action": "promote", "candidateId": pipeline["candidate_ids"][0]},
        headers=recruiter_headers,
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Unrecognized action: promote"}
    assert await stages(client, recruiter_headers, process_id) == before


async def test_missing_candidate_id(client, recruiter_headers, pipeline):
    response = await client.put(
        f"/candidate-process/process/{pipeline['process_id']}",
        json={"action": "select"},
        headers=recruiter_headers,
    )

    assert response.status_code == 400
    assert "error" in response.json()


async def test_candidate_outside_the_process(client, recruiter_headers, pipeline):
    outsider = await client.post("/candidates", json={"name": "Diego"}, headers=recruiter_headers)

    response = await client.put(
        f"/candidate-process/process/{pipeline['process_id']}",
        json={"action": "select", "candidateId": outsider.json()["candidate"]["id"]},
        headers=recruiter_headers,
    )

    assert response.status_code == 404


async def test_edit_updates_row_and_adds_candidates(client, recruiter_headers, pipeline):
    process_id = pipeline["process_id"]
    rows = (await client.get(f"/candidate-process?process_id={process_id}", headers=recruiter_headers)).json()
    row = rows[0]
    newcomer = (await client.post("/candidates", json={"name": "Elena"}, headers=recruiter_headers)).json()

    response = await client.put(
        f"/candidate-process/process/{process_id}",
        json={
            "action": "edit",
            "candidateId": row["id"],
            "data": {
                "match_percent": 95,
                "technical_skills": "Python, SQL",
                "client_comments": {"comment": "Strong", "techSkills": "good"},
                "candidate_ids": [newcomer["candidate"]["id"]],
            },
        },
        headers=recruiter_headers,
    )

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["updated"]["match_percent"] == 95
    assert body["updated"]["technical_skills"] == "Python, SQL"
    assert body["updated"]["client_comments"]["techSkills"] == "good"
    assert [added["candidate_id"] for added in body["added"]] == [newcomer["candidate"]["id"]]
    assert len(await stages(client, recruiter_headers, process_id)) == 4


async def test_edit_adding_existing_candidate_is_rolled_back(client, recruiter_headers, pipeline):
    process_id = pipeline["process_id"]
    rows = (await client.get(f"/candidate-process?process_id={process_id}", headers=recruiter_headers)).json()
    row = rows[0]

    response = await client.put(
        f"/candidate-process/process/{process_id}",
        json={
            "action": "edit",
            "candidateId": row["id"],
            "data": {"match_percent": 10, "candidate_ids": [pipeline["candidate_ids"][1]]},
        },
        headers=recruiter_headers,
    )

    assert response.status_code == 409
    stored = await client.get(f"/candidate-process/{row['id']}", headers=recruiter_headers)
    assert stored.json()["match_percent"] == row["match_percent"]


async def test_dispatcher_requires_staff_role(client, headers_for, pipeline):
    response = await client.put(
        f"/candidate-process/process/{pipeline['process_id']}",
        json={"action": "select", "candidateId": pipeline["candidate_ids"][0]},
        headers=headers_for(Roles.CLIENT),
    )

    assert response.status_code == 403


async def test_duplicate_association_conflicts(client, recruiter_headers, pipeline):
    response = await client.post(
        "/candidate-process",
        json={"candidate_id": pipeline["candidate_ids"][0], "process_id": pipeline["process_id"]},
        headers=recruiter_headers,
    )

    assert response.status_code == 409


async def test_notes_merge(client, recruiter_headers, pipeline):
    rows = (
        await client.get(f"/candidate-process?process_id={pipeline['process_id']}", headers=recruiter_headers)
    ).json()
    row_id = rows[0]["id"]

    first = await client.put(
        f"/candidate-process/{row_id}/notes",
        json={"comment": "Good fit", "techSkills": "Solid backend"},
        headers=recruiter_headers,
    )
    second = await client.put(
        f"/candidate-process/{row_id}/notes",
        json={"softSkills": "Clear communicator"},
        headers=recruiter_headers,
    )

    assert first.status_code == 200, first.text
    assert second.json()["client_comments"] == {
        "comment": "Good fit",
        "techSkills": "Solid backend",
        "softSkills": "Clear communicator",
    }


async def test_empty_notes_rejected(client, recruiter_headers, pipeline):
    rows = (
        await client.get(f"/candidate-process?process_id={pipeline['process_id']}", headers=recruiter_headers)
    ).json()

    response = await client.put(f"/candidate-process/{rows[0]['id']}/notes", json={}, headers=recruiter_headers)

    assert response.status_code == 400


async def test_remove_every_candidate_from_process(client, recruiter_headers, pipeline):
    process_id = pipeline["process_id"]

    response = await client.delete(f"/candidate-process/process/{process_id}", headers=recruiter_headers)

    assert response.status_code == 200
    assert await stages(client, recruiter_headers, process_id) == {}

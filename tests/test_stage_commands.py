"""Parsing of pipeline commands."""

import pytest

from backoffice.errors import UnrecognizedActionError, ValidationError
from backoffice.schemas.candidate_process import EditCommand, StageAction, StageChangeCommand
from backoffice.services.candidate_process_service import STAGE_BY_ACTION, parse_stage_command

pytestmark = pytest.mark.unit


@pytest.mark.parametrize("action", ["disqualify", "back-interview", "select"])
def test_stage_change_actions(action):
    command = parse_stage_command({"action": action, "candidateId": 3})

    assert isinstance(command, StageChangeCommand)
    assert command.candidate_id == 3
    assert StageAction(command.action) in STAGE_BY_ACTION


def test_edit_with_data():
    command = parse_stage_command(
        {
            "action": "edit",
            "candidateId": 9,
            "data": {
                "candidate_ids": [4, 5],
                "match_percent": 80,
                "client_comments": {"comment": "ok", "techSkills": "python"},
            },
        }
    )

    assert isinstance(command, EditCommand)
    assert command.data.candidate_ids == [4, 5]
    assert command.data.client_comments.tech_skills == "python"


def test_edit_without_data_is_a_no_op_edit():
    command = parse_stage_command({"action": "edit", "candidateId": 1})

    assert command.data.candidate_ids == []
    assert command.data.model_fields_set == set()


def test_unknown_action():
    with pytest.raises(UnrecognizedActionError) as exc_info:
        parse_stage_command({"action": "promote", "candidateId": 1})

    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "Unrecognized action: promote"


@pytest.mark.parametrize(
    "body",
    [
        None,
        [],
        "select",
        {},
        {"action": "select"},
        {"candidateId": 2},
        {"action": "", "candidateId": 2},
    ],
)
def test_missing_or_malformed_body(body):
    with pytest.raises(ValidationError):
        parse_stage_command(body)


@pytest.mark.parametrize("candidate_id", [0, -1, "abc"])
def test_candidate_id_must_be_a_positive_integer(candidate_id):
    with pytest.raises(ValidationError) as exc_info:
        parse_stage_command({"action": "select", "candidateId": candidate_id})

    assert not isinstance(exc_info.value, UnrecognizedActionError)


def test_invalid_edit_payload():
    with pytest.raises(ValidationError):
        parse_stage_command({"action": "edit", "candidateId": 1, "data": {"match_percent": 150}})

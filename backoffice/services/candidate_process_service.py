"""
CandidateProcess business logic service.

Holds the pipeline dispatcher: a closed set of actions (``StageAction``)
applied to one candidate inside one process. Commands are parsed and
validated before anything is written, so an unknown action never touches
the database.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from pydantic import TypeAdapter, ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.errors import (
    ConflictError,
    NotFoundError,
    UnrecognizedActionError,
    ValidationError,
    describe_validation_errors,
)
from backoffice.models.candidate_process import (
    CandidateProcess,
    STAGE_DISCARDED,
    STAGE_INTERVIEWS,
    STAGE_SELECTED,
)
from backoffice.repositories.candidate_process_repository import CandidateProcessRepository
from backoffice.repositories.candidate_repository import CandidateRepository
from backoffice.repositories.process_repository import ProcessRepository
from backoffice.schemas.candidate_process import (
    CandidateProcessCreate,
    CandidateProcessRead,
    CandidateProcessUpdate,
    ClientNote,
    EditCommand,
    NotesUpdate,
    StageAction,
    StageChangeCommand,
    StageCommand,
    StageCommandResult,
)

logger = logging.getLogger(__name__)

# Stage written by each stage-changing action
STAGE_BY_ACTION = {
    StageAction.DISQUALIFY: STAGE_DISCARDED,
    StageAction.BACK_INTERVIEW: STAGE_INTERVIEWS,
    StageAction.SELECT: STAGE_SELECTED,
}

_stage_command_adapter = TypeAdapter(StageCommand)


def parse_stage_command(body: Any) -> Union[EditCommand, StageChangeCommand]:
    """
    Turn a raw request body into a typed pipeline command.

    Raises:
        ValidationError: body is not an object, ``action``/``candidateId``
            missing, or the payload does not fit the action
        UnrecognizedActionError: ``action`` is outside ``StageAction``
    """
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")

    action = body.get("action")
    if action in (None, "") or body.get("candidateId") in (None, ""):
        raise ValidationError('"action" and "candidateId" are required')

    try:
        StageAction(action)
    except ValueError:
        raise UnrecognizedActionError(action)

    try:
        return _stage_command_adapter.validate_python(body)
    except PydanticValidationError as exc:
        raise ValidationError(describe_validation_errors(exc.errors()))


def serialize_client_note(note: Optional[ClientNote]) -> Optional[Dict[str, Any]]:
    return note.to_storage() if note is not None else None


class CandidateProcessService:
    """Service for candidate-in-process business logic."""

    def __init__(self, db: AsyncSession):
        self.repository = CandidateProcessRepository(db)
        self.process_repository = ProcessRepository(db)
        self.candidate_repository = CandidateRepository(db)
        self._handlers = {
            StageAction.EDIT: self._edit,
            StageAction.DISQUALIFY: self._change_stage,
            StageAction.BACK_INTERVIEW: self._change_stage,
            StageAction.SELECT: self._change_stage,
        }

    # CRUD

    async def list_links(
        self,
        process_id: Optional[int] = None,
        candidate_id: Optional[int] = None,
    ) -> List[CandidateProcess]:
        return await self.repository.list(process_id=process_id, candidate_id=candidate_id)

    async def get_link(self, row_id: int) -> CandidateProcess:
        row = await self.repository.get_by_id(row_id)
        if not row:
            raise NotFoundError(f"Candidate-process {row_id} not found")
        return row

    async def create_link(self, data: CandidateProcessCreate) -> CandidateProcess:
        """Attach a candidate to a process; a pair can only exist once."""
        if not await self.candidate_repository.get_by_id(data.candidate_id):
            raise NotFoundError(f"Candidate {data.candidate_id} not found")
        if not await self.process_repository.get_by_id(data.process_id):
            raise NotFoundError(f"Process {data.process_id} not found")
        await self._ensure_not_linked(data.candidate_id, data.process_id)

        fields = data.model_dump(exclude={"client_comments"})
        fields["client_comments"] = serialize_client_note(data.client_comments)
        return await self.repository.create(**fields)

    async def update_link(self, row_id: int, data: CandidateProcessUpdate) -> CandidateProcess:
        row = await self.get_link(row_id)
        values = data.model_dump(exclude_unset=True, exclude={"client_comments"})
        if "client_comments" in data.model_fields_set:
            values["client_comments"] = serialize_client_note(data.client_comments)
        return await self.repository.update_fields(row, values)

    async def delete_link(self, row_id: int) -> None:
        row = await self.get_link(row_id)
        await self.repository.delete(row)

    async def delete_process_links(self, process_id: int) -> int:
        if not await self.process_repository.get_by_id(process_id):
            raise NotFoundError(f"Process {process_id} not found")
        removed = await self.repository.delete_for_process(process_id)
        logger.info("Removed %d candidate(s) from process %s", removed, process_id)
        return removed

    async def update_notes(self, row_id: int, data: NotesUpdate) -> CandidateProcess:
        """Merge the given client-note keys into the stored note."""
        patch = data.model_dump(include=data.model_fields_set)
        if not any(value is not None for value in patch.values()):
            raise ValidationError("At least one of techSkills, softSkills or comment is required")

        row = await self.get_link(row_id)
        current = ClientNote.model_validate(row.client_comments or {})
        merged = current.model_copy(update=patch)
        return await self.repository.update_fields(row, {"client_comments": merged.to_storage()})

    # Pipeline dispatcher

    async def apply_stage_command(self, process_id: int, body: Any) -> StageCommandResult:
        """
        Parse ``body`` and apply it to the candidate inside ``process_id``.

        Raises:
            ValidationError: bad ids or payload
            UnrecognizedActionError: unknown action (nothing is written)
            NotFoundError: no matching pipeline row / candidate
            ConflictError: ``edit`` tried to add a candidate already in the process
        """
        if process_id < 1:
            raise ValidationError("process_id must be a positive integer")

        command = parse_stage_command(body)
        action = StageAction(command.action)
        handler = self._handlers[action]
        return await handler(process_id, action, command)

    async def _edit(self, process_id: int, action: StageAction, command: EditCommand) -> StageCommandResult:
        row = await self.repository.get_in_process(command.candidate_id, process_id)
        if not row:
            raise NotFoundError(
                f"Candidate-process {command.candidate_id} not found in process {process_id}"
            )

        data = command.data
        values = data.model_dump(exclude_unset=True, exclude={"candidate_ids", "client_comments"})
        if "client_comments" in data.model_fields_set:
            values["client_comments"] = serialize_client_note(data.client_comments)
        row = await self.repository.update_fields(row, values)

        added = []
        for candidate_id in data.candidate_ids:
            if not await self.candidate_repository.get_by_id(candidate_id):
                raise NotFoundError(f"Candidate {candidate_id} not found")
            await self._ensure_not_linked(candidate_id, process_id)
            added.append(
                await self.repository.create(candidate_id=candidate_id, process_id=process_id)
            )

        logger.info(
            "Edited candidate-process %s in process %s (%d candidate(s) added)",
            row.id,
            process_id,
            len(added),
        )
        message = "Candidate-process updated"
        if added:
            message = "Candidate-process updated and candidates added"
        return StageCommandResult(
            message=message,
            action=action,
            updated=CandidateProcessRead.model_validate(row),
            added=[CandidateProcessRead.model_validate(item) for item in added],
        )

    async def _change_stage(
        self,
        process_id: int,
        action: StageAction,
        command: StageChangeCommand,
    ) -> StageCommandResult:
        stage = STAGE_BY_ACTION[action]
        matched = await self.repository.set_stage(command.candidate_id, process_id, stage)
        if not matched:
            raise NotFoundError(
                f"Candidate {command.candidate_id} is not part of process {process_id}"
            )

        row = await self.repository.get_pair(command.candidate_id, process_id)
        logger.info(
            "Candidate %s in process %s moved to stage %s",
            command.candidate_id,
            process_id,
            stage,
        )
        return StageCommandResult(
            message=f"Candidate stage set to {stage}",
            action=action,
            updated=CandidateProcessRead.model_validate(row),
        )

    async def _ensure_not_linked(self, candidate_id: int, process_id: int) -> None:
        if await self.repository.get_pair(candidate_id, process_id):
            raise ConflictError(f"Candidate {candidate_id} is already in process {process_id}")

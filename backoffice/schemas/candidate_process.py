"""
CandidateProcess Pydantic schemas, including the pipeline stage commands.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from backoffice.schemas.base import ORMRead


class StageAction(str, Enum):
    """Actions accepted by the pipeline dispatcher."""

    EDIT = "edit"
    DISQUALIFY = "disqualify"
    BACK_INTERVIEW = "back-interview"
    SELECT = "select"


class ClientNote(BaseModel):
    """
    Structured client feedback stored in ``candidate_process.client_comments``.

    Stored and rendered with the camelCase keys the front-end uses.
    """

    comment: Optional[str] = None
    tech_skills: Optional[str] = Field(default=None, alias="techSkills")
    soft_skills: Optional[str] = Field(default=None, alias="softSkills")

    model_config = ConfigDict(populate_by_name=True)

    def to_storage(self) -> dict:
        return self.model_dump(by_alias=True)


class CandidateProcessCreate(BaseModel):
    """Schema for attaching a candidate to a process."""

    candidate_id: int
    process_id: int
    match_percent: Optional[int] = Field(default=None, ge=0, le=100)
    stage: Literal["entrevistas", "seleccionado", "descartado"] = "entrevistas"
    technical_skills: Optional[str] = None
    soft_skills: Optional[str] = None
    client_comments: Optional[ClientNote] = None
    interview_questions: Optional[str] = None


class CandidateProcessUpdate(BaseModel):
    """Schema for updating an association. All fields optional."""

    match_percent: Optional[int] = Field(default=None, ge=0, le=100)
    stage: Optional[Literal["entrevistas", "seleccionado", "descartado"]] = None
    technical_skills: Optional[str] = None
    soft_skills: Optional[str] = None
    client_comments: Optional[ClientNote] = None
    interview_questions: Optional[str] = None


class CandidateProcessRead(ORMRead):
    candidate_id: int
    process_id: int
    match_percent: Optional[int] = None
    stage: str
    technical_skills: Optional[str] = None
    soft_skills: Optional[str] = None
    client_comments: Optional[ClientNote] = None
    interview_questions: Optional[str] = None


class NotesUpdate(BaseModel):
    """Partial client note; only the keys sent overwrite the stored ones."""

    comment: Optional[str] = None
    tech_skills: Optional[str] = Field(default=None, alias="techSkills")
    soft_skills: Optional[str] = Field(default=None, alias="softSkills")

    model_config = ConfigDict(populate_by_name=True)


# Pipeline stage commands


class EditData(BaseModel):
    """Fields an ``edit`` may overwrite, plus candidates to add to the process."""

    candidate_ids: List[Annotated[int, Field(gt=0)]] = Field(default_factory=list)
    technical_skills: Optional[str] = None
    soft_skills: Optional[str] = None
    client_comments: Optional[ClientNote] = None
    match_percent: Optional[int] = Field(default=None, ge=0, le=100)
    interview_questions: Optional[str] = None


class EditCommand(BaseModel):
    """``candidateId`` here is the id of the candidate_process row."""

    action: Literal["edit"]
    candidate_id: int = Field(alias="candidateId", gt=0)
    data: EditData = Field(default_factory=EditData)

    model_config = ConfigDict(populate_by_name=True)


class StageChangeCommand(BaseModel):
    """``candidateId`` here is the candidate's id."""

    action: Literal["disqualify", "back-interview", "select"]
    candidate_id: int = Field(alias="candidateId", gt=0)

    model_config = ConfigDict(populate_by_name=True)


StageCommand = Annotated[
    Union[EditCommand, StageChangeCommand],
    Field(discriminator="action"),
]


class StageCommandResult(BaseModel):
    message: str
    action: StageAction
    updated: Optional[CandidateProcessRead] = None
    added: List[CandidateProcessRead] = Field(default_factory=list)


# Pipeline view of a process


class PipelineCandidate(BaseModel):
    id: int
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    match: int = 0
    stage: str


class PipelineView(BaseModel):
    """Process with its candidates as the recruiting board renders it."""

    id: int
    name: str
    start_at: Optional[datetime] = Field(default=None, serialization_alias="startAt")
    end_at: Optional[datetime] = Field(default=None, serialization_alias="endAt")
    pre_filtered: int = Field(default=0, serialization_alias="preFiltered")
    candidates: List[PipelineCandidate] = Field(default_factory=list)
    state: str = "pending"

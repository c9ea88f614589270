from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictInt


class QuizAnswerRequestDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    phase_ticket: str = Field(alias="phaseTicket", min_length=1, max_length=4096)
    question_index: StrictInt = Field(alias="questionIndex")
    answer: str = Field(min_length=1, max_length=8)


class CodeSubmissionRequestDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    phase_ticket: str = Field(alias="phaseTicket", min_length=1, max_length=4096)
    code: str

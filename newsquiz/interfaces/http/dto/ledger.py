from __future__ import annotations

from pydantic import BaseModel, Field, StrictInt


class AddPointsRequestDTO(BaseModel):
    points: StrictInt


class AddPointsResponseDTO(BaseModel):
    success: bool = True
    points: int


class RankingQueryDTO(BaseModel):
    limit: int | None = Field(None, ge=1)


class RankingEntryDTO(BaseModel):
    username: str
    points: int

"""Pydantic models for the persisted statistics file."""

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .config import UINT16_MAX
from .errors import StatisticsFileError


class StatsRecord(BaseModel):
    """One saved entry: counters plus the answer they were earned against."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    streak: int = Field(0, alias='Streak', ge=0, le=UINT16_MAX)
    correct: int = Field(0, alias='Correct', ge=0, le=UINT16_MAX)
    mistakes: int = Field(0, alias='Mistakes', ge=0, le=UINT16_MAX)
    answer: str = Field('', alias='Answer')


class StatisticsSnapshot(BaseModel):
    """Whole statistics file, keyed by encoded prompt."""

    model_config = ConfigDict(populate_by_name=True)

    statistics: dict[str, StatsRecord] = Field(default_factory=dict, alias='Statistics')

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)


def parse_snapshot(data: dict) -> StatisticsSnapshot:
    """Validate decoded statistics file content."""
    try:
        return StatisticsSnapshot.model_validate(data)
    except ValidationError as e:
        raise StatisticsFileError(f'Failed to parse statistics file:\n{e}') from e

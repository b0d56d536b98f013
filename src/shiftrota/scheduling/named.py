"""Base model for named schedule entities (shifts, rotations, teams, holidays)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator

from shiftrota.core.messages import get_message

__all__ = ["Named"]


class Named(BaseModel):
    """Entity identified by its name within the owning collection.

    Attributes
    ----------
    name:
        Identifier, unique per collection (teams, shifts, rotations, non-working periods).
    description:
        Optional free-form text used in summaries.
    """

    model_config = ConfigDict(validate_assignment=True, arbitrary_types_allowed=True)

    name: str
    description: str | None = None

    @field_validator("name", mode="before")
    @classmethod
    def _name_defined(cls, value: object) -> object:
        if value is None:
            raise ValueError(get_message("name.not.defined"))
        return value

    def __eq__(self, other: object) -> bool:
        if other is None or type(self) is not type(other):
            return False
        return self.name == other.name  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash(self.name)

    def __str__(self) -> str:
        return f"{self.name} ({self.description})"

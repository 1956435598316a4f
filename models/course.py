"""Datenmodell für einen Kurs (Pydantic v2)."""

from pydantic import BaseModel, ConfigDict


class Course(BaseModel):
    """Repräsentiert eine Lehrveranstaltung."""

    model_config = ConfigDict(frozen=True)

    code: str  # "MAT101"
    name: str  # "Calculus"

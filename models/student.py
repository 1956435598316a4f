"""Datenmodell für Studierende (Pydantic v2)."""

from pydantic import BaseModel, ConfigDict


class Student(BaseModel):
    """Repräsentiert eine eingeschriebene Person."""

    model_config = ConfigDict(frozen=True)

    id: str    # Ausweisnummer (Cédula), 6–12 Zeichen
    name: str  # "Ana Lopez"

"""Datenmodell für einen Studierenden (Pydantic v2)."""

from pydantic import BaseModel


class Student(BaseModel):
    """Repräsentiert einen Studierenden im Verzeichnis."""

    id: str       # Banner-ID ("B001"), Präfix wird in registry.validation geprüft
    name: str     # "Alice"
    email: str    # Format wird nicht geprüft

    @property
    def key(self) -> str:
        """Schlüssel im Verzeichnis (Groß-/Kleinschreibung egal)."""
        return self.id.upper()

    def __str__(self) -> str:
        return f"{self.id} {self.name} <{self.email}>"

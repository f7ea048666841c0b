"""Datenmodell für einen Kurs mit Teilnehmerliste und Warteliste (Pydantic v2)."""

from typing import Optional

from pydantic import BaseModel


def _position(ids: list[str], student_id: str) -> Optional[int]:
    # Banner-IDs vergleichen ohne Rücksicht auf Groß-/Kleinschreibung
    key = student_id.strip().upper()
    for i, sid in enumerate(ids):
        if sid.upper() == key:
            return i
    return None


class Course(BaseModel):
    """Repräsentiert einen Kurs.

    Invarianten (werden vom EnrollmentCoordinator gewahrt, nicht vom Modell):
    - len(roster) <= capacity
    - eine ID steht höchstens in roster ODER waitlist
    - IDs sind eindeutig ohne Rücksicht auf Groß-/Kleinschreibung
    """

    code: str                  # "CSCI4490"
    title: str                 # "Software Engineering"
    capacity: int              # 1..500
    roster: list[str] = []     # Eingeschriebene IDs in Einschreibe-Reihenfolge
    waitlist: list[str] = []   # Warteliste, FIFO (Kopf = Index 0)

    @property
    def free_seats(self) -> int:
        """Anzahl freier Plätze (nie negativ)."""
        return max(self.capacity - len(self.roster), 0)

    @property
    def is_full(self) -> bool:
        return len(self.roster) >= self.capacity

    def roster_position(self, student_id: str) -> Optional[int]:
        """Index der ID in der Teilnehmerliste oder None."""
        return _position(self.roster, student_id)

    def waitlist_position(self, student_id: str) -> Optional[int]:
        """Index der ID auf der Warteliste (0 = nächste/r) oder None."""
        return _position(self.waitlist, student_id)

    def __str__(self) -> str:
        return (
            f"{self.code} {self.title} cap={self.capacity} "
            f"enrolled={len(self.roster)} wait={len(self.waitlist)}"
        )

"""Persistierte Verknüpfung Kurs ↔ Studierender (Einschreibung oder Warteliste)."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class LinkStatus(str, Enum):
    ENROLLED = "ENROLLED"
    WAITLIST = "WAITLIST"

    @classmethod
    def parse(cls, raw: str) -> Optional["LinkStatus"]:
        """Parst den Status ohne Rücksicht auf Groß-/Kleinschreibung.

        Unbekannte Werte → None (der Datensatz wird beim Laden ignoriert).
        """
        try:
            return cls(raw.strip().upper())
        except ValueError:
            return None


@dataclass(frozen=True)
class EnrollmentLink:
    """Eine Zeile im Einschreibungs-Speicher: code|studentId|STATUS."""

    code: str
    student_id: str
    status: LinkStatus

"""Ergebnis-Typ für enroll/drop.

Ersetzt String-Codes wie "PROMOTED:B102": die nachgerückte ID steckt in
einem eigenen Feld, der Aufrufer muss nichts zerlegen.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class OutcomeKind(str, Enum):
    ENROLLED = "enrolled"
    WAITLISTED = "waitlisted"
    ALREADY_ENROLLED = "already_enrolled"
    ALREADY_WAITLISTED = "already_waitlisted"
    NO_SUCH_COURSE = "no_such_course"
    BLANK_INPUT = "blank_input"
    PROMOTED = "promoted"
    DROPPED = "dropped"
    WAITLIST_REMOVED = "waitlist_removed"
    NOT_ENROLLED = "not_enrolled"


class BlankField(str, Enum):
    STUDENT_ID = "student_id"
    COURSE_CODE = "course_code"


# Ergebnisse, nach denen der Kurs verändert und gespeichert wurde
_MUTATING = {
    OutcomeKind.ENROLLED,
    OutcomeKind.WAITLISTED,
    OutcomeKind.PROMOTED,
    OutcomeKind.DROPPED,
    OutcomeKind.WAITLIST_REMOVED,
}


@dataclass(frozen=True)
class EnrollmentOutcome:
    """Getaggtes Ergebnis einer Einschreibung oder Abmeldung."""

    kind: OutcomeKind
    promoted_id: Optional[str] = None       # nur bei PROMOTED
    blank_field: Optional[BlankField] = None  # nur bei BLANK_INPUT

    # ─── Konstruktoren ───

    @classmethod
    def of(cls, kind: OutcomeKind) -> "EnrollmentOutcome":
        if kind in (OutcomeKind.PROMOTED, OutcomeKind.BLANK_INPUT):
            raise ValueError(f"{kind.value} benötigt Nutzdaten – promoted()/blank() verwenden.")
        return cls(kind=kind)

    @classmethod
    def promoted(cls, student_id: str) -> "EnrollmentOutcome":
        return cls(kind=OutcomeKind.PROMOTED, promoted_id=student_id)

    @classmethod
    def blank(cls, field: BlankField) -> "EnrollmentOutcome":
        return cls(kind=OutcomeKind.BLANK_INPUT, blank_field=field)

    # ─── Auswertung ───

    @property
    def changed(self) -> bool:
        """True wenn Teilnehmer- oder Warteliste verändert wurde."""
        return self.kind in _MUTATING

    @property
    def is_error(self) -> bool:
        """True für Eingabefehler (leeres Feld, unbekannter Kurs)."""
        return self.kind in (OutcomeKind.BLANK_INPUT, OutcomeKind.NO_SUCH_COURSE)

    def describe(self) -> str:
        """Kurze deutsche Beschreibung für die Ausgabe im CLI."""
        if self.kind is OutcomeKind.BLANK_INPUT:
            label = "Banner-ID" if self.blank_field is BlankField.STUDENT_ID else "Kurscode"
            return f"{label} darf nicht leer sein."
        if self.kind is OutcomeKind.PROMOTED:
            return f"Abgemeldet. {self.promoted_id} ist von der Warteliste nachgerückt."
        return _MESSAGES[self.kind]


_MESSAGES = {
    OutcomeKind.ENROLLED: "Eingeschrieben.",
    OutcomeKind.WAITLISTED: "Kurs voll. Auf die Warteliste gesetzt.",
    OutcomeKind.ALREADY_ENROLLED: "Bereits eingeschrieben.",
    OutcomeKind.ALREADY_WAITLISTED: "Bereits auf der Warteliste.",
    OutcomeKind.NO_SUCH_COURSE: "Kurs nicht gefunden.",
    OutcomeKind.DROPPED: "Abgemeldet.",
    OutcomeKind.WAITLIST_REMOVED: "Von der Warteliste entfernt.",
    OutcomeKind.NOT_ENROLLED: "Weder eingeschrieben noch auf der Warteliste.",
}

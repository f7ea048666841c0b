"""Eingabeprüfung für Studierende und Kurse.

Alle Prüfungen laufen VOR jeder Änderung; bei einem Fehler bleibt der
Speicher unverändert.
"""

from typing import Optional

BANNER_PREFIX = "B"
MIN_CAPACITY = 1
MAX_CAPACITY = 500


class ValidationError(ValueError):
    """Ungültige Eingabe beim Anlegen eines Studierenden oder Kurses."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


def is_blank(value: Optional[str]) -> bool:
    """True für None, "" und reine Leerzeichen."""
    return value is None or not str(value).strip()


def _require(value: Optional[str], field: str, label: str) -> str:
    if is_blank(value):
        raise ValidationError(f"{label} darf nicht leer sein", field=field)
    return value.strip()


def validate_student_input(banner_id: Optional[str], name: Optional[str],
                           email: Optional[str]) -> tuple[str, str, str]:
    """Prüft die Felder eines Studierenden und gibt sie getrimmt zurück.

    Reihenfolge: Banner-ID, Name, E-Mail (leer?), danach das "B"-Präfix.
    Das Präfix wird ohne Rücksicht auf Groß-/Kleinschreibung geprüft.
    """
    banner_id = _require(banner_id, "id", "Banner-ID")
    name = _require(name, "name", "Name")
    email = _require(email, "email", "E-Mail")
    if not banner_id.upper().startswith(BANNER_PREFIX):
        raise ValidationError(
            f"Banner-ID muss mit '{BANNER_PREFIX}' beginnen: {banner_id!r}", field="id"
        )
    return banner_id, name, email


def validate_course_input(code: Optional[str], title: Optional[str],
                          capacity) -> tuple[str, str, int]:
    """Prüft die Felder eines Kurses und gibt sie getrimmt zurück."""
    code = _require(code, "code", "Kurscode")
    title = _require(title, "title", "Titel")
    # bool ist eine int-Unterklasse, als Kapazität aber Unsinn
    if isinstance(capacity, bool) or not isinstance(capacity, int):
        raise ValidationError(
            f"Kapazität muss eine ganze Zahl sein: {capacity!r}", field="capacity"
        )
    if capacity < MIN_CAPACITY:
        raise ValidationError(
            f"Kapazität muss mindestens {MIN_CAPACITY} sein", field="capacity"
        )
    if capacity > MAX_CAPACITY:
        raise ValidationError(
            f"Kapazität darf {MAX_CAPACITY} nicht überschreiten", field="capacity"
        )
    return code, title, capacity

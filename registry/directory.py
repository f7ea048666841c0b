"""StudentDirectory: ID-indiziertes Verzeichnis der Studierenden."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Optional

from models.student import Student
from registry.validation import is_blank, validate_student_input

if TYPE_CHECKING:
    from storage.synchronizer import PersistenceSynchronizer


class StudentDirectory:
    """Verzeichnis in Einfüge-Reihenfolge.

    Erneutes Anlegen derselben ID überschreibt den Datensatz (Upsert), die
    Position in list() bleibt dabei erhalten. Schlüssel ist die ID ohne
    Rücksicht auf Groß-/Kleinschreibung.
    """

    def __init__(self, synchronizer: Optional[PersistenceSynchronizer] = None):
        self._students: dict[str, Student] = {}
        self._sync = synchronizer

    def add(self, banner_id: str, name: str, email: str) -> Student:
        """Legt einen Studierenden an (oder überschreibt ihn) und speichert sofort.

        Raises:
            ValidationError: Leeres Feld oder Banner-ID ohne "B"-Präfix.
        """
        banner_id, name, email = validate_student_input(banner_id, name, email)
        student = Student(id=banner_id, name=name, email=email)
        self._students[student.key] = student
        if self._sync is not None:
            self._sync.save_students(self.list())
        return student

    def find(self, banner_id: str) -> Optional[Student]:
        if is_blank(banner_id):
            return None
        return self._students.get(banner_id.strip().upper())

    def load(self, students: Iterable[Student]) -> None:
        """Ersetzt den Inhalt durch geladene Datensätze, ohne zu speichern."""
        self._students.clear()
        for student in students:
            self._students[student.key] = student

    def list(self) -> list[Student]:
        return list(self._students.values())

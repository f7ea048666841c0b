"""In-Memory-Speicher mit derselben öffentlichen Schnittstelle wie die Dateispeicher.

Für Tests und für Läufe ohne Dateisystem. Gespeichert werden Kopien, damit
spätere Änderungen an Live-Objekten den Schnappschuss nicht verfälschen.
"""

from typing import Iterable, Optional

from models.course import Course
from models.enrollment_link import EnrollmentLink
from models.student import Student
from storage.base import CourseStore, EnrollmentStore, StudentStore


class _InMemoryStore:
    def __init__(self, records: Optional[Iterable] = None, fail_on_save: bool = False):
        self.records = [self._copy(r) for r in (records or [])]
        self.save_count = 0
        # Simuliert einen I/O-Fehler beim Schreiben
        self.fail_on_save = fail_on_save

    def __str__(self) -> str:
        return f"<{type(self).__name__}>"

    def load(self) -> list:
        return [self._copy(r) for r in self.records]

    def save(self, records: Iterable) -> None:
        if self.fail_on_save:
            raise OSError(f"{self}: Schreiben simuliert fehlgeschlagen")
        self.records = [self._copy(r) for r in records]
        self.save_count += 1

    def _copy(self, record):
        return record


class InMemoryStudentStore(_InMemoryStore, StudentStore):
    def _copy(self, record: Student) -> Student:
        return record.model_copy()


class InMemoryCourseStore(_InMemoryStore, CourseStore):
    def _copy(self, record: Course) -> Course:
        # Der Kurs-Speicher hält nur Stammdaten, Listen kommen aus den Links
        return Course(code=record.code, title=record.title, capacity=record.capacity)


class InMemoryEnrollmentStore(_InMemoryStore, EnrollmentStore):
    pass  # EnrollmentLink ist frozen

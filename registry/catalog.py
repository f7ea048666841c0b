"""CourseCatalog: Code-indizierter Katalog der Kurse."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Iterable, Optional

from models.course import Course
from registry.validation import is_blank, validate_course_input

if TYPE_CHECKING:
    from storage.synchronizer import PersistenceSynchronizer


class CourseCatalog:
    """Katalog in Einfüge-Reihenfolge.

    Erneutes Anlegen desselben Codes ersetzt das Kursobjekt durch ein neues
    mit leerer Teilnehmer- und Warteliste (Upsert). Roster und Warteliste
    werden ausschließlich vom EnrollmentCoordinator verändert.

    Übernehmen und Schreiben laufen unter einem Katalog-Lock: Schnappschuss
    und Dateiersatz erfolgen so in derselben Reihenfolge wie die Änderungen.
    """

    def __init__(self, synchronizer: Optional[PersistenceSynchronizer] = None):
        self._courses: dict[str, Course] = {}
        self._sync = synchronizer
        self._guard = threading.RLock()

    def add(self, code: str, title: str, capacity: int) -> Course:
        """Legt einen Kurs an (oder ersetzt ihn) und speichert sofort.

        Raises:
            ValidationError: Leerer Code/Titel oder Kapazität außerhalb 1..500.
        """
        code, title, capacity = validate_course_input(code, title, capacity)
        course = Course(code=code, title=title, capacity=capacity)
        self.save(course)
        return course

    def save(self, course: Course) -> None:
        """Übernimmt den Kurs und schreibt Kurs- und Link-Speicher neu."""
        with self._guard:
            self._courses[course.code] = course
            if self._sync is not None:
                self._sync.save_courses(self.list())

    def find(self, code: str) -> Optional[Course]:
        if is_blank(code):
            return None
        with self._guard:
            return self._courses.get(code.strip())

    def load(self, courses: Iterable[Course]) -> None:
        """Ersetzt den Inhalt durch geladene Datensätze, ohne zu speichern."""
        with self._guard:
            self._courses.clear()
            for course in courses:
                self._courses[course.code] = course

    def list(self) -> list[Course]:
        with self._guard:
            return list(self._courses.values())

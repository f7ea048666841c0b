"""PersistenceSynchronizer: Laden, Speichern und Abgleich der drei Datensatzarten.

Beim Start:   Studierende + Kurse laden → Verzeichnis/Katalog befüllen →
              Einschreibungs-Links in Quell-Reihenfolge auf die Kurse anwenden.
Bei Änderung: Der betroffene Speicher wird komplett neu geschrieben.
Beim Beenden: Alle drei Speicher komplett neu schreiben.

WICHTIG: Es gibt KEINE speicherübergreifende Atomarität. Ein Absturz zwischen
dem Schreiben der Kurse und der Links kann beide nach dem Neustart
inkonsistent hinterlassen. I/O-Fehler werden protokolliert und in
last_error vermerkt, die In-Memory-Änderung wird NICHT zurückgerollt.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Iterator, Optional

from models.course import Course
from models.enrollment_link import EnrollmentLink, LinkStatus
from models.student import Student
from storage.base import CourseStore, EnrollmentStore, StudentStore

if TYPE_CHECKING:
    from config.schema import StorageConfig
    from registry.catalog import CourseCatalog
    from registry.directory import StudentDirectory

logger = logging.getLogger(__name__)


def links_from_courses(courses: Iterable[Course]) -> Iterator[EnrollmentLink]:
    """Erzeugt die Links pro Kurs: erst Roster, dann Warteliste, jeweils in Listen-Reihenfolge."""
    for course in courses:
        for sid in course.roster:
            yield EnrollmentLink(course.code, sid, LinkStatus.ENROLLED)
        for sid in course.waitlist:
            yield EnrollmentLink(course.code, sid, LinkStatus.WAITLIST)


def apply_links(catalog: "CourseCatalog", links: Iterable[EnrollmentLink]) -> int:
    """Wendet Links auf die geladenen Kurse an. Gibt die Anzahl angewandter Links zurück.

    Links auf unbekannte Kurse werden stillschweigend verworfen. Doppelte
    Einträge innerhalb derselben Liste (auch in anderer Schreibweise) werden
    übersprungen.
    """
    applied = 0
    for link in links:
        course = catalog.find(link.code)
        if course is None:
            continue
        if link.status is LinkStatus.ENROLLED:
            target, position = course.roster, course.roster_position
        else:
            target, position = course.waitlist, course.waitlist_position
        if position(link.student_id) is None:
            target.append(link.student_id)
            applied += 1
    return applied


class PersistenceSynchronizer:
    """Hält Verzeichnis und Katalog mit den drei Datensatz-Speichern synchron."""

    def __init__(self, students: StudentStore, courses: CourseStore,
                 enrollments: EnrollmentStore):
        self.student_store = students
        self.course_store = courses
        self.enrollment_store = enrollments
        self.last_error: Optional[Exception] = None

    @classmethod
    def from_config(cls, storage: "StorageConfig") -> "PersistenceSynchronizer":
        """Baut einen Synchronizer mit Dateispeichern laut Konfiguration."""
        from storage.flatfile import (
            FlatFileCourseStore,
            FlatFileEnrollmentStore,
            FlatFileStudentStore,
        )
        return cls(
            FlatFileStudentStore(storage.path_for("students")),
            FlatFileCourseStore(storage.path_for("courses")),
            FlatFileEnrollmentStore(storage.path_for("enrollments")),
        )

    # ─── Laden ───

    def load_all(self, directory: "StudentDirectory", catalog: "CourseCatalog") -> bool:
        """Befüllt Verzeichnis und Katalog aus den Speichern.

        Gibt False zurück, wenn mindestens ein Speicher nicht lesbar war
        (der Rest wird trotzdem geladen).
        """
        self.last_error = None
        students: list[Student] = self._read(self.student_store, "Studierende")
        courses: list[Course] = self._read(self.course_store, "Kurse")
        directory.load(students)
        catalog.load(courses)

        links: list[EnrollmentLink] = self._read(self.enrollment_store, "Einschreibungen")
        applied = apply_links(catalog, links)
        logger.info(
            f"Geladen: {len(students)} Studierende, {len(courses)} Kurse, "
            f"{applied} Einschreibungen"
        )
        return self.last_error is None

    def _read(self, store, label: str) -> list:
        try:
            return store.load()
        except (OSError, UnicodeDecodeError) as e:
            self.last_error = e
            logger.error(f"Laden fehlgeschlagen ({label}, {store}): {e}")
            return []

    # ─── Speichern ───

    def save_students(self, students: Iterable[Student]) -> bool:
        """Schreibt den Studierenden-Speicher komplett neu."""
        self.last_error = None
        return self._write(self.student_store, list(students), "Studierende")

    def save_courses(self, courses: Iterable[Course]) -> bool:
        """Schreibt erst den Kurs-Speicher, dann den Link-Speicher komplett neu.

        Beide Schritte werden versucht, auch wenn der erste scheitert.
        """
        self.last_error = None
        courses = list(courses)
        ok_courses = self._write(self.course_store, courses, "Kurse")
        ok_links = self._write(
            self.enrollment_store, list(links_from_courses(courses)), "Einschreibungen"
        )
        return ok_courses and ok_links

    def save_all(self, directory: "StudentDirectory", catalog: "CourseCatalog") -> bool:
        """Schreibt alle drei Speicher neu (beim Beenden)."""
        ok_students = self.save_students(directory.list())
        error = self.last_error
        ok_courses = self.save_courses(catalog.list())
        self.last_error = self.last_error or error
        return ok_students and ok_courses

    def _write(self, store, records: list, label: str) -> bool:
        try:
            store.save(records)
        except OSError as e:
            self.last_error = e
            logger.error(f"Speichern fehlgeschlagen ({label}, {store}): {e}")
            return False
        logger.debug(f"Gespeichert: {len(records)} {label} → {store}")
        return True

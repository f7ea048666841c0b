"""EnrollmentCoordinator: Zustandsautomat für Einschreiben und Abmelden.

Zustände pro (Kurs, Studierender): nicht eingeschrieben, eingeschrieben,
auf der Warteliste. Übergänge sind reine Listen-Mitgliedschaft:

  enroll:  frei → Roster-Ende anhängen, sonst Wartelisten-Ende
  drop:    aus Roster entfernt → Wartelisten-KOPF rückt nach (strikt FIFO)
           aus Warteliste entfernt → nur entfernen

Die Banner-ID wird beim Einschreiben NICHT gegen das Verzeichnis geprüft.
Mitgliedschaft gilt wie im Verzeichnis ohne Rücksicht auf Groß-/Kleinschreibung,
gespeichert bleibt die Schreibweise der Einschreibung.
"""

import logging
from contextlib import nullcontext
from typing import Optional

from models.course import Course
from models.outcome import BlankField, EnrollmentOutcome, OutcomeKind
from models.student import Student
from registry.catalog import CourseCatalog
from registry.directory import StudentDirectory
from registry.validation import is_blank
from enrollment.locking import CourseLockRegistry

logger = logging.getLogger(__name__)


class EnrollmentCoordinator:
    """Öffentliche Schnittstelle für die Präsentationsschicht.

    add_student/add_course werfen ValidationError; enroll/drop liefern immer
    ein EnrollmentOutcome und werfen nie für fachliche Ergebnisse.
    """

    def __init__(self, directory: StudentDirectory, catalog: CourseCatalog,
                 locks: Optional[CourseLockRegistry] = None):
        self.directory = directory
        self.catalog = catalog
        self._locks = locks

    # ─── Stammdaten ───

    def add_student(self, banner_id: str, name: str, email: str) -> Student:
        student = self.directory.add(banner_id, name, email)
        logger.info(f"Studierende/r gespeichert: {student}")
        return student

    def add_course(self, code: str, title: str, capacity: int) -> Course:
        course = self.catalog.add(code, title, capacity)
        logger.info(f"Kurs gespeichert: {course}")
        return course

    def find_student(self, banner_id: str) -> Optional[Student]:
        return self.directory.find(banner_id)

    def find_course(self, code: str) -> Optional[Course]:
        return self.catalog.find(code)

    def list_students(self) -> list[Student]:
        return self.directory.list()

    def list_courses(self) -> list[Course]:
        return self.catalog.list()

    # ─── Einschreiben / Abmelden ───

    def enroll(self, student_id: str, course_code: str) -> EnrollmentOutcome:
        """Schreibt ein oder setzt auf die Warteliste."""
        blank = _blank_outcome(student_id, course_code)
        if blank is not None:
            return blank
        student_id, course_code = student_id.strip(), course_code.strip()

        with self._lock(course_code):
            course = self.catalog.find(course_code)
            if course is None:
                return EnrollmentOutcome.of(OutcomeKind.NO_SUCH_COURSE)
            if course.roster_position(student_id) is not None:
                return EnrollmentOutcome.of(OutcomeKind.ALREADY_ENROLLED)
            if course.waitlist_position(student_id) is not None:
                return EnrollmentOutcome.of(OutcomeKind.ALREADY_WAITLISTED)

            if not course.is_full:
                course.roster.append(student_id)
                outcome = EnrollmentOutcome.of(OutcomeKind.ENROLLED)
            else:
                course.waitlist.append(student_id)
                outcome = EnrollmentOutcome.of(OutcomeKind.WAITLISTED)
            self.catalog.save(course)

        logger.info(f"enroll {student_id} → {course_code}: {outcome.kind.value}")
        return outcome

    def drop(self, student_id: str, course_code: str) -> EnrollmentOutcome:
        """Meldet ab; ein freier Roster-Platz geht an den Kopf der Warteliste."""
        blank = _blank_outcome(student_id, course_code)
        if blank is not None:
            return blank
        student_id, course_code = student_id.strip(), course_code.strip()

        with self._lock(course_code):
            course = self.catalog.find(course_code)
            if course is None:
                return EnrollmentOutcome.of(OutcomeKind.NO_SUCH_COURSE)

            seat = course.roster_position(student_id)
            queued = course.waitlist_position(student_id)
            if seat is not None:
                del course.roster[seat]
                if course.waitlist:
                    promoted = course.waitlist.pop(0)
                    course.roster.append(promoted)
                    outcome = EnrollmentOutcome.promoted(promoted)
                else:
                    outcome = EnrollmentOutcome.of(OutcomeKind.DROPPED)
            elif queued is not None:
                del course.waitlist[queued]
                outcome = EnrollmentOutcome.of(OutcomeKind.WAITLIST_REMOVED)
            else:
                return EnrollmentOutcome.of(OutcomeKind.NOT_ENROLLED)
            self.catalog.save(course)

        logger.info(f"drop {student_id} ← {course_code}: {outcome.kind.value}"
                    + (f" ({outcome.promoted_id} nachgerückt)" if outcome.promoted_id else ""))
        return outcome

    def _lock(self, course_code: str):
        if self._locks is None:
            return nullcontext()
        return self._locks.lock_for(course_code)


def _blank_outcome(student_id: str, course_code: str) -> Optional[EnrollmentOutcome]:
    # Banner-ID wird zuerst geprüft
    if is_blank(student_id):
        return EnrollmentOutcome.blank(BlankField.STUDENT_ID)
    if is_blank(course_code):
        return EnrollmentOutcome.blank(BlankField.COURSE_CODE)
    return None

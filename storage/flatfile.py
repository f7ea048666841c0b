"""Zeilenbasierte Dateispeicher.

Formate (ohne Escaping, ein Komma im Namen oder ein "|" in einer ID
zerstört den Datensatz beim nächsten Laden):
  Studierende:    id,name,email
  Kurse:          code,title,capacity
  Einschreibungen: code|studentId|STATUS   (STATUS ∈ ENROLLED, WAITLIST)

Zeilen mit weniger als drei Feldern werden übersprungen, zusätzliche Felder
ignoriert. Jeder Schreibvorgang ersetzt die Datei atomar (Temp-Datei + Rename).
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable, Optional

from models.course import Course
from models.enrollment_link import EnrollmentLink, LinkStatus
from models.student import Student
from storage.base import CourseStore, EnrollmentStore, StudentStore

logger = logging.getLogger(__name__)


def atomic_write_lines(path: Path, lines: Iterable[str]) -> None:
    """Schreibt alle Zeilen in eine Temp-Datei und benennt sie über das Ziel um.

    Ein Absturz während des Schreibens lässt die alte Datei unangetastet.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            for line in lines:
                f.write(line + "\n")
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


class _FlatFileStore:
    """Gemeinsame Lese-/Schreiblogik; Unterklassen definieren Trenner und Feldzuordnung."""

    DELIMITER = ","

    def __init__(self, path: Path):
        self.path = Path(path)

    def __str__(self) -> str:
        return str(self.path)

    def load(self) -> list:
        if not self.path.exists():
            return []
        with open(self.path, "r", encoding="utf-8") as f:
            lines = f.read().splitlines()
        records = []
        for lineno, line in enumerate(lines, start=1):
            fields = line.split(self.DELIMITER)
            record = self._parse(fields) if len(fields) >= 3 else None
            if record is None:
                logger.debug(f"{self.path}:{lineno}: Zeile übersprungen: {line!r}")
                continue
            records.append(record)
        return records

    def save(self, records: Iterable) -> None:
        lines = [self.DELIMITER.join(self._fields(r)) for r in records]
        atomic_write_lines(self.path, lines)
        logger.debug(f"{self.path}: {len(lines)} Zeilen geschrieben")

    def _parse(self, fields: list[str]):
        raise NotImplementedError

    def _fields(self, record) -> list[str]:
        raise NotImplementedError


class FlatFileStudentStore(_FlatFileStore, StudentStore):
    def _parse(self, fields: list[str]) -> Student:
        return Student(id=fields[0], name=fields[1], email=fields[2])

    def _fields(self, student: Student) -> list[str]:
        return [student.id, student.name, student.email]


class FlatFileCourseStore(_FlatFileStore, CourseStore):
    def _parse(self, fields: list[str]) -> Optional[Course]:
        try:
            capacity = int(fields[2])
        except ValueError:
            return None
        # Kapazität wird beim Laden nicht erneut validiert
        return Course(code=fields[0], title=fields[1], capacity=capacity)

    def _fields(self, course: Course) -> list[str]:
        return [course.code, course.title, str(course.capacity)]


class FlatFileEnrollmentStore(_FlatFileStore, EnrollmentStore):
    DELIMITER = "|"

    def _parse(self, fields: list[str]) -> Optional[EnrollmentLink]:
        status = LinkStatus.parse(fields[2])
        if status is None:
            return None
        return EnrollmentLink(code=fields[0], student_id=fields[1], status=status)

    def _fields(self, link: EnrollmentLink) -> list[str]:
        return [link.code, link.student_id, link.status.value]

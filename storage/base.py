"""Abstrakte Speicher-Schnittstellen.

Jeder Speicher hält einen vollständigen Schnappschuss einer Datensatzart:
load() liest alles, save() ersetzt alles. Kein inkrementelles Schreiben.
save() darf OSError werfen; das Abfangen übernimmt der PersistenceSynchronizer.
"""

from abc import ABC, abstractmethod
from typing import Iterable

from models.course import Course
from models.enrollment_link import EnrollmentLink
from models.student import Student


class StudentStore(ABC):
    @abstractmethod
    def load(self) -> list[Student]:
        """Alle Studierenden in gespeicherter Reihenfolge."""

    @abstractmethod
    def save(self, students: Iterable[Student]) -> None:
        """Ersetzt den gesamten Bestand."""


class CourseStore(ABC):
    @abstractmethod
    def load(self) -> list[Course]:
        """Alle Kurse (ohne Teilnehmer-/Wartelisten, die kommen aus dem EnrollmentStore)."""

    @abstractmethod
    def save(self, courses: Iterable[Course]) -> None:
        """Ersetzt den gesamten Bestand."""


class EnrollmentStore(ABC):
    @abstractmethod
    def load(self) -> list[EnrollmentLink]:
        """Alle Verknüpfungen; die Reihenfolge bestimmt Roster- und Wartelisten-Reihenfolge."""

    @abstractmethod
    def save(self, links: Iterable[EnrollmentLink]) -> None:
        """Ersetzt den gesamten Bestand."""

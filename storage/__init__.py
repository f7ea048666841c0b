"""Speicher-Modul: austauschbare Datensatz-Speicher und Persistenz-Abgleich."""

from storage.base import CourseStore, EnrollmentStore, StudentStore
from storage.flatfile import FlatFileCourseStore, FlatFileEnrollmentStore, FlatFileStudentStore
from storage.memory import InMemoryCourseStore, InMemoryEnrollmentStore, InMemoryStudentStore
from storage.synchronizer import PersistenceSynchronizer

__all__ = [
    "StudentStore",
    "CourseStore",
    "EnrollmentStore",
    "FlatFileStudentStore",
    "FlatFileCourseStore",
    "FlatFileEnrollmentStore",
    "InMemoryStudentStore",
    "InMemoryCourseStore",
    "InMemoryEnrollmentStore",
    "PersistenceSynchronizer",
]

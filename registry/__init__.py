"""Registry-Modul: Studierendenverzeichnis, Kurskatalog und Eingabeprüfung."""

from registry.catalog import CourseCatalog
from registry.directory import StudentDirectory
from registry.validation import ValidationError

__all__ = ["StudentDirectory", "CourseCatalog", "ValidationError"]

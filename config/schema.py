from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

StoreKind = Literal["students", "courses", "enrollments"]

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# ─── SPEICHER ───

class StorageConfig(BaseModel):
    """Ablageort der drei Datensatz-Dateien."""
    # Verzeichnis für alle Dateien (relativ zum Arbeitsverzeichnis oder absolut)
    data_dir: str = Field("registration_data",
        description="Verzeichnis für die Datendateien")
    # Studierende: id,name,email
    students_file: str = Field("students.csv",
        description="Datei für Studierende")
    # Kurse: code,title,capacity
    courses_file: str = Field("courses.csv",
        description="Datei für Kurse")
    # Einschreibungen: code|studentId|STATUS
    enrollments_file: str = Field("enrollments.csv",
        description="Datei für Einschreibungen und Wartelisten")

    @field_validator("students_file", "courses_file", "enrollments_file")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Dateiname darf nicht leer sein")
        return v.strip()

    @model_validator(mode='after')
    def _distinct_files(self):
        names = [self.students_file, self.courses_file, self.enrollments_file]
        if len(set(names)) != len(names):
            raise ValueError(f"Dateinamen müssen verschieden sein: {names}")
        return self

    def path_for(self, kind: StoreKind) -> Path:
        """Vollständiger Pfad der Datei für eine Datensatzart."""
        files = {
            "students": self.students_file,
            "courses": self.courses_file,
            "enrollments": self.enrollments_file,
        }
        if kind not in files:
            raise KeyError(f"Unbekannte Datensatzart: {kind}")
        return Path(self.data_dir) / files[kind]


# ─── LOGGING ───

class LogConfig(BaseModel):
    """Protokollierung (stdlib logging, Ausgabe über Rich)."""
    # Mindest-Level: DEBUG, INFO, WARNING, ERROR, CRITICAL
    level: str = Field("WARNING",
        description="Log-Level")
    # Optionale Log-Datei zusätzlich zur Konsole
    log_file: Optional[str] = Field(None,
        description="Optionale Log-Datei")

    @field_validator("level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in _LOG_LEVELS:
            raise ValueError(f"Unbekanntes Log-Level '{v}', erlaubt: {', '.join(_LOG_LEVELS)}")
        return v


# ─── GESAMT-CONFIG ───

class RegistrationConfig(BaseModel):
    """Gesamtkonfiguration der Kursanmeldung."""
    # Name der Hochschule (nur für die Anzeige)
    institution_name: str = Field("University of Central Arkansas",
        description="Name der Hochschule")
    # Ablageort der Datendateien
    storage: StorageConfig = Field(default_factory=StorageConfig)
    # Protokollierung
    log: LogConfig = Field(default_factory=LogConfig)

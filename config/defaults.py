from config.schema import LogConfig, RegistrationConfig, StorageConfig


# Demo-Datensatz (main.py demo / menu --demo)
DEMO_STUDENTS = [
    ("B001", "Alice", "alice@uca.edu"),
    ("B002", "Brian", "brian@uca.edu"),
]

DEMO_COURSES = [
    ("CSCI4490", "Software Engineering", 2),
    ("MATH1496", "Calculus I", 50),
]


def default_storage() -> StorageConfig:
    """Dateien liegen in ./registration_data/."""
    return StorageConfig()


def default_registration_config() -> RegistrationConfig:
    """Vollständige Standard-Konfiguration (wird ohne YAML-Datei verwendet)."""
    return RegistrationConfig(
        institution_name="University of Central Arkansas",
        storage=default_storage(),
        log=LogConfig(level="WARNING"),
    )

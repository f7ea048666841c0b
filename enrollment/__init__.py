"""Enrollment-Modul: Einschreibe-Zustandsautomat und Sitzungs-Aufbau."""

from enrollment.bootstrap import RegistrationContext, build_registration, registration_session
from enrollment.coordinator import EnrollmentCoordinator
from enrollment.locking import CourseLockRegistry

__all__ = [
    "EnrollmentCoordinator",
    "CourseLockRegistry",
    "RegistrationContext",
    "build_registration",
    "registration_session",
]

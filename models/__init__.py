from models.student import Student
from models.course import Course
from models.enrollment_link import EnrollmentLink, LinkStatus
from models.outcome import BlankField, EnrollmentOutcome, OutcomeKind

__all__ = [
    "Student",
    "Course",
    "EnrollmentLink",
    "LinkStatus",
    "BlankField",
    "EnrollmentOutcome",
    "OutcomeKind",
]

"""Kursweise Sperren für den Mehr-Thread-Betrieb.

Standardmäßig läuft alles in einem Thread ohne Sperren. Wer den
EnrollmentCoordinator aus mehreren Threads nutzt, übergibt eine
CourseLockRegistry: dann läuft Prüfen-und-Ändern in enroll/drop pro Kurs
unter gegenseitigem Ausschluss.
"""

import threading


class CourseLockRegistry:
    """Vergibt genau ein Lock pro Kurscode (lazy angelegt)."""

    def __init__(self):
        self._locks: dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    def lock_for(self, course_code: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(course_code)
            if lock is None:
                lock = self._locks[course_code] = threading.Lock()
            return lock

    def __len__(self) -> int:
        return len(self._locks)

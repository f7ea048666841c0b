"""Tests für den EnrollmentCoordinator (Einschreibe-Zustandsautomat)."""

import random
import threading

import pytest

from enrollment.coordinator import EnrollmentCoordinator
from enrollment.locking import CourseLockRegistry
from models.outcome import BlankField, OutcomeKind
from registry.catalog import CourseCatalog
from registry.directory import StudentDirectory
from registry.validation import ValidationError
from storage.memory import InMemoryCourseStore, InMemoryEnrollmentStore, InMemoryStudentStore
from storage.synchronizer import PersistenceSynchronizer


# ─── Hilfsfunktionen ──────────────────────────────────────────────────────────

def make_coordinator(fail_course_writes: bool = False, locks=None):
    """Coordinator mit In-Memory-Speichern. Gibt (coordinator, sync) zurück."""
    sync = PersistenceSynchronizer(
        InMemoryStudentStore(),
        InMemoryCourseStore(fail_on_save=fail_course_writes),
        InMemoryEnrollmentStore(),
    )
    coordinator = EnrollmentCoordinator(StudentDirectory(sync), CourseCatalog(sync), locks=locks)
    return coordinator, sync


@pytest.fixture
def coord():
    coordinator, _ = make_coordinator()
    return coordinator


# ─── STAMMDATEN ───────────────────────────────────────────────────────────────

class TestAddOperations:
    def test_add_student_valid(self, coord):
        """UT: Gültige/r Studierende/r wird angelegt."""
        coord.add_student("B001", "John Doe", "john@uca.edu")
        assert [s.id for s in coord.list_students()] == ["B001"]

    def test_add_student_lowercase_prefix(self, coord):
        """'b001' erfüllt das B-Präfix."""
        coord.add_student("b001", "John Doe", "john@uca.edu")
        assert coord.find_student("B001") is not None

    def test_add_student_invalid_banner_id(self, coord):
        """'001' ohne Präfix → ValidationError, nichts gespeichert."""
        with pytest.raises(ValidationError):
            coord.add_student("001", "John Doe", "john@uca.edu")
        assert coord.list_students() == []

    def test_add_student_empty_name(self, coord):
        with pytest.raises(ValidationError):
            coord.add_student("B001", "", "john@uca.edu")

    @pytest.mark.parametrize("capacity", [1, 500])
    def test_add_course_capacity_bounds(self, coord, capacity):
        coord.add_course("C1", "X", capacity)
        assert coord.find_course("C1").capacity == capacity

    @pytest.mark.parametrize("capacity", [0, 501])
    def test_add_course_capacity_invalid(self, coord, capacity):
        with pytest.raises(ValidationError):
            coord.add_course("C1", "X", capacity)
        assert coord.list_courses() == []


# ─── EINSCHREIBEN ─────────────────────────────────────────────────────────────

class TestEnroll:
    def test_blank_student_id(self, coord):
        """Szenario B: leere Banner-ID → BLANK_INPUT(student_id)."""
        coord.add_course("C1", "X", 2)
        o = coord.enroll("", "C1")
        assert o.kind is OutcomeKind.BLANK_INPUT
        assert o.blank_field is BlankField.STUDENT_ID

    def test_blank_course_code(self, coord):
        """Szenario B: leerer Kurscode → BLANK_INPUT(course_code)."""
        o = coord.enroll("B001", "   ")
        assert o.kind is OutcomeKind.BLANK_INPUT
        assert o.blank_field is BlankField.COURSE_CODE

    def test_both_blank_reports_student_id_first(self, coord):
        assert coord.enroll("", "").blank_field is BlankField.STUDENT_ID

    def test_no_such_course(self, coord):
        assert coord.enroll("B001", "NOPE").kind is OutcomeKind.NO_SUCH_COURSE

    def test_enrolled(self, coord):
        coord.add_course("C1", "X", 2)
        assert coord.enroll("B001", "C1").kind is OutcomeKind.ENROLLED
        assert coord.find_course("C1").roster == ["B001"]

    def test_student_record_not_required(self, coord):
        """Keine Prüfung gegen das Verzeichnis beim Einschreiben."""
        coord.add_course("C1", "X", 2)
        assert coord.enroll("B404", "C1").kind is OutcomeKind.ENROLLED
        assert coord.find_student("B404") is None

    def test_inputs_are_trimmed(self, coord):
        coord.add_course("C1", "X", 2)
        coord.enroll("  B001 ", " C1 ")
        assert coord.find_course("C1").roster == ["B001"]

    def test_full_course_waitlists(self, coord):
        coord.add_course("C1", "X", 1)
        coord.enroll("B001", "C1")
        assert coord.enroll("B002", "C1").kind is OutcomeKind.WAITLISTED
        course = coord.find_course("C1")
        assert course.roster == ["B001"]
        assert course.waitlist == ["B002"]

    def test_enroll_twice_already_enrolled(self, coord):
        """Doppelte Einschreibung dupliziert nichts."""
        coord.add_course("C1", "X", 2)
        coord.enroll("B001", "C1")
        assert coord.enroll("B001", "C1").kind is OutcomeKind.ALREADY_ENROLLED
        assert coord.find_course("C1").roster == ["B001"]

    def test_enroll_twice_already_waitlisted(self, coord):
        coord.add_course("C1", "X", 1)
        coord.enroll("B001", "C1")
        coord.enroll("B002", "C1")
        assert coord.enroll("B002", "C1").kind is OutcomeKind.ALREADY_WAITLISTED
        assert coord.find_course("C1").waitlist == ["B002"]

    def test_waitlist_is_fifo_ordered(self, coord):
        coord.add_course("C1", "X", 1)
        for sid in ["B001", "B002", "B003", "B004"]:
            coord.enroll(sid, "C1")
        assert coord.find_course("C1").waitlist == ["B002", "B003", "B004"]

    def test_roster_never_exceeds_capacity(self, coord):
        """Für beliebige Folgen gilt nach jedem Aufruf len(roster) <= capacity."""
        rng = random.Random(7)
        coord.add_course("C1", "X", 3)
        ids = [f"B{i:03d}" for i in range(12)]
        for _ in range(200):
            sid = rng.choice(ids)
            if rng.random() < 0.6:
                coord.enroll(sid, "C1")
            else:
                coord.drop(sid, "C1")
            course = coord.find_course("C1")
            assert len(course.roster) <= course.capacity
            assert not set(course.roster) & set(course.waitlist)
            assert len(set(course.roster)) == len(course.roster)
            assert len(set(course.waitlist)) == len(course.waitlist)

    def test_enroll_persists_course_and_links(self):
        coordinator, sync = make_coordinator()
        coordinator.add_course("C1", "X", 1)
        before = sync.enrollment_store.save_count
        coordinator.enroll("B001", "C1")
        assert sync.enrollment_store.save_count == before + 1
        assert [(l.code, l.student_id, l.status.value)
                for l in sync.enrollment_store.records] == [("C1", "B001", "ENROLLED")]

    def test_non_mutating_outcomes_do_not_persist(self):
        coordinator, sync = make_coordinator()
        coordinator.add_course("C1", "X", 1)
        coordinator.enroll("B001", "C1")
        before = sync.course_store.save_count
        coordinator.enroll("B001", "C1")
        coordinator.enroll("B001", "NOPE")
        coordinator.enroll("", "C1")
        assert sync.course_store.save_count == before

    def test_reenroll_other_case_is_same_student(self, coord):
        """'b001' und 'B001' belegen keinen zweiten Platz."""
        coord.add_student("b001", "John Doe", "john@uca.edu")
        coord.add_course("C1", "X", 2)
        assert coord.enroll("b001", "C1").kind is OutcomeKind.ENROLLED
        assert coord.enroll("B001", "C1").kind is OutcomeKind.ALREADY_ENROLLED
        assert coord.find_course("C1").roster == ["b001"]

    def test_waitlisted_other_case(self, coord):
        coord.add_course("C1", "X", 1)
        coord.enroll("B001", "C1")
        coord.enroll("B002", "C1")
        assert coord.enroll("b002", "C1").kind is OutcomeKind.ALREADY_WAITLISTED
        assert coord.find_course("C1").waitlist == ["B002"]


# ─── ABMELDEN ─────────────────────────────────────────────────────────────────

class TestDrop:
    def test_scenario_promotion(self, coord):
        """Szenario A: Abmeldung lässt den Wartelisten-Kopf nachrücken."""
        coord.add_course("C1", "X", 2)
        assert coord.enroll("S1", "C1").kind is OutcomeKind.ENROLLED
        assert coord.enroll("S2", "C1").kind is OutcomeKind.ENROLLED
        assert coord.enroll("S3", "C1").kind is OutcomeKind.WAITLISTED

        o = coord.drop("S1", "C1")
        assert o.kind is OutcomeKind.PROMOTED
        assert o.promoted_id == "S3"
        course = coord.find_course("C1")
        assert course.roster == ["S2", "S3"]
        assert course.waitlist == []

    def test_drop_other_case(self, coord):
        """Abmelden mit anderer Schreibweise gibt den Platz frei."""
        coord.add_course("C1", "X", 1)
        coord.enroll("b001", "C1")
        coord.enroll("b002", "C1")
        o = coord.drop("B001", "C1")
        assert o.kind is OutcomeKind.PROMOTED
        assert o.promoted_id == "b002"
        assert coord.drop("B002", "C1").kind is OutcomeKind.DROPPED
        assert coord.find_course("C1").roster == []

    def test_promotion_takes_head_only(self, coord):
        """Nur der Kopf rückt nach, Roster-Größe bleibt, Warteliste -1."""
        coord.add_course("C1", "X", 1)
        for sid in ["B001", "B002", "B003"]:
            coord.enroll(sid, "C1")
        o = coord.drop("B001", "C1")
        assert o.promoted_id == "B002"
        course = coord.find_course("C1")
        assert course.roster == ["B002"]
        assert course.waitlist == ["B003"]

    def test_dropped_without_waitlist(self, coord):
        coord.add_course("C1", "X", 2)
        coord.enroll("B001", "C1")
        o = coord.drop("B001", "C1")
        assert o.kind is OutcomeKind.DROPPED
        assert o.promoted_id is None
        assert coord.find_course("C1").roster == []

    def test_waitlist_removed(self, coord):
        coord.add_course("C1", "X", 1)
        coord.enroll("B001", "C1")
        coord.enroll("B002", "C1")
        coord.enroll("B003", "C1")
        assert coord.drop("B002", "C1").kind is OutcomeKind.WAITLIST_REMOVED
        course = coord.find_course("C1")
        assert course.roster == ["B001"]
        assert course.waitlist == ["B003"]

    def test_not_enrolled_mutates_nothing(self):
        """NOT_ENROLLED: keine Änderung, kein Speichern."""
        coordinator, sync = make_coordinator()
        coordinator.add_course("C1", "X", 1)
        coordinator.enroll("B001", "C1")
        coordinator.enroll("B002", "C1")
        saves = sync.course_store.save_count
        o = coordinator.drop("B999", "C1")
        assert o.kind is OutcomeKind.NOT_ENROLLED
        course = coordinator.find_course("C1")
        assert course.roster == ["B001"]
        assert course.waitlist == ["B002"]
        assert sync.course_store.save_count == saves

    def test_drop_blank_and_missing_course(self, coord):
        assert coord.drop("", "C1").kind is OutcomeKind.BLANK_INPUT
        assert coord.drop("B001", "").blank_field is BlankField.COURSE_CODE
        assert coord.drop("B001", "NOPE").kind is OutcomeKind.NO_SUCH_COURSE

    def test_reenroll_after_drop_goes_to_tail(self, coord):
        coord.add_course("C1", "X", 1)
        coord.enroll("B001", "C1")
        coord.enroll("B002", "C1")
        coord.drop("B001", "C1")
        assert coord.enroll("B001", "C1").kind is OutcomeKind.WAITLISTED
        assert coord.find_course("C1").waitlist == ["B001"]


# ─── I/O-FEHLER ───────────────────────────────────────────────────────────────

class TestPersistenceFailure:
    def test_write_failure_does_not_roll_back(self):
        """Schreibfehler: Änderung bleibt im Speicher, last_error gesetzt."""
        coordinator, sync = make_coordinator(fail_course_writes=True)
        coordinator.add_course("C1", "X", 1)
        assert isinstance(sync.last_error, OSError)
        o = coordinator.enroll("B001", "C1")
        assert o.kind is OutcomeKind.ENROLLED
        assert coordinator.find_course("C1").roster == ["B001"]
        assert isinstance(sync.last_error, OSError)

    def test_last_error_cleared_on_success(self):
        coordinator, sync = make_coordinator()
        sync.last_error = OSError("alt")
        coordinator.add_student("B001", "A", "a@x")
        assert sync.last_error is None


# ─── NEBENLÄUFIGKEIT ──────────────────────────────────────────────────────────

class TestCourseLocks:
    def test_lock_per_course_code(self):
        locks = CourseLockRegistry()
        assert locks.lock_for("C1") is locks.lock_for("C1")
        assert locks.lock_for("C1") is not locks.lock_for("C2")
        assert len(locks) == 2

    def test_single_threaded_behavior_unchanged(self):
        """Mit Locks verhält sich der Ablauf identisch zu Szenario A."""
        coordinator, _ = make_coordinator(locks=CourseLockRegistry())
        coordinator.add_course("C1", "X", 2)
        for sid in ["S1", "S2", "S3"]:
            coordinator.enroll(sid, "C1")
        assert coordinator.drop("S1", "C1").promoted_id == "S3"

    def test_concurrent_enroll_respects_capacity(self):
        """Parallele Einschreibungen: Kapazität hält, keine Duplikate."""
        coordinator, _ = make_coordinator(locks=CourseLockRegistry())
        coordinator.add_course("C1", "X", 5)
        ids = [f"B{i:03d}" for i in range(40)]
        barrier = threading.Barrier(len(ids))

        def worker(sid):
            barrier.wait()
            coordinator.enroll(sid, "C1")

        threads = [threading.Thread(target=worker, args=(sid,)) for sid in ids]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        course = coordinator.find_course("C1")
        assert len(course.roster) == 5
        assert len(course.waitlist) == 35
        assert sorted(course.roster + course.waitlist) == ids

    def test_concurrent_add_course_and_enroll(self):
        """Parallele Kurs-Anlage und Einschreibungen: kein Fehler, letzter Stand gespeichert."""
        coordinator, sync = make_coordinator(locks=CourseLockRegistry())
        for i in range(4):
            coordinator.add_course(f"C{i}", "X", 3)
        errors = []
        barrier = threading.Barrier(8)

        def enroller(code):
            barrier.wait()
            try:
                for n in range(20):
                    coordinator.enroll(f"B{n:03d}", code)
            except Exception as e:
                errors.append(e)

        def course_adder(prefix):
            barrier.wait()
            try:
                for n in range(20):
                    coordinator.add_course(f"{prefix}{n}", "Neu", 10)
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=enroller, args=(f"C{i}",)) for i in range(4)]
        threads += [threading.Thread(target=course_adder, args=(f"N{i}_",)) for i in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert len(sync.course_store.records) == 4 + 80
        stored = [(l.code, l.student_id) for l in sync.enrollment_store.records]
        assert len(stored) == 4 * 20
        for i in range(4):
            course = coordinator.find_course(f"C{i}")
            assert len(course.roster) == 3
            assert len(course.waitlist) == 17

"""Demo-Daten für die Kursanmeldung.

Zwei Studierende und zwei Kurse, darunter CSCI4490 mit Kapazität 2, damit
Warteliste und Nachrücken sofort ausprobiert werden können. Es gilt Upsert:
bereits vorhandene IDs/Codes werden überschrieben.
"""

from config.defaults import DEMO_COURSES, DEMO_STUDENTS
from enrollment.coordinator import EnrollmentCoordinator


def seed_demo_data(coordinator: EnrollmentCoordinator) -> dict[str, int]:
    """Legt die Demo-Datensätze über den Coordinator an."""
    for banner_id, name, email in DEMO_STUDENTS:
        coordinator.add_student(banner_id, name, email)
    for code, title, capacity in DEMO_COURSES:
        coordinator.add_course(code, title, capacity)
    return {"students": len(DEMO_STUDENTS), "courses": len(DEMO_COURSES)}


def print_summary(counts: dict[str, int]) -> None:
    """Gibt eine Rich-Tabelle mit den angelegten Demo-Daten aus."""
    from rich.console import Console
    from rich.table import Table
    from rich import box

    console = Console()
    table = Table(title="Demo-Daten", box=box.ROUNDED)
    table.add_column("Kategorie", style="bold cyan")
    table.add_column("Anzahl", justify="right")
    table.add_column("Details")
    table.add_row("Studierende", str(counts["students"]),
                  ", ".join(s[0] for s in DEMO_STUDENTS))
    table.add_row("Kurse", str(counts["courses"]),
                  ", ".join(f"{c[0]} (cap={c[2]})" for c in DEMO_COURSES))
    console.print(table)

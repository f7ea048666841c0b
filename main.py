"""Kursanmeldung — Haupt-CLI.

Verwendung:
  python main.py student add <id> <name> <email>   Studierende/n anlegen
  python main.py student list                      Studierende auflisten
  python main.py student show <id>                 Studierende/n anzeigen
  python main.py course add <code> <titel> <kap>   Kurs anlegen
  python main.py course list                       Kurse auflisten
  python main.py course show <code>                Roster + Warteliste anzeigen
  python main.py enroll <id> <code>                Einschreiben
  python main.py drop <id> <code>                  Abmelden (Warteliste rückt nach)
  python main.py demo                              Demo-Daten anlegen
  python main.py menu [--demo]                     Interaktives Menü
  python main.py config init                       Konfiguration anlegen
  python main.py config show                       Konfiguration anzeigen
"""

import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich import box

from models.outcome import EnrollmentOutcome, OutcomeKind
from registry.validation import ValidationError

console = Console()


def _setup_logging(log_cfg) -> None:
    """Root-Logger mit RichHandler (stderr) und optionaler Log-Datei."""
    from rich.logging import RichHandler

    handlers: list[logging.Handler] = [
        RichHandler(console=Console(stderr=True), show_path=False)
    ]
    if log_cfg.log_file:
        file_handler = logging.FileHandler(log_cfg.log_file, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        handlers.append(file_handler)
    logging.basicConfig(level=log_cfg.level, format="%(message)s",
                        datefmt="[%X]", handlers=handlers)


def _load_config_or_abort():
    """Lädt die Konfiguration (oder die Standardwerte) oder bricht ab."""
    from config.manager import ConfigManager

    ctx = click.get_current_context()
    config_path: Optional[Path] = (ctx.obj or {}).get("config_path")
    mgr = ConfigManager()
    try:
        config = mgr.load_or_default(config_path)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red bold]Konfiguration fehlerhaft:[/red bold]\n{escape(str(e))}")
        sys.exit(1)
    _setup_logging(config.log)
    return mgr, config


@contextmanager
def _session():
    """Ein Lauf: laden → Befehl → alles speichern."""
    from enrollment.bootstrap import registration_session

    mgr, config = _load_config_or_abort()
    with registration_session(config) as reg:
        yield reg
    if reg.synchronizer.last_error is not None:
        console.print(
            f"[yellow]Warnung: Speichern fehlgeschlagen – "
            f"{escape(str(reg.synchronizer.last_error))}[/yellow]"
        )


def _warn_if_unsaved(reg) -> None:
    if reg.synchronizer.last_error is not None:
        console.print(
            "[yellow]Warnung: Änderung nur im Speicher, Datei konnte nicht "
            f"geschrieben werden ({escape(str(reg.synchronizer.last_error))}).[/yellow]"
        )


# ─── AUSGABE ──────────────────────────────────────────────────────────────────

def _print_outcome(outcome: EnrollmentOutcome) -> None:
    text = escape(outcome.describe())
    if outcome.kind is OutcomeKind.BLANK_INPUT:
        console.print(f"[red]Fehler:[/red] {text}")
    elif outcome.changed:
        console.print(f"[green]✓[/green] {text}")
    else:
        console.print(f"[yellow]{text}[/yellow]")


def _students_table(students) -> Table:
    table = Table(title="Studierende", box=box.ROUNDED)
    table.add_column("Banner-ID", style="bold")
    table.add_column("Name")
    table.add_column("E-Mail")
    for s in students:
        table.add_row(escape(s.id), escape(s.name), escape(s.email))
    return table


def _courses_table(courses) -> Table:
    table = Table(title="Kurse", box=box.ROUNDED)
    table.add_column("Code", style="bold")
    table.add_column("Titel")
    table.add_column("Kapazität", justify="right")
    table.add_column("Eingeschrieben", justify="right")
    table.add_column("Warteliste", justify="right")
    for c in courses:
        table.add_row(escape(c.code), escape(c.title), str(c.capacity),
                      str(len(c.roster)), str(len(c.waitlist)))
    return table


def _print_students(students) -> None:
    if not students:
        console.print("[dim]Keine Studierenden vorhanden.[/dim]")
        return
    console.print(_students_table(students))


def _print_courses(courses) -> None:
    if not courses:
        console.print("[dim]Keine Kurse vorhanden.[/dim]")
        return
    console.print(_courses_table(courses))


# ─── STUDENT ──────────────────────────────────────────────────────────────────

@click.group("student")
def cmd_student():
    """Studierende anlegen und anzeigen."""


@cmd_student.command("add")
@click.argument("banner_id")
@click.argument("name")
@click.argument("email")
def student_add(banner_id: str, name: str, email: str):
    """Legt eine/n Studierende/n an (vorhandene ID wird überschrieben)."""
    with _session() as reg:
        try:
            student = reg.coordinator.add_student(banner_id, name, email)
        except ValidationError as e:
            console.print(f"[red]Fehler:[/red] {escape(str(e))}")
            sys.exit(1)
        console.print(f"[green]✓[/green] Gespeichert: {escape(str(student))}")
        _warn_if_unsaved(reg)


@cmd_student.command("list")
def student_list():
    """Listet alle Studierenden auf."""
    with _session() as reg:
        _print_students(reg.coordinator.list_students())


@cmd_student.command("show")
@click.argument("banner_id")
def student_show(banner_id: str):
    """Zeigt eine/n Studierende/n samt Kursen und Wartelisten-Plätzen."""
    with _session() as reg:
        student = reg.coordinator.find_student(banner_id)
        if student is None:
            console.print(f"[yellow]Keine Studierenden mit ID {escape(banner_id)}.[/yellow]")
            sys.exit(1)
        lines = [f"[bold]{escape(student.id)}[/bold]  {escape(student.name)}  "
                 f"<{escape(student.email)}>"]
        for course in reg.coordinator.list_courses():
            queued = course.waitlist_position(student.id)
            if course.roster_position(student.id) is not None:
                lines.append(f"  [green]• {escape(course.code)}[/green] eingeschrieben")
            elif queued is not None:
                lines.append(f"  [yellow]• {escape(course.code)}[/yellow] Warteliste Platz {queued + 1}")
        console.print(Panel("\n".join(lines), title="Studierende/r", border_style="cyan"))


# ─── COURSE ───────────────────────────────────────────────────────────────────

@click.group("course")
def cmd_course():
    """Kurse anlegen und anzeigen."""


@cmd_course.command("add")
@click.argument("code")
@click.argument("title")
@click.argument("capacity", type=int)
def course_add(code: str, title: str, capacity: int):
    """Legt einen Kurs an (Kapazität 1–500, vorhandener Code wird ersetzt)."""
    with _session() as reg:
        try:
            course = reg.coordinator.add_course(code, title, capacity)
        except ValidationError as e:
            console.print(f"[red]Fehler:[/red] {escape(str(e))}")
            sys.exit(1)
        console.print(f"[green]✓[/green] Gespeichert: {escape(str(course))}")
        _warn_if_unsaved(reg)


@cmd_course.command("list")
def course_list():
    """Listet alle Kurse auf."""
    with _session() as reg:
        _print_courses(reg.coordinator.list_courses())


@cmd_course.command("show")
@click.argument("code")
def course_show(code: str):
    """Zeigt Teilnehmerliste und Warteliste eines Kurses."""
    with _session() as reg:
        course = reg.coordinator.find_course(code)
        if course is None:
            console.print(f"[yellow]Kurs nicht gefunden: {escape(code)}[/yellow]")
            sys.exit(1)

        console.print(Panel(
            f"[bold]{escape(course.code)}[/bold]  {escape(course.title)}  |  "
            f"{len(course.roster)}/{course.capacity} belegt ({course.free_seats} frei)  |  "
            f"{len(course.waitlist)} wartend",
            title="Kurs",
            border_style="cyan",
        ))
        table = Table(box=box.SIMPLE)
        table.add_column("#", justify="right")
        table.add_column("Banner-ID", style="bold")
        table.add_column("Name")
        table.add_column("Status")
        for i, sid in enumerate(course.roster, start=1):
            student = reg.coordinator.find_student(sid)
            table.add_row(str(i), escape(sid),
                          escape(student.name) if student else "[dim](unbekannt)[/dim]",
                          "[green]eingeschrieben[/green]")
        for i, sid in enumerate(course.waitlist, start=1):
            student = reg.coordinator.find_student(sid)
            table.add_row(str(i), escape(sid),
                          escape(student.name) if student else "[dim](unbekannt)[/dim]",
                          "[yellow]Warteliste[/yellow]")
        console.print(table)


# ─── ENROLL / DROP ────────────────────────────────────────────────────────────

@click.command("enroll")
@click.argument("student_id")
@click.argument("course_code")
def cmd_enroll(student_id: str, course_code: str):
    """Schreibt ein; ist der Kurs voll, geht es auf die Warteliste."""
    with _session() as reg:
        outcome = reg.coordinator.enroll(student_id, course_code)
        _print_outcome(outcome)
        _warn_if_unsaved(reg)
    if outcome.is_error:
        sys.exit(1)


@click.command("drop")
@click.argument("student_id")
@click.argument("course_code")
def cmd_drop(student_id: str, course_code: str):
    """Meldet ab; der erste auf der Warteliste rückt nach."""
    with _session() as reg:
        outcome = reg.coordinator.drop(student_id, course_code)
        _print_outcome(outcome)
        _warn_if_unsaved(reg)
    if outcome.is_error:
        sys.exit(1)


# ─── DEMO ─────────────────────────────────────────────────────────────────────

@click.command("demo")
def cmd_demo():
    """Legt Demo-Studierende und -Kurse an."""
    from data.demo_data import print_summary, seed_demo_data

    with _session() as reg:
        counts = seed_demo_data(reg.coordinator)
        print_summary(counts)


# ─── MENU ─────────────────────────────────────────────────────────────────────

def _menu_add_student(coordinator) -> None:
    banner_id = Prompt.ask("Banner-ID").strip()
    name = Prompt.ask("Name").strip()
    email = Prompt.ask("E-Mail").strip()
    try:
        coordinator.add_student(banner_id, name, email)
        console.print("[green]✓[/green] Studierende/r gespeichert.")
    except ValidationError as e:
        console.print(f"[red]Fehler:[/red] {escape(str(e))}")


def _menu_add_course(coordinator) -> None:
    code = Prompt.ask("Kurscode").strip()
    title = Prompt.ask("Titel").strip()
    raw_capacity = Prompt.ask("Kapazität").strip()
    try:
        capacity = int(raw_capacity)
    except ValueError:
        console.print("[red]Fehler:[/red] Kapazität muss eine Zahl sein")
        return
    try:
        coordinator.add_course(code, title, capacity)
        console.print("[green]✓[/green] Kurs gespeichert.")
    except ValidationError as e:
        console.print(f"[red]Fehler:[/red] {escape(str(e))}")


def _menu_transition(coordinator, action: str) -> None:
    student_id = Prompt.ask("Banner-ID").strip()
    course_code = Prompt.ask("Kurscode").strip()
    if action == "enroll":
        outcome = coordinator.enroll(student_id, course_code)
    else:
        outcome = coordinator.drop(student_id, course_code)
    _print_outcome(outcome)


def run_menu(reg) -> None:
    """Interaktives Menü; jede Änderung wird sofort gespeichert."""
    coordinator = reg.coordinator
    console.print(Panel(
        f"[bold]Kursanmeldung[/bold]  |  {escape(reg.config.institution_name)}",
        border_style="cyan",
    ))
    while True:
        console.print()
        console.print("  [bold]1.[/bold] Studierende/n anlegen")
        console.print("  [bold]2.[/bold] Kurs anlegen")
        console.print("  [bold]3.[/bold] Einschreiben")
        console.print("  [bold]4.[/bold] Abmelden")
        console.print("  [bold]5.[/bold] Studierende auflisten")
        console.print("  [bold]6.[/bold] Kurse auflisten")
        console.print("  [bold]0.[/bold] Beenden")

        choice = Prompt.ask("\nAuswahl", default="0").strip()
        # Warnung nur für Schreibfehler dieser Auswahl
        reg.synchronizer.last_error = None

        if choice == "1":
            _menu_add_student(coordinator)
        elif choice == "2":
            _menu_add_course(coordinator)
        elif choice == "3":
            _menu_transition(coordinator, "enroll")
        elif choice == "4":
            _menu_transition(coordinator, "drop")
        elif choice == "5":
            _print_students(coordinator.list_students())
        elif choice == "6":
            _print_courses(coordinator.list_courses())
        elif choice == "0":
            break
        else:
            console.print("[yellow]Ungültige Auswahl.[/yellow]")
        _warn_if_unsaved(reg)

    console.print("Auf Wiedersehen!")


@click.command("menu")
@click.option("--demo", "with_demo", is_flag=True, default=False,
              help="Vorher Demo-Daten anlegen.")
def cmd_menu(with_demo: bool):
    """Startet das interaktive Menü."""
    with _session() as reg:
        if with_demo:
            from data.demo_data import seed_demo_data
            seed_demo_data(reg.coordinator)
        run_menu(reg)


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anlegen oder anzeigen."""


@cmd_config.command("init")
@click.option("--force", is_flag=True, default=False,
              help="Vorhandene Konfiguration überschreiben.")
def config_init(force: bool):
    """Schreibt die Standard-Konfiguration als YAML."""
    from config.defaults import default_registration_config
    from config.manager import ConfigManager

    config_path = (click.get_current_context().obj or {}).get("config_path")
    mgr = ConfigManager()
    target = Path(config_path) if config_path else mgr.DEFAULT_CONFIG
    if target.exists() and not force:
        console.print(
            f"[yellow]Konfiguration existiert bereits: {target}[/yellow]\n"
            "Mit [bold]--force[/bold] überschreiben."
        )
        return
    mgr.save(default_registration_config(), target)


@cmd_config.command("show")
def config_show():
    """Zeigt die wirksame Konfiguration an."""
    mgr, config = _load_config_or_abort()

    console.print(Panel(
        f"[bold]{escape(config.institution_name)}[/bold]",
        title="Konfiguration",
        border_style="cyan",
    ))
    table = Table(title="Datenablage", box=box.ROUNDED)
    table.add_column("Datensatzart")
    table.add_column("Datei")
    for kind, label in (("students", "Studierende"), ("courses", "Kurse"),
                        ("enrollments", "Einschreibungen")):
        table.add_row(label, str(config.storage.path_for(kind)))
    console.print(table)
    console.print(
        f"[bold]Logging:[/bold] {config.log.level}"
        + (f" | Datei: {config.log.log_file}" if config.log.log_file else "")
    )


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
@click.option("--config", "config_path", type=click.Path(path_type=Path), default=None,
              help="Pfad zur YAML-Konfiguration (Standard: config/registration.yaml).")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path]):
    """Kursanmeldung mit Kapazitätsgrenze und FIFO-Warteliste.

    Starten Sie mit: python main.py menu --demo
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


def main():
    """Einstiegspunkt. Ohne Argumente startet das interaktive Menü."""
    if len(sys.argv) == 1:
        sys.argv.append("menu")
    cli()


# Befehle registrieren
cli.add_command(cmd_student)
cli.add_command(cmd_course)
cli.add_command(cmd_enroll)
cli.add_command(cmd_drop)
cli.add_command(cmd_demo)
cli.add_command(cmd_menu)
cli.add_command(cmd_config)


if __name__ == "__main__":
    main()

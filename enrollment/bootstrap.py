"""Verdrahtung von Speichern, Verzeichnis, Katalog und Coordinator.

registration_session() entspricht einem Programmlauf: beim Betreten wird
geladen, beim Verlassen werden alle Speicher komplett geschrieben.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

from config.schema import RegistrationConfig
from enrollment.coordinator import EnrollmentCoordinator
from enrollment.locking import CourseLockRegistry
from registry.catalog import CourseCatalog
from registry.directory import StudentDirectory
from storage.synchronizer import PersistenceSynchronizer

logger = logging.getLogger(__name__)


@dataclass
class RegistrationContext:
    """Alle Bausteine eines Laufs."""

    config: RegistrationConfig
    synchronizer: PersistenceSynchronizer
    directory: StudentDirectory
    catalog: CourseCatalog
    coordinator: EnrollmentCoordinator


def build_registration(config: RegistrationConfig,
                       synchronizer: Optional[PersistenceSynchronizer] = None,
                       locks: Optional[CourseLockRegistry] = None) -> RegistrationContext:
    """Baut die Bausteine zusammen, ohne zu laden.

    Ohne expliziten Synchronizer werden die Dateispeicher aus config.storage verwendet.
    """
    sync = synchronizer or PersistenceSynchronizer.from_config(config.storage)
    directory = StudentDirectory(sync)
    catalog = CourseCatalog(sync)
    coordinator = EnrollmentCoordinator(directory, catalog, locks=locks)
    return RegistrationContext(config, sync, directory, catalog, coordinator)


@contextmanager
def registration_session(config: RegistrationConfig,
                         synchronizer: Optional[PersistenceSynchronizer] = None,
                         locks: Optional[CourseLockRegistry] = None,
                         ) -> Iterator[RegistrationContext]:
    """Lädt beim Start, schreibt beim Beenden alles neu.

    War ein Speicher beim Laden nicht lesbar, entfällt das abschließende
    Komplett-Schreiben, damit der unvollständige Stand die Dateien nicht
    überschreibt.
    """
    ctx = build_registration(config, synchronizer, locks)
    loaded = ctx.synchronizer.load_all(ctx.directory, ctx.catalog)
    try:
        yield ctx
    finally:
        if loaded:
            ctx.synchronizer.save_all(ctx.directory, ctx.catalog)
        else:
            logger.warning("Laden war unvollständig – abschließendes Speichern übersprungen.")

import logging
import shutil
import sqlite3
import threading
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional

from flask import Flask

logger = logging.getLogger(__name__)

# Built-in catalog loaded into an empty database
SEED_GARDENS = ("Garden 1", "Garden 2", "Garden 3")
SEED_PLANT_TYPES = ("Mango", "Orange", "Avocado", "Banana", "Durian")
SEED_PLANTS_PER_TYPE = 10

# (name, slug, color, icon, display_order)
SEED_CONDITIONS = (
    ("Healthy", "healthy", "#10B981", "✅", 1),
    ("Needs Treatment", "needs-treatment", "#F59E0B", "⚠️", 2),
    ("Flowering", "flowering", "#EC4899", "🌸", 3),
    ("Fruiting", "fruiting", "#F97316", "🍊", 4),
    ("Pest Damage", "pest-damage", "#EF4444", "🐛", 5),
)


class SQLiteDatabaseHandler:
    """Thread-safe SQLite handler decoupled from Flask globals."""

    def __init__(self, database_path: str, *, seed_catalog: bool = False) -> None:
        self._database_path = database_path
        self._seed_catalog = seed_catalog
        self._local = threading.local()

        # Ensure the directory for the database file exists
        if database_path != ":memory:":
            db_path = Path(database_path)
            if not db_path.parent.exists():
                db_path.parent.mkdir(parents=True, exist_ok=True)
                logger.info("Created database directory: %s", db_path.parent)

    @property
    def database_path(self) -> str:
        return self._database_path

    # --- Lifecycle ------------------------------------------------------------
    def init_app(self, app: Flask | None = None) -> None:
        if app is not None:
            app.teardown_appcontext(self.close_db)
        self.create_tables()

    def get_db(self) -> sqlite3.Connection:
        connection: Optional[sqlite3.Connection] = getattr(self._local, "connection", None)
        if connection is None:
            try:
                connection = self._open_connection()
            except sqlite3.DatabaseError as exc:
                if self._is_corruption_error(exc):
                    logger.error("Database appears corrupt (%s). Recreating a fresh database.", exc)
                    self._quarantine_corrupt_db()
                    connection = self._open_connection()
                else:
                    raise
            self._local.connection = connection
        return connection

    def _open_connection(self) -> sqlite3.Connection:
        connection = sqlite3.connect(self._database_path, check_same_thread=False)
        try:
            connection.row_factory = sqlite3.Row
            self._configure_connection(connection)
            return connection
        except Exception:
            connection.close()
            raise

    def _is_corruption_error(self, exc: sqlite3.Error) -> bool:
        message = str(exc).lower()
        return (
            "database disk image is malformed" in message
            or "file is not a database" in message
            or "file is encrypted or is not a database" in message
            or "malformed" in message
        )

    def _quarantine_corrupt_db(self) -> Optional[Path]:
        db_path = Path(self._database_path)
        if not db_path.exists():
            return None

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        quarantine_dir = db_path.parent / "corrupt"
        quarantine_dir.mkdir(parents=True, exist_ok=True)

        suffix = db_path.suffix or ".db"
        quarantined = quarantine_dir / f"{db_path.stem}_corrupt_{timestamp}{suffix}"
        try:
            shutil.move(str(db_path), str(quarantined))
            for sidecar_suffix in ("-wal", "-shm"):
                sidecar = Path(f"{db_path}{sidecar_suffix}")
                if sidecar.exists():
                    sidecar_target = quarantine_dir / f"{sidecar.name}_{timestamp}"
                    shutil.move(str(sidecar), str(sidecar_target))
            logger.warning("Quarantined corrupt database to %s", quarantined)
            return quarantined
        except Exception as exc:
            logger.error("Failed to quarantine corrupt database %s: %s", db_path, exc)
            return None

    def _configure_connection(self, connection: sqlite3.Connection) -> None:
        """Configure SQLite connection.

        - WAL mode: readers do not block the single writer
        - NORMAL synchronous: safe with WAL
        - foreign keys on: deleting a garden removes its plants
        """
        connection.execute("PRAGMA journal_mode=WAL")
        connection.execute("PRAGMA synchronous=NORMAL")
        connection.execute("PRAGMA foreign_keys=ON")
        connection.execute("PRAGMA temp_store=MEMORY")
        connection.commit()

    def close_db(self, _e: Optional[BaseException] = None) -> None:
        connection: Optional[sqlite3.Connection] = getattr(self._local, "connection", None)
        if connection is not None:
            connection.close()
            delattr(self._local, "connection")

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        conn = self.get_db()
        try:
            yield conn
        finally:
            conn.commit()

    # --- Schema ----------------------------------------------------------------
    def create_tables(self) -> None:
        """Creates the necessary tables in the database if they do not already exist."""
        try:
            with self.connection() as db:
                db.execute(
                    """
                    CREATE TABLE IF NOT EXISTS gardens (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        name TEXT UNIQUE NOT NULL,
                        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                    )
                    """
                )
                db.execute(
                    """
                    CREATE TABLE IF NOT EXISTS plant_types (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        name TEXT UNIQUE NOT NULL,
                        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                    )
                    """
                )
                db.execute(
                    """
                    CREATE TABLE IF NOT EXISTS plants (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        garden_id INTEGER NOT NULL,
                        plant_type_id INTEGER NOT NULL,
                        plant_name TEXT NOT NULL,
                        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                        UNIQUE (garden_id, plant_name),
                        FOREIGN KEY (garden_id) REFERENCES gardens(id) ON DELETE CASCADE,
                        FOREIGN KEY (plant_type_id) REFERENCES plant_types(id) ON DELETE CASCADE
                    )
                    """
                )
                db.execute("CREATE INDEX IF NOT EXISTS idx_plants_garden ON plants(garden_id)")
                db.execute(
                    """
                    CREATE TABLE IF NOT EXISTS conditions (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        name TEXT NOT NULL,
                        slug TEXT NOT NULL,
                        color TEXT NOT NULL DEFAULT '#10B981',
                        icon TEXT NOT NULL DEFAULT '✅',
                        display_order INTEGER NOT NULL DEFAULT 0,
                        is_active INTEGER NOT NULL DEFAULT 1,
                        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                    )
                    """
                )
                # Reports keep garden/plant display names, not foreign keys.
                # media/media_type hold a JSON array, or a bare string on old rows.
                db.execute(
                    """
                    CREATE TABLE IF NOT EXISTS reports (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        garden TEXT NOT NULL,
                        type TEXT NOT NULL DEFAULT '',
                        plant_id TEXT NOT NULL,
                        description TEXT NOT NULL DEFAULT '',
                        media TEXT,
                        media_type TEXT,
                        condition_ids TEXT NOT NULL DEFAULT '[]',
                        date TEXT NOT NULL,
                        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                    )
                    """
                )
                db.execute("CREATE INDEX IF NOT EXISTS idx_reports_garden ON reports(garden)")
                db.execute("CREATE INDEX IF NOT EXISTS idx_reports_created ON reports(created_at)")
        except sqlite3.Error as exc:
            logger.error("Error creating tables: %s", exc)
            return

        if self._seed_catalog:
            self._seed_default_catalog()
            self._seed_default_conditions()

    def _seed_default_catalog(self) -> None:
        """Populate gardens, plant types and plants with the built-in catalog when empty."""
        try:
            with self.connection() as conn:
                existing = conn.execute("SELECT COUNT(*) FROM gardens").fetchone()[0]
                if existing:
                    return

                conn.executemany("INSERT INTO gardens (name) VALUES (?)", [(name,) for name in SEED_GARDENS])
                conn.executemany(
                    "INSERT OR IGNORE INTO plant_types (name) VALUES (?)",
                    [(name,) for name in SEED_PLANT_TYPES],
                )
                garden_ids = {
                    row["name"]: row["id"] for row in conn.execute("SELECT id, name FROM gardens").fetchall()
                }
                type_ids = {
                    row["name"]: row["id"] for row in conn.execute("SELECT id, name FROM plant_types").fetchall()
                }

                rows = [
                    (garden_ids[garden], type_ids[plant_type], f"{plant_type} {n}")
                    for garden in SEED_GARDENS
                    for plant_type in SEED_PLANT_TYPES
                    for n in range(1, SEED_PLANTS_PER_TYPE + 1)
                ]
                conn.executemany(
                    "INSERT INTO plants (garden_id, plant_type_id, plant_name) VALUES (?, ?, ?)",
                    rows,
                )
        except sqlite3.Error as exc:
            logger.error("Error seeding catalog: %s", exc)
            return
        logger.info(
            "Seeded catalog with %d gardens, %d plant types and %d plants.",
            len(SEED_GARDENS),
            len(SEED_PLANT_TYPES),
            len(rows),
        )

    def _seed_default_conditions(self) -> None:
        """Populate the conditions table with the default tags when empty."""
        try:
            with self.connection() as conn:
                existing = conn.execute("SELECT COUNT(*) FROM conditions").fetchone()[0]
                if existing:
                    return
                conn.executemany(
                    """
                    INSERT INTO conditions (name, slug, color, icon, display_order)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    SEED_CONDITIONS,
                )
        except sqlite3.Error as exc:
            logger.error("Error seeding conditions: %s", exc)
            return
        logger.info("Seeded conditions table with %d default tags.", len(SEED_CONDITIONS))

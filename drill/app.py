"""App: central object that wires together drill_dir, db, scheduler, session."""

import pathlib
import sqlite3

from drill.config import get_drill_dir, load_settings
from drill.db import init_db, load_snapshot, save_snapshot
from drill.schedulers import load_scheduler
from drill.state import Session


class App:
    """Holds all shared state for a drill run.

    Usage:
        app = App(drill_dir="/path/to/drill")
        app.init_db()                    # uses drill_dir/drill.db
        app.load_scheduler()             # uses settings["scheduler"]
        app.load()                       # session from the db
        app.session.select_next("learn")
        app.save()
        app.close()

    For testing:
        app = App(drill_dir=tmp_path, clock=fixed_clock)
        app.init_db(":memory:")
    """

    def __init__(self, drill_dir: pathlib.Path | str | None = None, clock=None):
        if drill_dir is None:
            drill_dir = get_drill_dir()
        self.drill_dir = pathlib.Path(drill_dir)
        self.settings = load_settings(self.drill_dir)
        self.clock = clock
        self.conn: sqlite3.Connection | None = None
        self.scheduler = None
        self.session: Session | None = None

    def init_db(self, db_path: pathlib.Path | str | None = None) -> sqlite3.Connection:
        """Initialize (or connect to) the database.

        Args:
            db_path: Path to the SQLite database file, or ":memory:" for
                     in-memory databases (useful for testing). Defaults to
                     drill_dir/drill.db.
        """
        if db_path is None:
            db_path = self.drill_dir / "drill.db"
        self.conn = init_db(db_path)
        return self.conn

    def load_scheduler(self, name: str | None = None):
        """Load and store the scheduler.

        Args:
            name: Scheduler name. Defaults to settings["scheduler"].
        """
        if name is None:
            name = self.settings.get("scheduler", "sm2")
        self.scheduler = load_scheduler(name, self.drill_dir, clock=self.clock)
        return self.scheduler

    def load(self) -> Session:
        """Build the session and fill it from the database, if anything is saved."""
        self.session = Session(scheduler=self.scheduler, clock=self.clock,
                               skip_window_seconds=self.settings.get("skip_window_seconds"))
        if self.conn is not None:
            snapshot = load_snapshot(self.conn)
            if snapshot is not None:
                self.session.load_snapshot(snapshot)
        return self.session

    def save(self):
        save_snapshot(self.conn, self.session.snapshot())

    def close(self):
        """Close the database connection."""
        if self.conn:
            self.conn.close()
            self.conn = None

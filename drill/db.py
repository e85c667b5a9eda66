"""Database schema and snapshot persistence."""

import json
import pathlib
import sqlite3

SCHEMA = """
CREATE TABLE IF NOT EXISTS items (
    id INTEGER PRIMARY KEY,
    front TEXT NOT NULL,
    back TEXT NOT NULL,
    parent_id INTEGER REFERENCES items(id),
    input_mode TEXT,
    UNIQUE(parent_id, input_mode)
);

CREATE TABLE IF NOT EXISTS scheduling_records (
    card_id INTEGER PRIMARY KEY REFERENCES items(id),
    state JSON NOT NULL
);

CREATE TABLE IF NOT EXISTS history (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    card_id INTEGER NOT NULL REFERENCES items(id),
    reviewed_at TEXT NOT NULL
);
"""


def init_db(db_path: pathlib.Path | str) -> sqlite3.Connection:
    db_path = pathlib.Path(db_path)
    if str(db_path) != ":memory:":
        db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path), timeout=5)
    conn.row_factory = sqlite3.Row
    if str(db_path) != ":memory:":
        conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA foreign_keys=ON")
    conn.executescript(SCHEMA)
    conn.commit()
    return conn


def save_snapshot(conn: sqlite3.Connection, snapshot: dict):
    """Replace the stored state with ``snapshot`` in one transaction."""
    with conn:
        conn.execute("DELETE FROM history")
        conn.execute("DELETE FROM scheduling_records")
        conn.execute("DELETE FROM items")
        # Parents before children so the parent_id reference resolves.
        items = sorted(snapshot["items"], key=lambda i: (i["parent_id"] is not None, i["id"]))
        conn.executemany("""
            INSERT INTO items (id, front, back, parent_id, input_mode)
            VALUES (:id, :front, :back, :parent_id, :input_mode)
        """, items)
        conn.executemany(
            "INSERT INTO scheduling_records (card_id, state) VALUES (?, ?)",
            [(int(card_id), json.dumps(state, sort_keys=True))
             for card_id, state in snapshot["records"].items()])
        conn.executemany(
            "INSERT INTO history (card_id, reviewed_at) VALUES (?, ?)",
            [(h["card_id"], h["reviewed_at"]) for h in snapshot["history"]])


def load_snapshot(conn: sqlite3.Connection) -> dict | None:
    """Read the stored state. Returns None when nothing has been saved."""
    items = [dict(r) for r in conn.execute(
        "SELECT id, front, back, parent_id, input_mode FROM items ORDER BY id")]
    if not items:
        return None
    records = {r["card_id"]: json.loads(r["state"]) for r in conn.execute(
        "SELECT card_id, state FROM scheduling_records")}
    history = [dict(r) for r in conn.execute(
        "SELECT card_id, reviewed_at FROM history ORDER BY id")]
    return {"items": items, "records": records, "history": history}

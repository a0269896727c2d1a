"""
Demo data seeding for tablepeek.

Creates the `ProgrammingLanguages` and `Notes` tables that `tablepeek run`
dumps by default and fills them with deterministic pseudo-random rows. The
`Notes` table deliberately mixes column types (BLOB, DECIMAL, DATETIME, TIME,
NULLs) so the dump exercises every value conversion.
"""

from __future__ import annotations

import random
import sys
import time
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, List, Optional, Sequence, Tuple

import pymysql
import typer

from tablepeek.config import get_settings
from tablepeek.infrastructure.db_factory import get_connection

app = typer.Typer(help="Create and seed the demo tables dumped by tablepeek.")

LANGUAGES: Sequence[Tuple[str, int, bool]] = (
    ("Go", 2009, True),
    ("Python", 1991, False),
    ("Rust", 2010, True),
    ("C", 1972, True),
    ("Haskell", 1990, True),
    ("JavaScript", 1995, False),
)

SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS ProgrammingLanguages (
        id INT AUTO_INCREMENT PRIMARY KEY,
        name VARCHAR(64) NOT NULL,
        first_appeared SMALLINT NOT NULL,
        statically_typed BOOLEAN NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS Notes (
        id INT AUTO_INCREMENT PRIMARY KEY,
        title VARCHAR(128) NOT NULL,
        body BLOB NULL,
        rating DECIMAL(4, 2) NULL,
        created_at DATETIME NOT NULL,
        time_spent TIME NULL
    )
    """,
)


def _note_rows(rows: int, seed: int) -> List[Tuple[Any, ...]]:
    rng = random.Random(seed)
    topics = ["goroutines", "generators", "borrowing", "pointers", "monads", "closures"]
    base = datetime(2024, 1, 1, 9, 0, 0)
    notes: List[Tuple[Any, ...]] = []
    for i in range(rows):
        topic = rng.choice(topics)
        body: Optional[bytes] = f"Notes on {topic} #{i}".encode("utf-8") if i % 3 else None
        rating = Decimal(rng.randint(0, 1000)) / 100 if i % 4 else None
        notes.append(
            (
                f"{topic.title()} {i}",
                body,
                rating,
                base + timedelta(hours=rng.randint(0, 24 * 365)),
                timedelta(minutes=rng.randint(1, 600)) if i % 5 else None,
            )
        )
    return notes


def seed_demo_tables(conn: Any, notes: int = 12, seed: int = 42, reset: bool = True) -> int:
    """
    Create the demo tables on `conn` and insert rows.

    Returns the total number of rows inserted.
    """
    with conn.cursor() as cur:
        if reset:
            cur.execute("DROP TABLE IF EXISTS ProgrammingLanguages")
            cur.execute("DROP TABLE IF EXISTS Notes")
        for statement in SCHEMA:
            cur.execute(statement)
        cur.executemany(
            "INSERT INTO ProgrammingLanguages (name, first_appeared, statically_typed) "
            "VALUES (%s, %s, %s)",
            LANGUAGES,
        )
        note_rows = _note_rows(notes, seed)
        if note_rows:
            cur.executemany(
                "INSERT INTO Notes (title, body, rating, created_at, time_spent) "
                "VALUES (%s, %s, %s, %s, %s)",
                note_rows,
            )
    conn.commit()
    return len(LANGUAGES) + len(note_rows)


@app.command()
def main(
    notes: int = typer.Option(
        12,
        "--notes",
        "-n",
        help="Number of rows to generate for the Notes table.",
    ),
    seed: int = typer.Option(
        42,
        "--seed",
        help="Deterministic RNG seed.",
    ),
    database: Optional[str] = typer.Option(
        None,
        "--database",
        help="Database to seed (default from DB_NAME).",
    ),
    keep: bool = typer.Option(
        False,
        "--keep",
        help="Keep existing tables and append rows instead of recreating them.",
    ),
) -> None:
    """
    Create the demo tables and load generated rows into them.
    """
    settings = get_settings().with_overrides(db_name=database)
    if not settings.db_name:
        typer.echo("A database is required (--database or DB_NAME).", err=True)
        raise typer.Exit(code=2)

    start = time.perf_counter()
    conn = get_connection(settings)
    try:
        inserted = seed_demo_tables(conn, notes=notes, seed=seed, reset=not keep)
    except pymysql.MySQLError as exc:
        typer.echo(f"Seeding failed: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    finally:
        conn.close()

    typer.echo(
        f"Seeded {inserted} rows into {settings.db_name} in {time.perf_counter() - start:.2f}s."
    )


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)

from __future__ import annotations

from pathlib import Path

import pytest

from tatedig.db import TateDB


@pytest.fixture
def db(tmp_path: Path):
    with TateDB(tmp_path / "tate.duckdb") as db:
        yield db


def add_artwork(conn, id: int, **fields):
    cols = ["id", *fields]
    marks = ", ".join("?" for _ in cols)
    conn.execute(
        f"INSERT INTO tate_artworks ({', '.join(cols)}) VALUES ({marks})",
        [id, *fields.values()],
    )


def add_artist(conn, id: int, **fields):
    cols = ["id", *fields]
    marks = ", ".join("?" for _ in cols)
    conn.execute(
        f"INSERT INTO tate_artists ({', '.join(cols)}) VALUES ({marks})",
        [id, *fields.values()],
    )

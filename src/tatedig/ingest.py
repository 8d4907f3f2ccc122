"""Tate collection CSV ingestion into the tatedig database."""

from pathlib import Path

import duckdb

from tatedig.db import ensure_schema

TATE_DATA = Path("data/tate")

# (table column, CSV header, kind). "int" columns go through TRY_CAST,
# "text" columns map '' to NULL.
ARTWORK_COLUMNS = [
    ("accession_number", "accession_number", "text"),
    ("artist", "artist", "text"),
    ("artist_role", "artistRole", "text"),
    ("artist_id", "artistId", "int"),
    ("title", "title", "text"),
    ("date_text", "dateText", "text"),
    ("medium", "medium", "text"),
    ("credit_line", "creditLine", "text"),
    ("year", "year", "text"),
    ("acquisition_year", "acquisitionYear", "int"),
    ("dimensions", "dimensions", "text"),
    ("width", "width", "text"),
    ("height", "height", "text"),
    ("depth", "depth", "text"),
    ("units", "units", "text"),
    ("inscription", "inscription", "text"),
    ("thumbnail_copyright", "thumbnailCopyright", "text"),
    ("thumbnail_url", "thumbnailUrl", "text"),
    ("url", "url", "text"),
]

ARTIST_COLUMNS = [
    ("name", "name", "text"),
    ("gender", "gender", "text"),
    ("dates", "dates", "text"),
    ("year_of_birth", "yearOfBirth", "int"),
    ("year_of_death", "yearOfDeath", "int"),
    ("place_of_birth", "placeOfBirth", "text"),
    ("place_of_death", "placeOfDeath", "text"),
    ("nationalities", "nationalities", "text"),
    ("url", "url", "text"),
]


def _select_expr(column: str, header: str, kind: str, present: set[str]) -> str:
    if header not in present:
        return f"NULL AS {column}"
    if kind == "int":
        return f'TRY_CAST(NULLIF(trim("{header}"), \'\') AS INTEGER) AS {column}'
    return f"NULLIF(\"{header}\", '') AS {column}"


class TateIngester:
    """Replaces tate_artworks and tate_artists with the contents of the Tate CSVs.

    Derived columns start out NULL; run the cleaning pass afterwards.
    """

    def __init__(self, conn: duckdb.DuckDBPyConnection, data_dir: Path = TATE_DATA):
        self.conn = conn
        self.artworks = str(data_dir / "artwork_data.csv")
        self.artists = str(data_dir / "artist_data.csv")

    def _headers(self, csv: str) -> set[str]:
        rows = self.conn.execute(
            f"DESCRIBE SELECT * FROM read_csv_auto('{csv}', header=true, all_varchar=true)"
        ).fetchall()
        return {row[0] for row in rows}

    def _load(self, table: str, csv: str, id_type: str, columns: list[tuple[str, str, str]]):
        present = self._headers(csv)
        names = ["id"] + [col for col, _, _ in columns]
        exprs = [f'CAST("id" AS {id_type}) AS id'] + [
            _select_expr(col, header, kind, present) for col, header, kind in columns
        ]
        select = ",\n                ".join(exprs)
        self.conn.execute(f"""
            INSERT INTO {table} ({", ".join(names)})
            SELECT
                {select}
            FROM read_csv_auto('{csv}', header=true, all_varchar=true)
            WHERE "id" IS NOT NULL AND "id" != ''
        """)
        return self.conn.execute(f"SELECT count(*) FROM {table}").fetchone()[0]

    def run(self):
        self.conn.begin()
        try:
            self.conn.execute("DROP TABLE IF EXISTS tate_artworks")
            self.conn.execute("DROP TABLE IF EXISTS tate_artists")
            ensure_schema(self.conn)
            artists = self._load("tate_artists", self.artists, "INTEGER", ARTIST_COLUMNS)
            artworks = self._load("tate_artworks", self.artworks, "BIGINT", ARTWORK_COLUMNS)
            self.conn.commit()
        except Exception:
            self.conn.rollback()
            raise
        print(f"Tate: ingested {artists:,} artists")
        print(f"Tate: ingested {artworks:,} artworks")

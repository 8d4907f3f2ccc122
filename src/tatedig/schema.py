"""DDL constants for the tatedig database."""

from __future__ import annotations

from dataclasses import dataclass

ARTWORKS_TABLE = "tate_artworks"
ARTISTS_TABLE = "tate_artists"

# Raw columns only. Derived columns are added by the schema evolution step in db.py.
CREATE_ARTWORKS = """
CREATE TABLE IF NOT EXISTS tate_artworks (
    id                  BIGINT PRIMARY KEY,
    accession_number    VARCHAR,
    artist              VARCHAR,
    artist_role         VARCHAR,
    artist_id           INTEGER,
    title               VARCHAR,
    date_text           VARCHAR,
    medium              VARCHAR,
    credit_line         VARCHAR,
    year                VARCHAR,
    acquisition_year    INTEGER,
    dimensions          VARCHAR,
    width               VARCHAR,
    height              VARCHAR,
    depth               VARCHAR,
    units               VARCHAR,
    inscription         VARCHAR,
    thumbnail_copyright VARCHAR,
    thumbnail_url       VARCHAR,
    url                 VARCHAR
);
"""

CREATE_ARTISTS = """
CREATE TABLE IF NOT EXISTS tate_artists (
    id                  INTEGER PRIMARY KEY,
    name                VARCHAR,
    gender              VARCHAR,
    dates               VARCHAR,
    year_of_birth       INTEGER,
    year_of_death       INTEGER,
    place_of_birth      VARCHAR,
    place_of_death      VARCHAR,
    nationalities       VARCHAR,
    url                 VARCHAR
);
"""

DIMENSION_INTEGER_DIGITS = 28
DIMENSION_SCALE = 10
DIMENSION_TYPE = f"DECIMAL({DIMENSION_INTEGER_DIGITS + DIMENSION_SCALE}, {DIMENSION_SCALE})"
# Stripped text that fits DIMENSION_TYPE exactly; anything longer would round or overflow.
DIMENSION_TEXT_PATTERN = rf"[0-9]{{0,{DIMENSION_INTEGER_DIGITS}}}(\.[0-9]{{0,{DIMENSION_SCALE}}})?"

# cleaned_year is INTEGER
YEAR_MAX = 2**31 - 1

# Cleaning rules and the lifespan predicate. Every UPDATE and report goes
# through these so each rule has exactly one SQL definition.
CREATE_MACROS = [
    """
    CREATE OR REPLACE MACRO dimension_text(raw) AS
        regexp_replace(lower(raw), '[^0-9.]', '', 'g')
    """,
    f"""
    CREATE OR REPLACE MACRO clean_dimension(raw) AS
        CASE WHEN regexp_matches(raw, '[0-9]')
              AND regexp_full_match(dimension_text(raw), '{DIMENSION_TEXT_PATTERN}')
             THEN TRY_CAST(dimension_text(raw) AS {DIMENSION_TYPE})
             ELSE NULL END
    """,
    """
    CREATE OR REPLACE MACRO clean_sentinel_year(raw) AS
        NULLIF(raw, 0)
    """,
    """
    CREATE OR REPLACE MACRO clean_year_text(raw) AS
        CASE WHEN regexp_full_match(trim(raw), '[0-9]+')
             THEN TRY_CAST(trim(raw) AS INTEGER)
             ELSE NULL END
    """,
    """
    CREATE OR REPLACE MACRO known_lifespan(birth, death) AS
        CASE WHEN birth IS NOT NULL AND death IS NOT NULL AND death - birth > 0
             THEN death - birth
             ELSE NULL END
    """,
]

# Created after the derived columns exist; DuckDB refuses ALTER TABLE on indexed tables.
CREATE_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_tate_artworks_artist ON tate_artworks (artist)",
    "CREATE INDEX IF NOT EXISTS idx_tate_artworks_artist_id ON tate_artworks (artist_id)",
    "CREATE INDEX IF NOT EXISTS idx_tate_artworks_medium ON tate_artworks (medium)",
    "CREATE INDEX IF NOT EXISTS idx_tate_artworks_acquisition_year ON tate_artworks (acquisition_year)",
    "CREATE UNIQUE INDEX IF NOT EXISTS idx_tate_artworks_accession_number ON tate_artworks (accession_number)",
]


@dataclass(frozen=True, slots=True)
class DerivedColumn:
    """A nullable column computed from one raw column by a cleaning macro."""

    name: str
    sql_type: str
    source: str
    macro: str

    def expression(self, alias: str | None = None) -> str:
        source = f"{alias}.{self.source}" if alias else self.source
        return f"{self.macro}({source})"


DERIVED_COLUMNS: dict[str, tuple[DerivedColumn, ...]] = {
    ARTWORKS_TABLE: (
        DerivedColumn("cleaned_width_mm", DIMENSION_TYPE, "width", "clean_dimension"),
        DerivedColumn("cleaned_height_mm", DIMENSION_TYPE, "height", "clean_dimension"),
        DerivedColumn("cleaned_depth_mm", DIMENSION_TYPE, "depth", "clean_dimension"),
        DerivedColumn("cleaned_year", "INTEGER", "year", "clean_year_text"),
    ),
    ARTISTS_TABLE: (
        DerivedColumn("cleaned_birth_year", "INTEGER", "year_of_birth", "clean_sentinel_year"),
        DerivedColumn("cleaned_death_year", "INTEGER", "year_of_death", "clean_sentinel_year"),
    ),
}

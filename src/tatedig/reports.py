"""Collection reports over the cleaned Tate data.

Reports only read derived numeric columns (cleaned_*) and raw categorical
columns. Lifespans always go through the known_lifespan macro.
"""

import duckdb

LIFESPAN = "known_lifespan(a.cleaned_birth_year, a.cleaned_death_year)"


class CollectionReports:
    """Read-only aggregate queries over tate_artworks and tate_artists."""

    def __init__(self, conn: duckdb.DuckDBPyConnection):
        self.conn = conn

    # --- Artworks ---

    def top_artists(self, limit: int = 10) -> list[tuple]:
        return self.conn.execute(f"""
            SELECT artist, count(*) AS artwork_count
            FROM tate_artworks
            WHERE artist IS NOT NULL
            GROUP BY artist
            ORDER BY artwork_count DESC, artist
            LIMIT {int(limit)}
        """).fetchall()

    def acquisitions_by_year(self) -> list[tuple]:
        return self.conn.execute("""
            SELECT acquisition_year, count(*) AS total_acquired
            FROM tate_artworks
            WHERE acquisition_year IS NOT NULL
            GROUP BY acquisition_year
            ORDER BY acquisition_year
        """).fetchall()

    def top_media(self, limit: int = 5) -> list[tuple]:
        return self.conn.execute(f"""
            SELECT medium, count(*) AS medium_count
            FROM tate_artworks
            WHERE medium IS NOT NULL
            GROUP BY medium
            ORDER BY medium_count DESC, medium
            LIMIT {int(limit)}
        """).fetchall()

    def largest_artworks(self, limit: int = 5) -> list[tuple]:
        """Largest 2D works by width x height, in square millimetres."""
        return self.conn.execute(f"""
            SELECT
                title,
                artist,
                medium,
                cleaned_width_mm::DOUBLE * cleaned_height_mm::DOUBLE AS area_sq_mm
            FROM tate_artworks
            WHERE cleaned_width_mm IS NOT NULL
              AND cleaned_height_mm IS NOT NULL
            ORDER BY area_sq_mm DESC, id
            LIMIT {int(limit)}
        """).fetchall()

    def average_width_for_century(self, start: int = 1800) -> float | None:
        return self.conn.execute("""
            SELECT avg(cleaned_width_mm)
            FROM tate_artworks
            WHERE cleaned_year BETWEEN ? AND ?
              AND cleaned_width_mm IS NOT NULL
        """, [start, start + 99]).fetchone()[0]

    def largest_per_acquisition_decade(self, min_year: int = 1800) -> list[tuple]:
        """The largest work (RANK 1 by area) acquired in each decade, area in m²."""
        return self.conn.execute("""
            WITH artwork_area AS (
                SELECT
                    title,
                    artist,
                    cleaned_width_mm::DOUBLE * cleaned_height_mm::DOUBLE AS area_sq_mm,
                    (acquisition_year // 10) * 10 AS acquisition_decade
                FROM tate_artworks
                WHERE cleaned_width_mm IS NOT NULL
                  AND cleaned_height_mm IS NOT NULL
                  AND acquisition_year IS NOT NULL
                  AND acquisition_year > ?
            ),
            ranked_area AS (
                SELECT
                    *,
                    RANK() OVER (
                        PARTITION BY acquisition_decade
                        ORDER BY area_sq_mm DESC
                    ) AS rank_in_decade
                FROM artwork_area
            )
            SELECT
                acquisition_decade,
                title,
                artist,
                ROUND(area_sq_mm / 1000000, 2) AS area_sq_m
            FROM ranked_area
            WHERE rank_in_decade = 1
            ORDER BY acquisition_decade DESC, title
        """, [min_year]).fetchall()

    def acquisitions_by_era(self, recent_year: int = 2000) -> list[tuple]:
        """Historic vs modern works, and the share of each acquired since recent_year."""
        return self.conn.execute("""
            SELECT
                CASE WHEN cleaned_year < 1900 THEN 'Historic (Pre-1900)'
                     ELSE 'Modern (1900+)' END                    AS art_era,
                count(*)                                          AS total_artworks_in_era,
                count(*) FILTER (WHERE acquisition_year >= ?)     AS acquired_recently,
                ROUND(
                    count(*) FILTER (WHERE acquisition_year >= ?) * 100.0 / count(*), 2
                )                                                 AS percent_acquired_recently
            FROM tate_artworks
            WHERE cleaned_year IS NOT NULL
            GROUP BY art_era
            ORDER BY art_era DESC
        """, [recent_year, recent_year]).fetchall()

    def title_length_by_decade(self, min_year: int = 1700) -> list[tuple]:
        return self.conn.execute("""
            WITH title_stats AS (
                SELECT
                    length(title) AS title_length,
                    (cleaned_year // 10) * 10 AS creation_decade
                FROM tate_artworks
                WHERE cleaned_year > ?
                  AND title IS NOT NULL
            )
            SELECT
                creation_decade,
                count(*) AS works_in_decade,
                ROUND(avg(title_length), 2) AS avg_title_length_chars
            FROM title_stats
            GROUP BY creation_decade
            ORDER BY creation_decade DESC
        """, [min_year]).fetchall()

    # --- Artists ---

    def average_lifespan(self) -> float | None:
        return self.conn.execute(f"""
            SELECT avg({LIFESPAN})
            FROM tate_artists a
            WHERE {LIFESPAN} IS NOT NULL
        """).fetchone()[0]

    def births_by_century(self) -> list[tuple]:
        return self.conn.execute("""
            SELECT
                CASE
                    WHEN cleaned_birth_year BETWEEN 1700 AND 1799 THEN '18th Century'
                    WHEN cleaned_birth_year BETWEEN 1800 AND 1899 THEN '19th Century'
                    WHEN cleaned_birth_year BETWEEN 1900 AND 1999 THEN '20th Century'
                    ELSE 'Other/Unknown'
                END AS birth_century,
                count(id) AS total_artists
            FROM tate_artists
            GROUP BY 1
            ORDER BY 2 DESC, 1
        """).fetchall()

    def gender_distribution(self) -> list[tuple]:
        return self.conn.execute("""
            WITH gender_counts AS (
                SELECT gender, count(id) AS artist_count
                FROM tate_artists
                WHERE gender IS NOT NULL AND gender != ''
                GROUP BY gender
            )
            SELECT
                gender,
                artist_count,
                ROUND(artist_count * 100.0 / SUM(artist_count) OVER (), 2) AS percentage_share
            FROM gender_counts
            ORDER BY artist_count DESC, gender
        """).fetchall()

    def longest_lived(self, limit: int = 5) -> list[tuple]:
        return self.conn.execute(f"""
            SELECT
                a.name,
                COALESCE(a.place_of_death, 'Unknown') AS place_of_death,
                {LIFESPAN} AS lifespan_years
            FROM tate_artists a
            WHERE {LIFESPAN} IS NOT NULL
            ORDER BY lifespan_years DESC, a.name
            LIMIT {int(limit)}
        """).fetchall()

    def top_birthplaces(self, limit: int = 5) -> list[tuple]:
        return self.conn.execute(f"""
            SELECT trim(place_of_birth) AS birth_location, count(id) AS artist_count
            FROM tate_artists
            WHERE place_of_birth IS NOT NULL AND trim(place_of_birth) != ''
            GROUP BY 1
            ORDER BY artist_count DESC, birth_location
            LIMIT {int(limit)}
        """).fetchall()

    def underrepresented_nationalities(self, max_artists: int = 5, share_of_all: bool = False) -> list[tuple]:
        """Nationalities with fewer than max_artists artists.

        The percentage is each nationality's share of the artists in the
        returned rows. With share_of_all it is the share of every artist with
        a nationality instead.
        """
        # The window runs after WHERE, so filtering first narrows the denominator.
        if share_of_all:
            inner_filter, outer_filter = "", "WHERE artist_count < ?"
        else:
            inner_filter, outer_filter = "WHERE artist_count < ?", ""
        return self.conn.execute(f"""
            WITH nationality_counts AS (
                SELECT trim(nationalities) AS nation, count(id) AS artist_count
                FROM tate_artists
                WHERE nationalities IS NOT NULL AND trim(nationalities) != ''
                GROUP BY 1
            ),
            shares AS (
                SELECT
                    nation,
                    artist_count,
                    ROUND(artist_count * 100.0 / SUM(artist_count) OVER (), 3) AS percentage_share
                FROM nationality_counts
                {inner_filter}
            )
            SELECT nation, artist_count, percentage_share
            FROM shares
            {outer_filter}
            ORDER BY artist_count DESC, nation ASC
        """, [max_artists]).fetchall()

    # --- Artworks joined to artists ---

    def artwork_volume_by_gender(self) -> list[tuple]:
        return self.conn.execute("""
            WITH volume AS (
                SELECT trim(a.gender) AS gender_group, count(w.id) AS artwork_count
                FROM tate_artworks w
                JOIN tate_artists a ON w.artist_id = a.id
                WHERE a.gender IS NOT NULL AND trim(a.gender) != ''
                GROUP BY gender_group
            )
            SELECT
                gender_group,
                artwork_count,
                ROUND(artwork_count * 100.0 / SUM(artwork_count) OVER (), 2) AS percentage_of_collection
            FROM volume
            ORDER BY artwork_count DESC, gender_group
        """).fetchall()

    def high_risk_artists(self, limit: int = 10) -> list[tuple]:
        """Artists with the most works, then the longest known lifespan."""
        return self.conn.execute(f"""
            SELECT
                a.name AS artist_name,
                {LIFESPAN} AS artist_lifespan_years,
                count(w.id) AS total_artworks_in_collection
            FROM tate_artworks w
            JOIN tate_artists a ON w.artist_id = a.id
            WHERE {LIFESPAN} IS NOT NULL
            GROUP BY a.id, a.name, a.cleaned_birth_year, a.cleaned_death_year
            ORDER BY total_artworks_in_collection DESC, artist_lifespan_years DESC, artist_name
            LIMIT {int(limit)}
        """).fetchall()

    def active_high_volume_artists(self, min_works: int = 50) -> list[tuple]:
        """Artists presumed alive (no death year, known birth year) with many works."""
        return self.conn.execute("""
            SELECT a.name AS artist_name, count(w.id) AS total_artworks_in_collection
            FROM tate_artworks w
            JOIN tate_artists a ON w.artist_id = a.id
            WHERE a.cleaned_death_year IS NULL
              AND a.cleaned_birth_year IS NOT NULL
            GROUP BY a.id, a.name
            HAVING count(w.id) >= ?
            ORDER BY total_artworks_in_collection DESC, artist_name
        """, [min_works]).fetchall()

    # --- Printing ---

    def run(self):
        self._table("Top Artists", self.top_artists())
        self._table("Acquisitions by Year", self.acquisitions_by_year())
        self._table("Top Media", self.top_media())
        self._table("Largest Artworks (mm²)", self.largest_artworks())
        self._scalar("Average Width, 19th Century (mm)", self.average_width_for_century(1800))
        self._table("Largest Acquisition per Decade (m²)", self.largest_per_acquisition_decade())
        self._table("Acquisitions by Era", self.acquisitions_by_era())
        self._table("Title Length by Decade", self.title_length_by_decade())
        self._scalar("Average Artist Lifespan (years)", self.average_lifespan())
        self._table("Artist Births by Century", self.births_by_century())
        self._table("Artist Gender Distribution", self.gender_distribution())
        self._table("Longest Lived Artists", self.longest_lived())
        self._table("Top Birthplaces", self.top_birthplaces())
        self._table("Underrepresented Nationalities", self.underrepresented_nationalities())
        self._table("Artwork Volume by Gender", self.artwork_volume_by_gender())
        self._table("High-Risk Artist Concentration", self.high_risk_artists())
        self._table("Active High-Volume Artists", self.active_high_volume_artists())

    def _table(self, title: str, rows: list[tuple]):
        print(f"=== {title} ===")
        if not rows:
            print("  (none)")
        for row in rows:
            print("  " + "  |  ".join(_fmt(v) for v in row))
        print()

    def _scalar(self, title: str, value):
        print(f"=== {title} ===")
        print(f"  {_fmt(value) if value is not None else '(none)'}")
        print()


def _fmt(value) -> str:
    if value is None:
        return "-"
    if isinstance(value, int):
        return f"{value:,}" if abs(value) >= 10_000 else str(value)
    if isinstance(value, float):
        return f"{value:,.2f}"
    return str(value)

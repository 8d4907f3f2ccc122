"""Catalogue summary statistics and cleaning coverage."""

import duckdb

from tatedig.schema import DERIVED_COLUMNS


class CatalogueStats:
    """Prints record counts and how much of each raw field the cleaning pass recovered."""

    def __init__(self, conn: duckdb.DuckDBPyConnection):
        self.conn = conn

    def run(self):
        self._counts()
        self._coverage()
        self._samples()

    def coverage(self) -> list[tuple[str, str, int, int, int]]:
        """(table, column, raw present, cleaned, pending) for every derived column."""
        rows = []
        for table, columns in DERIVED_COLUMNS.items():
            for col in columns:
                raw, cleaned, pending = self.conn.execute(f"""
                    SELECT
                        count({col.source}),
                        count({col.name}),
                        count(*) FILTER (WHERE {col.name} IS NULL)
                    FROM {table}
                """).fetchone()
                rows.append((table, col.name, raw, cleaned, pending))
        return rows

    def _counts(self):
        print("=== Record Counts ===")
        for table in DERIVED_COLUMNS:
            cnt = self.conn.execute(f"SELECT count(*) FROM {table}").fetchone()[0]
            print(f"  {table}: {cnt:,}")
        unresolved = self.conn.execute("""
            SELECT count(*)
            FROM tate_artworks w
            LEFT JOIN tate_artists a ON w.artist_id = a.id
            WHERE w.artist_id IS NOT NULL AND a.id IS NULL
        """).fetchone()[0]
        print(f"  artworks with unresolved artist: {unresolved:,}")
        print()

    def _coverage(self):
        print("=== Cleaning Coverage ===")
        for table, column, raw, cleaned, pending in self.coverage():
            print(f"  {table}.{column}: {cleaned:,} cleaned of {raw:,} raw ({pending:,} null)")
        print()

    def _samples(self):
        print("=== Sample Dimensions (raw -> cleaned) ===")
        rows = self.conn.execute("""
            SELECT width, cleaned_width_mm, height, cleaned_height_mm
            FROM tate_artworks
            WHERE cleaned_width_mm IS NOT NULL
            ORDER BY id
            LIMIT 10
        """).fetchall()
        for width, cw, height, ch in rows:
            print(f"  width {width!r} -> {cw}   height {height!r} -> {ch}")
        print()

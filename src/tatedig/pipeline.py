"""Idempotent cleaning pass over the tatedig database.

Progress lives only in the derived columns themselves: a row still needs work
while any of its derived columns is NULL. Each batch commits on its own, so an
interrupted or capped run leaves the rest for the next run, and finished
values are never recomputed.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import duckdb

from tatedig.schema import ARTISTS_TABLE, ARTWORKS_TABLE, DERIVED_COLUMNS, DerivedColumn


@dataclass(slots=True)
class CleaningConfig:
    batch_size: int = 50_000
    # Per table; None runs until no pending rows remain.
    max_batches: int | None = None


@dataclass(slots=True)
class CleaningResult:
    visited: dict[str, int] = field(default_factory=dict)
    filled: dict[str, int] = field(default_factory=dict)

    @property
    def total_filled(self) -> int:
        return sum(self.filled.values())


def _pending_clause(columns: tuple[DerivedColumn, ...]) -> str:
    return " OR ".join(f"{col.name} IS NULL" for col in columns)


class CleaningPass:
    """Fills NULL derived columns on tate_artworks and tate_artists."""

    def __init__(self, conn: duckdb.DuckDBPyConnection):
        self.conn = conn

    def pending(self) -> dict[str, int]:
        """Rows per table with at least one NULL derived column."""
        counts = {}
        for table, columns in DERIVED_COLUMNS.items():
            counts[table] = self.conn.execute(
                f"SELECT count(*) FROM {table} WHERE {_pending_clause(columns)}"
            ).fetchone()[0]
        return counts

    def _next_batch(self, table: str, pending: str, after: int | None, size: int) -> list[int]:
        after_clause = "id > ?" if after is not None else "TRUE"
        params = [after] if after is not None else []
        rows = self.conn.execute(
            f"""
            SELECT id FROM {table}
            WHERE {after_clause} AND ({pending})
            ORDER BY id
            LIMIT {int(size)}
            """,
            params,
        ).fetchall()
        return [row[0] for row in rows]

    def _count_fillable(self, table: str, columns: tuple[DerivedColumn, ...], lo: int, hi: int) -> list[int]:
        selects = ",\n".join(
            f"count(*) FILTER (WHERE {col.name} IS NULL AND {col.expression()} IS NOT NULL)"
            for col in columns
        )
        return list(self.conn.execute(
            f"SELECT {selects} FROM {table} WHERE id BETWEEN ? AND ?",
            [lo, hi],
        ).fetchone())

    def _update_batch(self, table: str, columns: tuple[DerivedColumn, ...], pending: str, lo: int, hi: int):
        assignments = ",\n".join(
            f"{col.name} = COALESCE({col.name}, {col.expression()})"
            for col in columns
        )
        self.conn.execute(
            f"""
            UPDATE {table}
            SET {assignments}
            WHERE id BETWEEN ? AND ? AND ({pending})
            """,
            [lo, hi],
        )

    def clean_table(self, table: str, cfg: CleaningConfig, result: CleaningResult):
        columns = DERIVED_COLUMNS[table]
        pending = _pending_clause(columns)
        for col in columns:
            result.filled.setdefault(col.name, 0)
        result.visited.setdefault(table, 0)

        last_id = None
        batches = 0
        while True:
            if cfg.max_batches is not None and batches >= cfg.max_batches:
                print(f"Clean [{table}]: reached max_batches={cfg.max_batches}, stopping")
                break

            ids = self._next_batch(table, pending, last_id, cfg.batch_size)
            if not ids:
                break
            lo, hi = ids[0], ids[-1]

            self.conn.begin()
            try:
                fillable = self._count_fillable(table, columns, lo, hi)
                self._update_batch(table, columns, pending, lo, hi)
                self.conn.commit()
            except Exception:
                self.conn.rollback()
                raise

            for col, n in zip(columns, fillable):
                result.filled[col.name] += n
            result.visited[table] += len(ids)
            batches += 1
            last_id = hi

            if batches % 10 == 0:
                print(f"Clean [{table}]: batch {batches}, {result.visited[table]:,} rows visited")

        filled = ", ".join(f"{col.name}={result.filled[col.name]:,}" for col in columns)
        print(f"Clean [{table}]: {result.visited[table]:,} rows visited, filled {filled}")

    def run(self, cfg: CleaningConfig | None = None) -> CleaningResult:
        cfg = cfg or CleaningConfig()
        if cfg.batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {cfg.batch_size}")
        result = CleaningResult()
        self.clean_table(ARTWORKS_TABLE, cfg, result)
        self.clean_table(ARTISTS_TABLE, cfg, result)
        return result

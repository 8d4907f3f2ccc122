"""Data pipeline for tatedig: Tate collection cleaning and reports.

Run with: pymake
List tasks: pymake list
"""

from pathlib import Path

from pymake import task

OUTPUT_DIR = Path("output")
TOUCH_DIR = OUTPUT_DIR / ".touch"
TATE_DATABASE = OUTPUT_DIR / "tate.duckdb"

TATE_DATA_DIR = Path("data/tate")
ARTWORK_CSV = TATE_DATA_DIR / "artwork_data.csv"
ARTIST_CSV = TATE_DATA_DIR / "artist_data.csv"

_TATE_RAW = "https://raw.githubusercontent.com/tategallery/collection/master"


@task(outputs=[ARTWORK_CSV, ARTIST_CSV])
def download():
    """Download the Tate collection CSVs from GitHub."""
    import urllib.request

    TATE_DATA_DIR.mkdir(parents=True, exist_ok=True)
    for dest in (ARTWORK_CSV, ARTIST_CSV):
        if dest.exists():
            print(f"  skip {dest.name} (exists)")
            continue
        url = f"{_TATE_RAW}/{dest.name}"
        print(f"  downloading {dest.name} ...")
        urllib.request.urlretrieve(url, dest)
        print(f"  saved {dest} ({dest.stat().st_size / 1e6:.0f} MB)")


@task(
    inputs=[download, ARTWORK_CSV, ARTIST_CSV],
    touch=TOUCH_DIR / "ingest",
)
def ingest():
    """Load the Tate CSVs into output/tate.duckdb, replacing the previous snapshot."""
    TOUCH_DIR.mkdir(parents=True, exist_ok=True)
    from tatedig.db import TateDB
    from tatedig.ingest import TateIngester

    with TateDB(TATE_DATABASE) as db:
        TateIngester(db.conn, TATE_DATA_DIR).run()


@task(inputs=[ingest])
def clean(batch_size: int = 50_000, max_batches: int | None = None):
    """Fill NULL cleaned_* columns. Safe to interrupt and re-run."""
    from tatedig.db import TateDB
    from tatedig.pipeline import CleaningConfig, CleaningPass

    with TateDB(TATE_DATABASE) as db:
        cfg = CleaningConfig(batch_size=batch_size, max_batches=max_batches)
        result = CleaningPass(db.conn).run(cfg)
        print(f"Clean: filled {result.total_filled:,} values")


@task()
def stats():
    """Print record counts and cleaning coverage."""
    from tatedig.db import TateDB
    from tatedig.stats import CatalogueStats

    with TateDB(TATE_DATABASE) as db:
        CatalogueStats(db.conn).run()


@task(inputs=[clean])
def reports():
    """Print all collection reports."""
    from tatedig.db import TateDB
    from tatedig.reports import CollectionReports

    with TateDB(TATE_DATABASE) as db:
        CollectionReports(db.conn).run()


task.default("clean")

"""Tests for collection reports over a small cleaned collection."""

from __future__ import annotations

import pytest
from conftest import add_artist, add_artwork

from tatedig.pipeline import CleaningPass
from tatedig.reports import CollectionReports


@pytest.fixture
def reports(db) -> CollectionReports:
    conn = db.conn
    add_artist(conn, 1, name="Turner", gender="Male", year_of_birth=1775, year_of_death=1851,
               place_of_birth="London", place_of_death="Chelsea", nationalities="British")
    add_artist(conn, 2, name="Hepworth", gender="Female", year_of_birth=1903, year_of_death=1975,
               place_of_birth="Wakefield", nationalities="British")
    add_artist(conn, 3, name="Unknown Birth", gender="Female", year_of_birth=0, year_of_death=1975,
               place_of_birth=" London ", nationalities="French")
    add_artist(conn, 4, name="Same Year", gender="Male", year_of_birth=1990, year_of_death=1990)
    add_artist(conn, 5, name="Living", gender="Male", year_of_birth=1960, year_of_death=0,
               nationalities="Irish")

    add_artwork(conn, 1, artist="Turner", artist_id=1, title="Sea", medium="Oil paint on canvas",
                width="1200 mm", height="900mm", year="1840", acquisition_year=1856)
    add_artwork(conn, 2, artist="Turner", artist_id=1, title="Sky Study", medium="Watercolour on paper",
                width="200", height="100", year="1820", acquisition_year=1856)
    add_artwork(conn, 3, artist="Turner", artist_id=1, title="Untitled", medium="Oil paint on canvas",
                width="unknown", height="50", year="c.1830", acquisition_year=2005)
    add_artwork(conn, 4, artist="Hepworth", artist_id=2, title="Form", medium="Bronze",
                width="500", height="600", depth="400", year="1960", acquisition_year=2001)
    add_artwork(conn, 5, artist="Unknown Birth", artist_id=3, title="Piece", medium="Oil paint on canvas",
                width="100mm", height="100mm", year="1950", acquisition_year=1999)
    add_artwork(conn, 6, artist="Living", artist_id=5, title="New", medium="Video",
                year="2001", acquisition_year=2005)
    add_artwork(conn, 7, artist="Nobody", artist_id=99, title="Orphan", width="10", height="10")

    CleaningPass(conn).run()
    return CollectionReports(conn)


class TestArtworkReports:
    def test_top_artists(self, reports: CollectionReports):
        rows = reports.top_artists(limit=2)
        assert rows[0] == ("Turner", 3)
        assert len(rows) == 2

    def test_acquisitions_by_year(self, reports: CollectionReports):
        assert reports.acquisitions_by_year() == [(1856, 2), (1999, 1), (2001, 1), (2005, 2)]

    def test_top_media(self, reports: CollectionReports):
        assert reports.top_media(limit=1) == [("Oil paint on canvas", 3)]

    def test_largest_artworks(self, reports: CollectionReports):
        rows = reports.largest_artworks(limit=2)
        assert [r[0] for r in rows] == ["Sea", "Form"]
        assert rows[0][3] == pytest.approx(1080000.0)

    def test_largest_artworks_skips_unknown_dimensions(self, reports: CollectionReports):
        titles = [r[0] for r in reports.largest_artworks(limit=100)]
        assert "Untitled" not in titles
        assert "New" not in titles

    def test_average_width_for_century(self, reports: CollectionReports):
        # Sea (1840) and Sky Study (1820); Untitled's year "c.1830" is not clean.
        assert float(reports.average_width_for_century(1800)) == pytest.approx(700.0)

    def test_average_width_for_empty_century(self, reports: CollectionReports):
        assert reports.average_width_for_century(1600) is None

    def test_largest_per_acquisition_decade(self, reports: CollectionReports):
        rows = reports.largest_per_acquisition_decade()
        assert [(r[0], r[1]) for r in rows] == [(2000, "Form"), (1990, "Piece"), (1850, "Sea")]
        assert float(rows[2][3]) == pytest.approx(1.08)

    def test_acquisitions_by_era(self, reports: CollectionReports):
        rows = {r[0]: r[1:] for r in reports.acquisitions_by_era()}
        assert rows["Historic (Pre-1900)"][:2] == (2, 0)
        modern_total, modern_recent, modern_pct = rows["Modern (1900+)"]
        assert (modern_total, modern_recent) == (3, 2)
        assert float(modern_pct) == pytest.approx(66.67)

    def test_title_length_by_decade(self, reports: CollectionReports):
        rows = reports.title_length_by_decade()
        assert rows[0][:2] == (2000, 1)
        by_decade = {r[0]: (r[1], float(r[2])) for r in rows}
        assert by_decade[1820] == (1, pytest.approx(9.0))
        assert by_decade[1840] == (1, pytest.approx(3.0))


class TestArtistReports:
    def test_average_lifespan_uses_known_lifespans(self, reports: CollectionReports):
        # Turner 76, Hepworth 72; unknown birth, same-year and living artists are excluded.
        assert float(reports.average_lifespan()) == pytest.approx(74.0)

    def test_births_by_century(self, reports: CollectionReports):
        rows = dict(reports.births_by_century())
        assert rows["18th Century"] == 1
        assert rows["20th Century"] == 3
        assert rows["Other/Unknown"] == 1

    def test_gender_distribution(self, reports: CollectionReports):
        rows = reports.gender_distribution()
        assert rows[0][:2] == ("Male", 3)
        assert float(rows[0][2]) == pytest.approx(60.0)
        assert sum(float(r[2]) for r in rows) == pytest.approx(100.0)

    def test_longest_lived_excludes_invalid_lifespans(self, reports: CollectionReports):
        rows = reports.longest_lived(limit=10)
        assert rows == [("Turner", "Chelsea", 76), ("Hepworth", "Unknown", 72)]

    def test_top_birthplaces_trims(self, reports: CollectionReports):
        assert reports.top_birthplaces(limit=1) == [("London", 2)]

    def test_underrepresented_nationalities(self, reports: CollectionReports):
        rows = reports.underrepresented_nationalities(max_artists=2)
        assert [r[0] for r in rows] == ["French", "Irish"]
        # Share of the two artists in the underrepresented group.
        assert [float(r[2]) for r in rows] == [pytest.approx(50.0), pytest.approx(50.0)]

    def test_underrepresented_nationalities_share_of_all(self, reports: CollectionReports):
        rows = reports.underrepresented_nationalities(max_artists=2, share_of_all=True)
        assert [r[0] for r in rows] == ["French", "Irish"]
        # Share of all four artists with a nationality.
        assert float(rows[0][2]) == pytest.approx(25.0)

    def test_underrepresented_nationalities_empty(self, reports: CollectionReports):
        assert reports.underrepresented_nationalities(max_artists=1) == []


class TestJoinedReports:
    def test_artwork_volume_by_gender(self, reports: CollectionReports):
        rows = reports.artwork_volume_by_gender()
        assert [(r[0], r[1]) for r in rows] == [("Male", 4), ("Female", 2)]
        assert float(rows[0][2]) == pytest.approx(66.67)

    def test_high_risk_artists_excludes_unknown_birth(self, reports: CollectionReports):
        rows = reports.high_risk_artists()
        assert rows == [("Turner", 76, 3), ("Hepworth", 72, 1)]

    def test_active_high_volume_artists(self, reports: CollectionReports):
        assert reports.active_high_volume_artists(min_works=1) == [("Living", 1)]
        assert reports.active_high_volume_artists() == []

    def test_run_prints_every_section(self, reports: CollectionReports, capsys):
        reports.run()
        out = capsys.readouterr().out
        assert "=== Top Artists ===" in out
        assert "=== Active High-Volume Artists ===" in out
        assert out.count("===") == 2 * 17

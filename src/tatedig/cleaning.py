"""Record-level cleaning of raw Tate fields into derived numeric values.

These functions mirror the SQL macros in ``tatedig.schema`` and are what the
macros are tested against. Malformed input never raises; it becomes None.

Dimension strings are stripped to their digits and decimal points. The unit is
discarded, not converted: "45.5cm" becomes 45.5, and a multi-number string
such as "190 x 90 mm" collapses to 19090. Existing reports depend on these
values, so changing unit handling is a deliberate migration, not a fix.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, replace
from decimal import Decimal, InvalidOperation

from tatedig.schema import DIMENSION_TEXT_PATTERN, YEAR_MAX

SENTINEL_UNKNOWN_YEAR = 0

_NON_NUMERIC_RE = re.compile(r"[^0-9.]")
_DIMENSION_TEXT_RE = re.compile(DIMENSION_TEXT_PATTERN)
_YEAR_TEXT_RE = re.compile(r"[0-9]+")


def extract_decimal(text: str | None) -> Decimal | None:
    """Keep only ASCII digits and '.', in order, and parse the rest as a Decimal.

    Returns None when nothing numeric is left, or when the digits do not fit
    the stored dimension type exactly (too many integer or fractional digits).
    A value is never rounded.
    """
    if text is None:
        return None
    stripped = _NON_NUMERIC_RE.sub("", text.lower())
    if not any(c.isdigit() for c in stripped):
        return None
    if not _DIMENSION_TEXT_RE.fullmatch(stripped):
        # "1.2.3", or more digits than the column holds
        return None
    try:
        return Decimal(stripped)
    except InvalidOperation:
        return None


def clean_dimension(raw: str | None) -> Decimal | None:
    """Dimension magnitude as written; absent input is None and units are not converted."""
    return extract_decimal(raw)


def clean_sentinel_year(raw: int | None) -> int | None:
    """Map the sentinel year 0 ("unknown") to None."""
    if raw is None or raw == SENTINEL_UNKNOWN_YEAR:
        return None
    return raw


def clean_year_text(raw: str | None) -> int | None:
    """Parse a free-text year like '1842'. Anything but plain digits is None.

    Values too large for the INTEGER column are None as well.
    """
    if raw is None:
        return None
    text = raw.strip(" ")
    if not _YEAR_TEXT_RE.fullmatch(text):
        return None
    year = int(text)
    if year > YEAR_MAX:
        return None
    return year


def known_lifespan(birth: int | None, death: int | None) -> int | None:
    """Lifespan in years, or None when either year is unknown or death <= birth.

    A zero or negative lifespan is a data-quality problem, so it is excluded
    rather than reported.
    """
    if birth is None or death is None:
        return None
    lifespan = death - birth
    if lifespan <= 0:
        return None
    return lifespan


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class ArtworkRecord:
    id: int
    accession_number: str | None = None
    artist_id: int | None = None
    title: str | None = None
    width: str | None = None
    height: str | None = None
    depth: str | None = None
    year: str | None = None
    acquisition_year: int | None = None
    cleaned_width_mm: Decimal | None = None
    cleaned_height_mm: Decimal | None = None
    cleaned_depth_mm: Decimal | None = None
    cleaned_year: int | None = None


@dataclass(slots=True)
class ArtistRecord:
    id: int
    name: str | None = None
    gender: str | None = None
    year_of_birth: int | None = None
    year_of_death: int | None = None
    place_of_birth: str | None = None
    place_of_death: str | None = None
    nationalities: str | None = None
    cleaned_birth_year: int | None = None
    cleaned_death_year: int | None = None

    @property
    def lifespan(self) -> int | None:
        return known_lifespan(self.cleaned_birth_year, self.cleaned_death_year)


def _fill(current, compute, raw):
    # Only null derived values are computed; a populated value is final.
    return current if current is not None else compute(raw)


def clean_artwork(rec: ArtworkRecord) -> ArtworkRecord:
    return replace(
        rec,
        cleaned_width_mm=_fill(rec.cleaned_width_mm, clean_dimension, rec.width),
        cleaned_height_mm=_fill(rec.cleaned_height_mm, clean_dimension, rec.height),
        cleaned_depth_mm=_fill(rec.cleaned_depth_mm, clean_dimension, rec.depth),
        cleaned_year=_fill(rec.cleaned_year, clean_year_text, rec.year),
    )


def clean_artist(rec: ArtistRecord) -> ArtistRecord:
    return replace(
        rec,
        cleaned_birth_year=_fill(rec.cleaned_birth_year, clean_sentinel_year, rec.year_of_birth),
        cleaned_death_year=_fill(rec.cleaned_death_year, clean_sentinel_year, rec.year_of_death),
    )


def clean_records(
    records: Iterable[ArtworkRecord | ArtistRecord],
) -> Iterator[ArtworkRecord | ArtistRecord]:
    """Clean a mixed stream of artwork and artist records."""
    for rec in records:
        if isinstance(rec, ArtworkRecord):
            yield clean_artwork(rec)
        elif isinstance(rec, ArtistRecord):
            yield clean_artist(rec)
        else:
            raise TypeError(f"cannot clean {type(rec).__name__}")

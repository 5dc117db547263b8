import math
import re
from typing import NamedTuple

from unemployed_listening.config import EARLIEST_YEAR, TRACK_YEAR_DELIMITER


class TrackYearFact(NamedTuple):
    track_id: str
    year: int


class TrackGenreFact(NamedTuple):
    track_id: str
    genre: str


class JoinedYearGenre(NamedTuple):
    year: int
    genre: str


class GenreYearCount(NamedTuple):
    year: int
    genre: str
    count: int


class UnemploymentRate(NamedTuple):
    year: int
    rate: float


class EnrichedRecord(NamedTuple):
    year: int
    genre: str
    count: int
    rate: float


class CorrelationResult(NamedTuple):
    genre: str
    r: float
    sample_size: int
    mean_rate_delta: float
    mean_count_delta: float


# Plain ASCII numbers only: no digit separators, no nan or inf
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+", re.ASCII)
DECIMAL_PATTERN = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?", re.ASCII)


def parse_int(text):
    if not INTEGER_PATTERN.fullmatch(text):
        raise ValueError(f"not an integer: {text!r}")
    return int(text)


def parse_float(text):
    if not DECIMAL_PATTERN.fullmatch(text):
        raise ValueError(f"not a decimal number: {text!r}")
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"number out of range: {text!r}")
    return value


# Source parsers: every parser returns None for a line that has to be dropped

def parse_track_year(line, earliest_year=EARLIEST_YEAR):
    line = line.strip()
    if not line:
        return None

    # Expected format: YEAR<SEP>TRACKID<SEP>ARTIST<SEP>SONG (trailing fields ignored)
    parts = line.split(TRACK_YEAR_DELIMITER)
    if len(parts) < 2:
        return None

    try:
        year = parse_int(parts[0].strip())
    except ValueError:
        return None

    track_id = parts[1].strip()
    if not track_id or year < earliest_year:
        return None
    return TrackYearFact(track_id, year)


def parse_track_genre(line):
    line = line.strip()
    if not line or line.startswith("#"):
        return None

    parts = line.split("\t")
    if len(parts) < 2:
        return None

    track_id = parts[0].strip()
    genre = parts[1].strip()
    if not track_id or not genre:
        return None
    return TrackGenreFact(track_id, genre)


def parse_unemployment_row(line):
    """
    Parse a `year,month1,...,month12` row into its annual average.

    Only the non-empty month fields take part in the average, so a partial year
    is averaged over the months it actually reports.
    """
    line = line.strip()
    if not line or line.startswith("#"):
        return None

    parts = line.split(",")
    if len(parts) < 13:
        return None

    try:
        year = parse_int(parts[0].strip())
        months = [parse_float(value) for value in (p.strip() for p in parts[1:13]) if value]
    except ValueError:
        return None

    if not months:
        return None
    return UnemploymentRate(year, sum(months) / len(months))


# Intermediate stage-to-stage formats

def format_joined(row):
    return f"{row.year}\t{row.genre}"


def format_count(row):
    return f"{row.year}\t{row.genre}\t{row.count}"


def format_enriched(row):
    # repr keeps the shortest float text that reads back to the same value
    return f"{row.year}\t{row.genre}\t{row.count}\t{row.rate!r}"


def _split_fields(line, expected):
    parts = line.strip().split("\t")
    if len(parts) < expected:
        return None
    parts = [p.strip() for p in parts[:expected]]
    if not all(parts):
        return None
    return parts


def parse_joined_line(line):
    parts = _split_fields(line, 2)
    if parts is None:
        return None
    try:
        return JoinedYearGenre(parse_int(parts[0]), parts[1])
    except ValueError:
        return None


def parse_count_line(line):
    parts = _split_fields(line, 3)
    if parts is None:
        return None
    try:
        return GenreYearCount(parse_int(parts[0]), parts[1], parse_int(parts[2]))
    except ValueError:
        return None


def parse_enriched_line(line):
    parts = _split_fields(line, 4)
    if parts is None:
        return None
    try:
        return EnrichedRecord(parse_int(parts[0]), parts[1], parse_int(parts[2]), parse_float(parts[3]))
    except ValueError:
        return None

from unemployed_listening.config import EARLIEST_YEAR
from unemployed_listening.records import JoinedYearGenre, parse_track_genre, parse_track_year

# Source tags carried alongside each value through the shuffle
YEAR_TAG = "YEAR"
GENRE_TAG = "GENRE"


def tag_track_years(lines, earliest_year=EARLIEST_YEAR):
    # (trackId, ("YEAR", year)) for every well-formed track-year line
    return lines.map(lambda line: parse_track_year(line, earliest_year)) \
        .filter(lambda fact: fact is not None) \
        .map(lambda fact: (fact.track_id, (YEAR_TAG, fact.year)))


def tag_track_genres(lines):
    # (trackId, ("GENRE", genre)) for every well-formed genre line
    return lines.map(parse_track_genre) \
        .filter(lambda fact: fact is not None) \
        .map(lambda fact: (fact.track_id, (GENRE_TAG, fact.genre)))


def join_tagged_values(tagged_values):
    """
    Reconcile every tagged value seen for one track.

    Emits the full cross product of the track's years and genres. A track seen
    on one side only yields nothing (inner join), and repeated values are kept,
    so a track with two years and three genres yields six rows.
    """
    years = []
    genres = []
    for tag, value in tagged_values:
        if tag == YEAR_TAG:
            years.append(value)
        elif tag == GENRE_TAG:
            genres.append(value)

    if not years or not genres:
        return []

    return [JoinedYearGenre(year, genre) for year in years for genre in genres]


def join_track_genres(track_lines, genre_lines, earliest_year=EARLIEST_YEAR, num_partitions=None):
    """Stage 1: reduce-side join of the track-year and genre sources by track id."""
    tagged = tag_track_years(track_lines, earliest_year).union(tag_track_genres(genre_lines))

    # All values sharing a track id land on the same partition before joining
    return tagged.groupByKey(num_partitions).flatMap(lambda kv: join_tagged_values(kv[1]))

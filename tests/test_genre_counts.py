"""
Tests for the (year, genre) count aggregation (Stage 2).
"""

import random

import pytest

from unemployed_listening.genre_counts import count_genre_years, precombine_partition
from unemployed_listening.records import GenreYearCount, JoinedYearGenre


def _rows():
    rows = (
        [JoinedYearGenre(1990, "Rock")] * 5
        + [JoinedYearGenre(1990, "Pop")] * 2
        + [JoinedYearGenre(1991, "Rock")] * 3
        + [JoinedYearGenre(1992, "Jazz")]
    )
    random.Random(7).shuffle(rows)
    return rows


EXPECTED = {
    GenreYearCount(1990, "Rock", 5),
    GenreYearCount(1990, "Pop", 2),
    GenreYearCount(1991, "Rock", 3),
    GenreYearCount(1992, "Jazz", 1),
}


def test_precombine_partition():
    partial = dict(precombine_partition(iter(_rows())))
    assert partial == {(1990, "Rock"): 5, (1990, "Pop"): 2, (1991, "Rock"): 3, (1992, "Jazz"): 1}


def test_precombine_empty_partition():
    assert list(precombine_partition(iter([]))) == []


@pytest.mark.parametrize("pre_combine", [True, False])
def test_counts(sc, pre_combine):
    counts = count_genre_years(sc.parallelize(_rows(), 3), pre_combine=pre_combine).collect()
    assert len(counts) == len(EXPECTED)
    assert set(counts) == EXPECTED


@pytest.mark.parametrize("slices", [1, 2, 5, 11])
@pytest.mark.parametrize("num_partitions", [None, 1, 4])
def test_counts_do_not_depend_on_partitioning(sc, slices, num_partitions):
    combined = count_genre_years(sc.parallelize(_rows(), slices), True, num_partitions).collect()
    plain = count_genre_years(sc.parallelize(list(reversed(_rows())), slices), False, num_partitions).collect()
    assert set(combined) == set(plain) == EXPECTED

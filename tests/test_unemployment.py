"""
Tests for the unemployment reference table and the broadcast join (Stage 3).
"""

import pytest

from unemployed_listening.errors import ReferenceDataError
from unemployed_listening.records import EnrichedRecord, GenreYearCount
from unemployed_listening.unemployment import UnemploymentTable
from unemployed_listening.unemployment_join import enrich_partition, join_unemployment


class TestUnemploymentTable:
    def test_load_averages_each_year(self, unemployment_lines):
        table = UnemploymentTable.load(unemployment_lines)
        assert table.years == [1990, 1991, 1992]
        assert table.get(1990) == pytest.approx(5.0)
        assert table.get(1992) == pytest.approx(8.0)

    def test_partial_row(self):
        table = UnemploymentTable.load(["1955,3.0,,5.0,,,,,,,,,"])
        assert table.get(1955) == pytest.approx(4.0)

    def test_skips_bad_rows(self):
        table = UnemploymentTable.load([
            "# header",
            "1960,5.0",
            "1961,,,,,,,,,,,,",
            "1962,4,4,4,4,4,4,4,4,4,4,4,4",
        ])
        assert table.years == [1962]
        assert 1960 not in table
        assert table.get(1961) is None

    def test_non_finite_rates_never_enter_the_table(self):
        table = UnemploymentTable.load([
            "1990,nan,5,5,5,5,5,5,5,5,5,5,5",
            "1991,inf,,,,,,,,,,,",
            "1992,4,4,4,4,4,4,4,4,4,4,4,4",
        ])
        assert table.years == [1992]

    def test_last_row_wins_for_repeated_year(self):
        table = UnemploymentTable.load([
            "1970,1,1,1,1,1,1,1,1,1,1,1,1",
            "1970,2,2,2,2,2,2,2,2,2,2,2,2",
        ])
        assert table.get(1970) == pytest.approx(2.0)

    def test_as_dict_is_a_copy(self, unemployment_lines):
        table = UnemploymentTable.load(unemployment_lines)
        rates = table.as_dict()
        rates[2050] = 1.0
        assert 2050 not in table

    def test_from_path(self, tmp_path, unemployment_lines):
        path = tmp_path / "unemployment.txt"
        path.write_text("\n".join(unemployment_lines) + "\n")
        table = UnemploymentTable.from_path(str(path))
        assert len(table) == 3

    def test_from_missing_path(self, tmp_path):
        with pytest.raises(ReferenceDataError):
            UnemploymentTable.from_path(str(tmp_path / "missing.txt"))

    def test_from_path_without_usable_rows(self, tmp_path):
        path = tmp_path / "unemployment.txt"
        path.write_text("# nothing here\n1990,1,2\n")
        with pytest.raises(ReferenceDataError):
            UnemploymentTable.from_path(str(path))


class TestBroadcastJoin:
    def test_enrich_partition_drops_unknown_years(self):
        rows = [GenreYearCount(1990, "Rock", 2), GenreYearCount(2000, "Rock", 5)]
        assert list(enrich_partition(rows, {1990: 5.0})) == [EnrichedRecord(1990, "Rock", 2, 5.0)]

    def test_join_unemployment(self, sc, unemployment_lines):
        table = UnemploymentTable.load(unemployment_lines)
        counts = sc.parallelize([
            GenreYearCount(1990, "Rock", 2),
            GenreYearCount(1991, "Rock", 1),
            GenreYearCount(1992, "Pop", 7),
            GenreYearCount(1985, "Pop", 3),
            GenreYearCount(2020, "Jazz", 9),
        ], 3)

        enriched = join_unemployment(counts, table).collect()

        assert {record.year for record in enriched} <= set(table.years)
        assert sorted(enriched) == [
            EnrichedRecord(1990, "Rock", 2, table.get(1990)),
            EnrichedRecord(1991, "Rock", 1, table.get(1991)),
            EnrichedRecord(1992, "Pop", 7, table.get(1992)),
        ]

    def test_rate_is_average_of_present_months(self, sc):
        table = UnemploymentTable.load(["1955,3.0,,5.0,,,,,,,,,"])
        counts = sc.parallelize([GenreYearCount(1955, "Jazz", 4)])
        [record] = join_unemployment(counts, table).collect()
        assert record.rate == pytest.approx(4.0)

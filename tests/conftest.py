"""
Pytest fixtures shared by the test suite.

A single local SparkContext is created for the whole session; starting the JVM
is by far the slowest part of every Spark test.
"""

import os
import sys

import pytest

# Workers must run the same interpreter as the driver
os.environ.setdefault("PYSPARK_PYTHON", sys.executable)
os.environ.setdefault("PYSPARK_DRIVER_PYTHON", sys.executable)

from unemployed_listening.session import create_spark_context  # noqa: E402


@pytest.fixture(scope="session")
def sc():
    context = create_spark_context(app_name="UnemployedListeningTests", master="local[2]")
    context.setLogLevel("ERROR")
    yield context
    context.stop()


@pytest.fixture
def track_lines():
    return [
        "1990<SEP>TRA<SEP>Artist A<SEP>Song A",
        "1991<SEP>TRB<SEP>Artist B<SEP>Song B",
        "1992<SEP>TRC<SEP>Artist C<SEP>Song C",
        "1992<SEP>TRD<SEP>Artist D<SEP>Song D",
        "1947<SEP>TROLD<SEP>Too Early<SEP>Song",
        "abcd<SEP>TRBAD<SEP>Bad Year<SEP>Song",
        "1993<SEP>TRNOGENRE<SEP>Artist<SEP>Song",
        "",
    ]


@pytest.fixture
def genre_lines():
    return [
        "# trackId\tgenre",
        "TRA\tRock",
        "TRA\tPop",
        "TRB\tRock",
        "TRC\tRock",
        "TRD\tRock",
        "TROLD\tJazz",
        "TRBAD\tJazz",
        "TRNOYEAR\tBlues",
        "",
    ]


@pytest.fixture
def unemployment_lines():
    return [
        "1990,5.0,5.0,5.0,5.0,5.0,5.0,5.0,5.0,5.0,5.0,5.0,5.0",
        "1991,6.0,6.0,6.0,6.0,6.0,6.0,6.0,6.0,6.0,6.0,6.0,6.0",
        "1992,8.0,,,,,,,,,,,",
    ]

import logging
import os
import shutil

from unemployed_listening.config import (
    EARLIEST_YEAR,
    FINAL_DIR,
    GENRE_COUNTS_DIR,
    NUM_PARTITIONS,
    PRE_COMBINE,
    TRACK_GENRES_DIR,
)
from unemployed_listening.correlation import compute_correlations
from unemployed_listening.errors import PipelineError
from unemployed_listening.genre_counts import count_genre_years
from unemployed_listening.records import (
    format_count,
    format_enriched,
    format_joined,
    parse_count_line,
    parse_enriched_line,
    parse_joined_line,
)
from unemployed_listening.track_genre_join import join_track_genres
from unemployed_listening.unemployment import UnemploymentTable
from unemployed_listening.unemployment_join import join_unemployment

logger = logging.getLogger(__name__)

STAGE_1 = "Stage 1 (track/genre join)"
STAGE_2 = "Stage 2 (genre counts per year)"
STAGE_3 = "Stage 3 (unemployment join)"
CORRELATION = "Correlation analysis"


def run_stage(stage, action):
    logger.info("Starting %s", stage)
    try:
        result = action()
    except Exception as exc:
        raise PipelineError(stage, exc) from exc
    logger.info("%s completed", stage)
    return result


def clear_output(path):
    # Each stage owns its output location, so reruns start from scratch
    if os.path.isdir(path):
        shutil.rmtree(path)
    elif os.path.exists(path):
        os.remove(path)


def save_text(rdd, formatter, path):
    clear_output(path)
    rdd.map(formatter).saveAsTextFile(path)
    return path


def read_records(sc, path, parser):
    return sc.textFile(path).map(parser).filter(lambda record: record is not None)


def materialize(rdd):
    # Force the whole stage to complete before the next one reads it
    rdd = rdd.cache()
    logger.info("Materialized %d records", rdd.count())
    return rdd


def build_trend_table(track_lines, genre_lines, table,
                      earliest_year=EARLIEST_YEAR, pre_combine=PRE_COMBINE, num_partitions=NUM_PARTITIONS):
    """
    Run the three stages in memory and return the EnrichedRecord RDD.

    Every intermediate result is cached and counted before the next stage
    starts, which keeps the same barrier as the file-based pipeline without a
    round trip through storage.
    """
    joined = run_stage(STAGE_1, lambda: materialize(
        join_track_genres(track_lines, genre_lines, earliest_year, num_partitions)))
    counts = run_stage(STAGE_2, lambda: materialize(
        count_genre_years(joined, pre_combine, num_partitions)))
    return run_stage(STAGE_3, lambda: materialize(join_unemployment(counts, table)))


def run_pipeline(sc, track_path, genre_path, unemployment_path, output_dir,
                 earliest_year=EARLIEST_YEAR, pre_combine=PRE_COMBINE, num_partitions=NUM_PARTITIONS):
    """
    Full file-based pipeline: each stage writes its output under output_dir and
    the next stage reads it back. Returns the directory holding the final
    `year\\tgenre\\tcount\\trate` table.
    """
    track_genres_path = os.path.join(output_dir, TRACK_GENRES_DIR)
    genre_counts_path = os.path.join(output_dir, GENRE_COUNTS_DIR)
    final_path = os.path.join(output_dir, FINAL_DIR)

    run_stage(STAGE_1, lambda: save_text(
        join_track_genres(sc.textFile(track_path), sc.textFile(genre_path), earliest_year, num_partitions),
        format_joined,
        track_genres_path,
    ))

    run_stage(STAGE_2, lambda: save_text(
        count_genre_years(read_records(sc, track_genres_path, parse_joined_line), pre_combine, num_partitions),
        format_count,
        genre_counts_path,
    ))

    def stage_3():
        table = UnemploymentTable.from_path(unemployment_path)
        counts = read_records(sc, genre_counts_path, parse_count_line)
        return save_text(join_unemployment(counts, table), format_enriched, final_path)

    run_stage(STAGE_3, stage_3)

    logger.info("All stages completed. Output written to: %s", final_path)
    return final_path


def analyze_trend_table(sc, input_dir, num_partitions=NUM_PARTITIONS):
    """Standalone correlation pass over a final `year\\tgenre\\tcount\\trate` table."""
    def correlate():
        enriched = read_records(sc, input_dir, parse_enriched_line)
        return compute_correlations(enriched, num_partitions)

    return run_stage(CORRELATION, correlate)

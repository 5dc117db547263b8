import logging
from operator import add

import numpy as np
import pandas as pd

from unemployed_listening.config import TOP_N
from unemployed_listening.errors import DataQualityError
from unemployed_listening.records import CorrelationResult

logger = logging.getLogger(__name__)

RESULT_COLUMNS = [
    "Genre",
    "Pearson_Correlation",
    "Data_Points",
    "Avg_Unemployment_Delta",
    "Avg_Count_Delta",
]


def pearson(x, y):
    """
    Pearson correlation coefficient of two equal-length series.

    Uses the sum-based formula
        r = (n*Sxy - Sx*Sy) / sqrt((n*Sxx - Sx^2) * (n*Syy - Sy^2))
    and defines r = 0 when either series has no variance.
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    n = len(x)
    if n == 0 or n != len(y):
        return 0.0

    sum_x, sum_y = x.sum(), y.sum()
    numerator = n * np.dot(x, y) - sum_x * sum_y
    variance_product = (n * np.dot(x, x) - sum_x ** 2) * (n * np.dot(y, y) - sum_y ** 2)

    # Rounding can leave a zero-variance product slightly negative
    if not np.isfinite(variance_product) or variance_product <= 0:
        return 0.0

    r = numerator / np.sqrt(variance_product)
    return float(np.clip(r, -1.0, 1.0))


def year_over_year_deltas(series):
    """Rate and count deltas between consecutive years of a year-sorted series."""
    rates = np.array([record.rate for record in series], dtype=np.float64)
    counts = np.array([record.count for record in series], dtype=np.float64)
    return np.diff(rates), np.diff(counts)


def correlate_genre(genre, records):
    """
    Correlation result for one genre's EnrichedRecords, or None when the genre
    has fewer than three years (fewer than two deltas).
    """
    series = sorted(records, key=lambda record: record.year)

    for prev, curr in zip(series, series[1:]):
        if prev.year == curr.year:
            raise DataQualityError(f"genre {genre!r} has more than one record for year {curr.year}")

    rate_deltas, count_deltas = year_over_year_deltas(series)
    if len(rate_deltas) < 2:
        return None

    return CorrelationResult(
        genre=genre,
        r=pearson(rate_deltas, count_deltas),
        sample_size=len(rate_deltas),
        mean_rate_delta=float(rate_deltas.mean()),
        mean_count_delta=float(count_deltas.mean()),
    )


def rank_results(results):
    # Strongest correlations first; equal |r| falls back to genre name
    return sorted(results, key=lambda result: (-abs(result.r), result.genre))


def find_duplicate_years(enriched):
    return enriched.map(lambda record: ((record.genre, record.year), 1)) \
        .reduceByKey(add) \
        .filter(lambda kv: kv[1] > 1) \
        .keys() \
        .take(1)


def compute_correlations(enriched, num_partitions=None):
    """
    Ranked CorrelationResults for an RDD of EnrichedRecords.

    Records are grouped by genre so that each genre's whole time series is
    correlated on a single worker; only the per-genre results come back to the
    driver for ranking.
    """
    duplicates = find_duplicate_years(enriched)
    if duplicates:
        genre, year = duplicates[0]
        raise DataQualityError(f"genre {genre!r} has more than one record for year {year}")

    results = enriched.map(lambda record: (record.genre, record)) \
        .groupByKey(num_partitions) \
        .map(lambda kv: correlate_genre(kv[0], kv[1])) \
        .filter(lambda result: result is not None) \
        .collect()

    logger.info("Computed correlations for %d genres", len(results))
    return rank_results(results)


def classify(r):
    if r > 0.5:
        return "strong positive"
    if r > 0.2:
        return "weak positive"
    if r < -0.5:
        return "strong negative"
    if r < -0.2:
        return "weak negative"
    return "negligible"


def results_frame(results):
    """Results as a DataFrame of display strings, in the order given."""
    rows = [
        [
            result.genre,
            f"{result.r:.4f}",
            str(result.sample_size),
            f"{result.mean_rate_delta:.4f}",
            f"{result.mean_count_delta:.2f}",
        ]
        for result in results
    ]
    return pd.DataFrame(rows, columns=RESULT_COLUMNS)


def write_results(results, path):
    # Genres are written as-is; the parsers never let a tab or newline into one
    frame = results_frame(results)
    with open(path, "w", encoding="utf-8") as f:
        f.write("\t".join(frame.columns) + "\n")
        for row in frame.itertuples(index=False):
            f.write("\t".join(row) + "\n")
    logger.info("Results written to %s", path)


def summary_lines(results, top_n=TOP_N):
    lines = ["", "=== Correlation Analysis Summary ===", ""]

    if not results:
        lines.append("No results to display.")
        return lines

    lines.append(f"Top {top_n} Strongest Correlations (by absolute value):")
    lines.append(f"{'Genre':<20} {'Correlation':>12} {'Data Points':>12}")
    lines.append("-" * 50)

    for result in results[:top_n]:
        lines.append(
            f"{result.genre:<20} {result.r:>12.4f} {result.sample_size:>12d} ({classify(result.r)})"
        )

    lines.append("")
    lines.append("Interpretation:")
    lines.append("- Positive correlation: Genre count increases when unemployment increases")
    lines.append("- Negative correlation: Genre count decreases when unemployment increases")
    lines.append("- Correlation near 0: No linear relationship between unemployment and genre count changes")
    return lines

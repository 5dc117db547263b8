from collections import Counter
from operator import add

from unemployed_listening.records import GenreYearCount


# Partial counts for one partition: each distinct (year, genre) is emitted once
# with its local total instead of once per row.
def precombine_partition(rows):
    partial = Counter((row.year, row.genre) for row in rows)
    return iter(partial.items())


def count_genre_years(joined, pre_combine=True, num_partitions=None):
    """
    Stage 2: count JoinedYearGenre rows per (year, genre).

    Counting is associative and commutative, so summing partial counts per
    partition before the shuffle only reduces the data moved between workers;
    the totals are the same with and without it.
    """
    if pre_combine:
        counts = joined.mapPartitions(precombine_partition).reduceByKey(add, num_partitions)
    else:
        counts = joined.map(lambda row: ((row.year, row.genre), 1)) \
            .groupByKey(num_partitions) \
            .mapValues(sum)

    return counts.map(lambda kv: GenreYearCount(kv[0][0], kv[0][1], kv[1]))

from unemployed_listening.records import EnrichedRecord


# Enrich one partition of (year, genre, count) rows with the broadcast rates.
# Years missing from the reference table are dropped, never interpolated.
def enrich_partition(rows, rates):
    for row in rows:
        rate = rates.get(row.year)
        if rate is None:
            continue
        yield EnrichedRecord(row.year, row.genre, row.count, rate)


def join_unemployment(counts, table):
    """
    Stage 3: map-only join of GenreYearCount rows against the unemployment table.

    The table is shipped once to every executor as a broadcast variable, so no
    shuffle is needed and partitions are enriched independently.
    """
    broadcast_rates = counts.context.broadcast(table.as_dict())
    return counts.mapPartitions(lambda rows: enrich_partition(rows, broadcast_rates.value))

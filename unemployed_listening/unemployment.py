import logging
from types import MappingProxyType

from unemployed_listening.errors import ReferenceDataError
from unemployed_listening.records import parse_unemployment_row

logger = logging.getLogger(__name__)


class UnemploymentTable:
    """
    Annual unemployment rates keyed by year.

    The table is small enough to live in memory on every worker, which is what
    makes the map-side join in Stage 3 possible. It is built once and never
    mutated afterwards, so workers can read it concurrently without locking.
    """

    def __init__(self, rates):
        self._rates = MappingProxyType(dict(rates))

    @classmethod
    def load(cls, lines):
        rates = {}
        for line in lines:
            row = parse_unemployment_row(line)
            if row is None:
                continue
            # A year reported twice keeps its last valid row
            rates[row.year] = row.rate
        return cls(rates)

    @classmethod
    def from_path(cls, path):
        try:
            with open(path, "r", encoding="utf-8") as f:
                table = cls.load(f)
        except OSError as exc:
            raise ReferenceDataError(f"cannot read unemployment data from {path}: {exc}") from exc

        if not table:
            raise ReferenceDataError(f"no usable unemployment rows in {path}")

        logger.info("Loaded unemployment rates for %d years from %s", len(table), path)
        return table

    def get(self, year):
        return self._rates.get(year)

    def as_dict(self):
        return dict(self._rates)

    @property
    def years(self):
        return sorted(self._rates)

    def __contains__(self, year):
        return year in self._rates

    def __len__(self):
        return len(self._rates)

    def __repr__(self):
        return f"UnemploymentTable({len(self)} years)"

"""Quote data types."""

from dataclasses import dataclass
from enum import Enum


class MetricName(str, Enum):
    """Identifiers of the exported quote gauges, in emission order."""

    CLOSE = "close"
    OPEN = "open"
    HIGH = "high"
    LOW = "low"
    VOLUME = "volume"


@dataclass(frozen=True)
class QuoteRecord:
    """One fully parsed quote row.

    ``date`` is passed through from the upstream payload untouched. Instances
    only exist when every numeric field parsed successfully.
    """

    date: str
    close: float
    open: float
    high: float
    low: float
    volume: float

    def value_of(self, name: MetricName) -> float:
        """Return the value backing the gauge ``name``."""
        return getattr(self, name.value)

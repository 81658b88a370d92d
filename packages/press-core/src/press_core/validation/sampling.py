"""Deterministic sample selection.

The sample is the first N records in identifier order, so re-running a
validation against an unchanged source always checks the same records.
"""

from typing import Sequence

from press_core.errors import MalformedRecord
from press_core.models.dataset import RecordId, SampleRecord
from press_core.models.settings import DEFAULT_SAMPLE_COUNT


def _order_key(record: SampleRecord) -> tuple[int, int | str]:
    # Integers ascending, then strings, then records with no id at all.
    if record.id is None:
        return (2, "")
    if isinstance(record.id, int):
        return (0, record.id)
    return (1, record.id)


class SampleStrategy:
    """Picks which source records get a field-level comparison."""

    def __init__(self, default_count: int = DEFAULT_SAMPLE_COUNT):
        if default_count < 0:
            raise ValueError(f"default_count must be >= 0, got {default_count}")
        self.default_count = default_count

    def select_sample(self, population: Sequence[SampleRecord], sample_count: int | None = None) -> list[SampleRecord]:
        count = self.default_count if sample_count is None else sample_count
        if count < 0:
            raise ValueError(f"sample_count must be >= 0, got {count}")
        ordered = sorted(population, key=_order_key)
        return ordered[:count]

    def extract_ids(self, samples: Sequence[SampleRecord]) -> list[RecordId]:
        ids: list[RecordId] = []
        for position, record in enumerate(samples):
            if record.id is None:
                raise MalformedRecord(position, record.id_field)
            ids.append(record.id)
        return ids

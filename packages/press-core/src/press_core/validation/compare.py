"""Value and count comparison between source and destination.

The source is ground truth throughout: destination data that the source
does not mention is never held against it.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from press_core.models.dataset import META_FIELD, MISSING, SampleRecord
from press_core.models.report import CountDiff


def _strict_equal(left: Any, right: Any) -> bool:
    # No coercion: "5" != 5 and 1 != True.
    return type(left) is type(right) and left == right


class FieldComparator:
    """Compares one field of a source record against the destination record."""

    def __init__(self, meta_field: str = META_FIELD):
        self.meta_field = meta_field

    def equal(self, key: str, source_record: SampleRecord, destination_record: SampleRecord | None) -> bool:
        if destination_record is None:
            return False

        source_value = source_record.get(key)
        destination_value = destination_record.get(key)

        if key == self.meta_field:
            if destination_value is MISSING:
                return source_value is MISSING or not source_value
            if source_value is MISSING:
                return True
            return self.equal_maps(source_value, destination_value)

        if destination_value is MISSING:
            return False
        return _strict_equal(source_value, destination_value)

    @staticmethod
    def equal_maps(
        source_map: Mapping[str, Sequence[str]],
        destination_map: Mapping[str, Sequence[str]] | None,
    ) -> bool:
        """Every source key must exist in the destination with the same values, in order."""
        if destination_map is None:
            return not source_map
        for key, values in source_map.items():
            if key not in destination_map:
                return False
            if list(values) != list(destination_map[key]):
                return False
        return True


class CountComparator:
    """Diffs per-group, per-status counts, walking the source keys only."""

    def compare(
        self,
        source_counts: Mapping[str, Mapping[str, int]],
        destination_counts: Mapping[str, Mapping[str, int]] | None,
    ) -> dict[str, dict[str, CountDiff]]:
        destination_counts = destination_counts or {}
        comparison: dict[str, dict[str, CountDiff]] = {}
        for group, statuses in source_counts.items():
            destination_statuses = destination_counts.get(group) or {}
            for status, source_count in statuses.items():
                destination_count = destination_statuses.get(status, 0)
                comparison.setdefault(group, {})[status] = CountDiff(
                    source=int(source_count),
                    destination=int(destination_count),
                )
        return comparison

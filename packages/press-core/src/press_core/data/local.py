"""
Local content reader.

Reads an exported folder of content records (``posts.json``, ``terms.yaml``,
``users.json`` ...) and turns it into a ``Dataset``: counts grouped by
content type and status, plus a deterministic sample of full records.
Never touches the network.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from pydantic import TypeAdapter

from press_core.codebase.log import get_logger, trace_stage
from press_core.data.loader import find_data_file, load_yaml_typed
from press_core.models.dataset import Dataset, SampleRecord
from press_core.validation.sampling import SampleStrategy

_logger = get_logger("data.local")

TOTAL_KEY = "total"
UNKNOWN_KEY = "unknown"


@dataclass(frozen=True)
class ContentKind:
    """How one content type is laid out in an export."""

    name: str
    stem: str
    id_field: str = "ID"
    meta_field: str = "meta"
    group_field: str | None = None
    status_field: str | None = None
    default_group: str | None = None
    relations_field: str | None = None

    def group_of(self, raw: Mapping[str, Any]) -> str:
        if self.group_field is None:
            return self.default_group or self.name
        value = raw.get(self.group_field)
        return str(value) if value not in (None, "") else UNKNOWN_KEY

    def status_of(self, raw: Mapping[str, Any]) -> str:
        if self.status_field is None:
            return TOTAL_KEY
        value = raw.get(self.status_field)
        return str(value) if value not in (None, "") else UNKNOWN_KEY


POSTS = ContentKind(
    name="posts",
    stem="posts",
    group_field="post_type",
    status_field="post_status",
    relations_field="terms",
)
TERMS = ContentKind(name="terms", stem="terms", id_field="term_id", group_field="taxonomy")
USERS = ContentKind(name="users", stem="users", status_field="role", default_group="user")

CONTENT_KINDS = {kind.name: kind for kind in (POSTS, TERMS, USERS)}

_RECORDS = TypeAdapter(list[dict[str, Any]])


class LocalContentReader:
    """Builds the source ``Dataset`` for one content kind from a local export folder."""

    def __init__(self, folder: Path | str, kind: ContentKind, strategy: SampleStrategy | None = None):
        self.folder = Path(folder)
        self.kind = kind
        self.strategy = strategy or SampleStrategy()

    def read_records(self) -> list[dict[str, Any]]:
        path = find_data_file(self.folder, self.kind.stem)
        _logger.debug("reading %s records from %s", self.kind.name, path)
        return load_yaml_typed(path, adapter=_RECORDS)

    @trace_stage
    def get_data(self, sample_count: int | None = None) -> Dataset:
        raw_records = self.read_records()

        tallies: dict[str, Counter] = {}
        population: list[SampleRecord] = []
        relations_by_id: dict[str, Any] = {}
        excluded = {self.kind.relations_field} if self.kind.relations_field else set()

        for raw in raw_records:
            tallies.setdefault(self.kind.group_of(raw), Counter())[self.kind.status_of(raw)] += 1
            record = SampleRecord.from_mapping(
                raw,
                id_field=self.kind.id_field,
                meta_field=self.kind.meta_field,
                exclude=excluded,
            )
            population.append(record)
            if self.kind.relations_field and record.id is not None:
                relations_by_id[str(record.id)] = raw.get(self.kind.relations_field) or {}

        sample = self.strategy.select_sample(population, sample_count)
        relations = {}
        if self.kind.relations_field:
            relations = {str(record.id): relations_by_id.get(str(record.id), {}) for record in sample if record.id is not None}

        counts = {group: dict(sorted(statuses.items())) for group, statuses in sorted(tallies.items())}
        _logger.info(
            "local %s: %d records, %d sampled",
            self.kind.name,
            len(population),
            len(sample),
        )
        return Dataset(counts=counts, sample=sample, relations=relations)

from __future__ import annotations

import abc
import enum
from typing import Any, ClassVar, Mapping, Protocol, Type

from pydantic import ValidationError

from press_core.codebase.log import get_logger, trace_stage
from press_core.errors import RemoteDecodeError, ValidationStateError
from press_core.models.dataset import Dataset, RecordId, SampleRecord
from press_core.models.report import ComparisonData, CountDiff, Report, SampleComparison, ValidationPayload
from press_core.models.settings import ValidationSettings
from press_core.remote.client import RemoteDataClient

from .compare import CountComparator, FieldComparator
from .report import ReportAssembler
from .sampling import SampleStrategy

_logger = get_logger("validation")


class SourceReader(Protocol):
    def get_data(self, sample_count: int | None = None) -> Dataset: ...


class ValidatorState(str, enum.Enum):
    INIT = "init"
    SOURCE_FETCHED = "source_fetched"
    DESTINATION_FETCHED = "destination_fetched"
    COMPARED = "compared"
    REPORTED = "reported"


class ValidatorRegistry:
    """Registry of available content-type validators."""

    def __init__(self) -> None:
        self._by_name: dict[str, Type["Validator"]] = {}

    def register(self, validator_cls: Type["Validator"]) -> Type["Validator"]:
        self._by_name[validator_cls.name.lower()] = validator_cls
        return validator_cls

    def get(self, name: str) -> Type["Validator"] | None:
        return self._by_name.get(name.lower())

    def names(self) -> list[str]:
        return list(self._by_name)

    def all(self) -> dict[str, Type["Validator"]]:
        return dict(self._by_name)


registry = ValidatorRegistry()


class Validator(abc.ABC):
    """Base class for content-type validators.

    Subclasses implement ``fetch_destination_data`` and ``get_comparison_data``;
    the stage methods and the ``validate`` sequence are shared. The destination
    is never queried before the source has been read, because the source sample
    decides which destination records to ask for.
    """

    name: ClassVar[str]
    title: ClassVar[str]
    content_kind: ClassVar[str]
    id_field: ClassVar[str] = "ID"
    meta_field: ClassVar[str] = "meta"
    relations_field: ClassVar[str | None] = None

    def __init__(
        self,
        settings: ValidationSettings,
        reader: SourceReader,
        client: RemoteDataClient,
        *,
        strategy: SampleStrategy | None = None,
        assembler: ReportAssembler | None = None,
    ) -> None:
        self.settings = settings
        self.reader = reader
        self.client = client
        self.strategy = strategy or SampleStrategy()
        self.field_comparator = FieldComparator(meta_field=self.meta_field)
        self.count_comparator = CountComparator()
        self.assembler = assembler or ReportAssembler()
        self.source_data: Dataset | None = None
        self.state = ValidatorState.INIT

    # -- shared orchestration -------------------------------------------------

    def validate(self) -> ValidationPayload:
        self.source_data = None
        self.state = ValidatorState.INIT

        source = self.get_source_data()
        destination = self.get_destination_data()
        comparison = self.get_comparison_data(source, destination)
        self.state = ValidatorState.COMPARED

        return ValidationPayload(
            validator=self.name,
            source=source,
            destination=destination,
            comparison=comparison,
        )

    def report(self) -> Report:
        payload = self.validate()
        report = self.assembler.assemble(payload.comparison, title=self.title)
        self.state = ValidatorState.REPORTED
        return report

    # -- stages ---------------------------------------------------------------

    @trace_stage
    def get_source_data(self) -> Dataset:
        self.source_data = self.reader.get_data(self.settings.sample_count)
        self.state = ValidatorState.SOURCE_FETCHED
        _logger.debug(
            "%s source: %d groups, %d sampled",
            self.name,
            len(self.source_data.counts),
            len(self.source_data.sample),
        )
        return self.source_data

    @trace_stage
    def get_destination_data(self) -> Dataset:
        destination = self.fetch_destination_data()
        self.state = ValidatorState.DESTINATION_FETCHED
        _logger.debug(
            "%s destination: %d groups, %d records",
            self.name,
            len(destination.counts),
            len(destination.sample),
        )
        return destination

    @abc.abstractmethod
    def fetch_destination_data(self) -> Dataset:
        """Query the remote site for the records matching the source sample."""

    @abc.abstractmethod
    def get_comparison_data(self, source: Dataset, destination: Dataset) -> ComparisonData: ...

    # -- helpers for subclasses -----------------------------------------------

    def _require_source(self) -> Dataset:
        if self.source_data is None or self.state is ValidatorState.INIT:
            raise ValidationStateError(f"{self.name}: destination requested before the source was read")
        return self.source_data

    def source_sample_ids(self) -> list[RecordId]:
        """IDs of the source sample; the same IDs are requested from the destination."""
        return self.strategy.extract_ids(self._require_source().sample)

    def fetch(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        _logger.debug("%s fetching %s", self.name, path)
        return self.client.get_remote_data(path, params)

    def decode_counts(self, path: str, raw: Any) -> dict[str, dict[str, int]]:
        try:
            return Dataset(counts=raw or {}).counts
        except ValidationError as e:
            raise RemoteDecodeError(path, f"invalid counts: {e.error_count()} errors") from e

    def decode_sample(self, path: str, raw: Any) -> list[SampleRecord]:
        if raw is None:
            return []
        if isinstance(raw, Mapping):
            items = list(raw.values())
        elif isinstance(raw, list):
            items = raw
        else:
            raise RemoteDecodeError(path, f"expected a list of records, got {type(raw).__name__}")

        records: list[SampleRecord] = []
        for item in items:
            if not isinstance(item, Mapping):
                raise RemoteDecodeError(path, f"expected a record mapping, got {type(item).__name__}")
            try:
                record = SampleRecord.from_mapping(
                    item,
                    id_field=self.id_field,
                    meta_field=self.meta_field,
                    exclude=(self.relations_field,) if self.relations_field else (),
                )
            except ValidationError as e:
                raise RemoteDecodeError(path, f"invalid record: {e.error_count()} errors") from e
            if record.id is None:
                _logger.warning("%s: destination record without '%s' ignored", self.name, self.id_field)
                continue
            records.append(record)
        return records

    def decode_relations(self, path: str, raw: Any) -> dict[str, dict[str, list[str]]]:
        if raw is None:
            return {}
        if isinstance(raw, list):
            pairs = []
            for item in raw:
                if not isinstance(item, Mapping) or self.id_field not in item:
                    raise RemoteDecodeError(path, "relation entries must carry an identifier")
                pairs.append((item[self.id_field], item.get("terms") or {}))
        elif isinstance(raw, Mapping):
            pairs = list(raw.items())
        else:
            raise RemoteDecodeError(path, f"expected relations mapping, got {type(raw).__name__}")
        try:
            return Dataset(relations={str(key): value for key, value in pairs}).relations
        except ValidationError as e:
            raise RemoteDecodeError(path, f"invalid relations: {e.error_count()} errors") from e

    def compare_count(
        self,
        source: Mapping[str, Mapping[str, int]],
        destination: Mapping[str, Mapping[str, int]],
    ) -> dict[str, dict[str, CountDiff]]:
        return self.count_comparator.compare(source, destination)

    def compare_sample(
        self,
        source: list[SampleRecord],
        destination: list[SampleRecord],
    ) -> dict[str, SampleComparison]:
        """Field-by-field table for each source record, aligned by identifier."""
        by_id = {str(record.id): record for record in destination}
        comparison: dict[str, SampleComparison] = {}
        for record in source:
            match = by_id.get(str(record.id))
            fields = {
                key: self.field_comparator.equal(key, record, match)
                for key in record.keys()
                if key != record.id_field
            }
            comparison[str(record.id)] = SampleComparison(
                record_id=record.id,
                id_field=record.id_field,
                fields=fields,
                destination_present=match is not None,
            )
        return comparison

    def compare_relations(
        self,
        source: Mapping[str, Mapping[str, list[str]]],
        destination: Mapping[str, Mapping[str, list[str]]],
    ) -> dict[str, bool]:
        return {
            record_id: self.field_comparator.equal_maps(terms, destination.get(record_id))
            for record_id, terms in source.items()
        }

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .dataset import Dataset, RecordId


class CountDiff(BaseModel):
    """Source vs destination count for one group/status pair."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    source: int
    destination: int

    @computed_field
    @property
    def difference(self) -> int:
        return self.source - self.destination

    @computed_field
    @property
    def matched(self) -> bool:
        return self.source == self.destination

    @property
    def message(self) -> str:
        if self.matched:
            return f"{self.source} vs {self.destination}"
        return f"{self.source} vs {self.destination} (diff {self.difference})"

    def __str__(self) -> str:
        return self.message


class SampleComparison(BaseModel):
    """Per-field pass/fail for one source record checked against the destination."""

    model_config = ConfigDict(extra="ignore")

    record_id: RecordId
    id_field: str = "ID"
    fields: dict[str, bool] = Field(default_factory=dict)
    destination_present: bool = True

    @property
    def matched(self) -> bool:
        return self.destination_present and all(self.fields.values())

    def mismatched_fields(self) -> list[str]:
        return [key for key, ok in self.fields.items() if not ok]

    def as_row(self) -> dict[str, Any]:
        """Row shape with the identifier copied through ahead of the verdicts."""
        row: dict[str, Any] = {self.id_field: self.record_id}
        row.update(self.fields)
        return row


class ComparisonData(BaseModel):
    """Everything ``get_comparison_data`` produces for one validator."""

    model_config = ConfigDict(extra="ignore")

    counts: dict[str, dict[str, CountDiff]] = Field(default_factory=dict)
    samples: dict[str, SampleComparison] = Field(default_factory=dict)
    relations: dict[str, bool] = Field(default_factory=dict)


class ValidationPayload(BaseModel):
    """Full result of ``Validator.validate``."""

    model_config = ConfigDict(extra="ignore")

    validator: str
    source: Dataset
    destination: Dataset
    comparison: ComparisonData


class Report(BaseModel):
    """Section -> row key -> rendered message, ready for display."""

    model_config = ConfigDict(extra="ignore")

    title: str
    sections: dict[str, dict[str, str]] = Field(default_factory=dict)
    summary: dict[str, int] = Field(default_factory=dict)

    @property
    def passed(self) -> bool:
        return self.summary.get("fail", 0) == 0


from .dataset import ID_FIELD, META_FIELD, MISSING, Dataset, RecordId, SampleRecord, Value
from .report import ComparisonData, CountDiff, Report, SampleComparison, ValidationPayload
from .settings import DEFAULT_SAMPLE_COUNT, ValidationSettings

__all__ = [
    "ComparisonData",
    "CountDiff",
    "DEFAULT_SAMPLE_COUNT",
    "Dataset",
    "ID_FIELD",
    "META_FIELD",
    "MISSING",
    "RecordId",
    "Report",
    "SampleComparison",
    "SampleRecord",
    "ValidationPayload",
    "ValidationSettings",
    "Value",
]

from typing import Any, Collection, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

RecordId = int | str
Value = str | int | float | bool | None

ID_FIELD = "ID"
META_FIELD = "meta"


class _Missing:
    """Marker for a field that a record does not carry at all."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


class SampleRecord(BaseModel):
    """A single content record taken from one side of the comparison."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: RecordId | None = None
    fields: dict[str, Value] = Field(default_factory=dict)
    meta: dict[str, list[str]] | None = None
    id_field: str = ID_FIELD
    meta_field: str = META_FIELD

    @field_validator("meta", mode="before")
    @classmethod
    def _normalize_meta(cls, v):
        # Meta is multi-valued; a bare scalar is a single-value list.
        if v is None:
            return None
        if not isinstance(v, Mapping):
            raise ValueError(f"meta must be a mapping, got {type(v).__name__}")
        normalized = {}
        for key, values in v.items():
            if isinstance(values, (list, tuple)):
                normalized[str(key)] = [str(item) for item in values]
            else:
                normalized[str(key)] = [str(values)]
        return normalized

    @classmethod
    def from_mapping(
        cls,
        raw: Mapping[str, Any],
        *,
        id_field: str = ID_FIELD,
        meta_field: str = META_FIELD,
        exclude: Collection[str] = (),
    ) -> "SampleRecord":
        """Build a record from a decoded mapping, splitting out the id and meta fields.

        Keys in ``exclude`` are dropped before validation; the post export
        carries its term map inline, and that map is compared separately.
        """
        skipped = {id_field, meta_field, *exclude}
        fields = {key: value for key, value in raw.items() if key not in skipped}
        return cls(
            id=raw.get(id_field),
            fields=fields,
            meta=raw.get(meta_field),
            id_field=id_field,
            meta_field=meta_field,
        )

    def keys(self) -> list[str]:
        """Field names in comparison order: id first, then fields, then meta."""
        names = []
        if self.id is not None:
            names.append(self.id_field)
        names.extend(self.fields)
        if self.meta is not None:
            names.append(self.meta_field)
        return names

    def get(self, key: str) -> Any:
        if key == self.id_field:
            return self.id if self.id is not None else MISSING
        if key == self.meta_field:
            return self.meta if self.meta is not None else MISSING
        return self.fields.get(key, MISSING)


class Dataset(BaseModel):
    """Counts plus an ordered sample, as produced independently by each side."""

    model_config = ConfigDict(extra="ignore")

    counts: dict[str, dict[str, int]] = Field(default_factory=dict)
    sample: list[SampleRecord] = Field(default_factory=list)
    relations: dict[str, dict[str, list[str]]] = Field(default_factory=dict)

    @field_validator("relations", mode="before")
    @classmethod
    def _normalize_relations(cls, v):
        if v is None:
            return {}
        if not isinstance(v, Mapping):
            return v
        out = {}
        for record_id, taxonomies in v.items():
            if not isinstance(taxonomies, Mapping):
                out[str(record_id)] = taxonomies
                continue
            out[str(record_id)] = {
                str(taxonomy): [str(term) for term in terms] if isinstance(terms, (list, tuple)) else [str(terms)]
                for taxonomy, terms in taxonomies.items()
            }
        return out

    @field_validator("counts")
    @classmethod
    def _non_negative(cls, v):
        for group, statuses in v.items():
            for status, count in statuses.items():
                if count < 0:
                    raise ValueError(f"count for {group}.{status} must be >= 0, got {count}")
        return v

import json
from pathlib import Path
from typing import Any, TypeVar, overload

import yaml
from pydantic import TypeAdapter, ValidationError

T = TypeVar("T")

DATA_SUFFIXES = (".json", ".yaml", ".yml")


# -------------------------------
# Internal raw reader (single source of truth)
# -------------------------------


def _read_raw(path: Path | str) -> Any:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"File not found: {p}")

    try:
        text = p.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ValueError(f"Unable to decode UTF-8 in {p}: {e}") from e

    if p.suffix.lower() == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {p}: {e}") from e
    else:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {p}: {e}") from e

    if data is None:
        raise ValueError(f"Empty data file: {p}")

    return data


def find_data_file(folder: Path | str, stem: str) -> Path:
    """Locate ``<folder>/<stem>.json|yaml|yml``, preferring JSON."""
    base = Path(folder)
    for suffix in DATA_SUFFIXES:
        candidate = base / f"{stem}{suffix}"
        if candidate.exists():
            return candidate
    raise FileNotFoundError(f"No {stem}.json/.yaml/.yml found in {base}")


# -------------------------------
# Public typed loader (preferred)
# -------------------------------


@overload
def load_yaml_typed(path: Path | str, *, adapter: TypeAdapter[T]) -> T: ...


@overload
def load_yaml_typed(path: Path | str, *, model: type[T]) -> T: ...


def load_yaml_typed(
    path: Path | str,
    *,
    adapter: TypeAdapter[T] | None = None,
    model: type[T] | None = None,
) -> T:
    """Read YAML (or JSON) and validate/parse it into a typed object using Pydantic v2.

    Exactly one of {adapter, model} must be supplied.

    Example (single model):
        load_yaml_typed("press-sync.yaml", model=ValidationSettings)

    Example (list of items):
        load_yaml_typed("export/posts.json", adapter=TypeAdapter(list[dict[str, Any]]))
    """
    if (adapter is None) == (model is None):
        raise ValueError("Provide exactly one of 'adapter' or 'model'.")

    data = _read_raw(path)

    try:
        if adapter is not None:
            return adapter.validate_python(data)
        return TypeAdapter(model).validate_python(data)  # type: ignore[arg-type]
    except ValidationError as e:
        # Normalize error so callers see the file path in the message
        raise ValueError(f"Invalid structure in {path}: {e}") from e


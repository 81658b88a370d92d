from typing import Any, Mapping

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

DEFAULT_SAMPLE_COUNT = 25


class ValidationSettings(BaseModel):
    """Options recognised by the validators.

    Accepts the plain names and the ``ps_`` prefixed names used by the sync
    settings screen, so an exported settings file can be reused as-is.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    remote_domain: str | None = Field(
        default=None,
        validation_alias=AliasChoices("remote_domain", "ps_remote_domain"),
    )
    remote_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("remote_key", "ps_remote_key", "remote_press_sync_key"),
    )
    sample_count: int = Field(
        default=DEFAULT_SAMPLE_COUNT,
        ge=0,
        validation_alias=AliasChoices("sample_count", "ps_page_size"),
    )
    local_folder: str | None = None
    timeout_seconds: float | None = Field(default=None, gt=0)
    verbose: bool = False
    max_parallel: int = Field(default=1, ge=1)

    @field_validator("remote_domain", mode="before")
    @classmethod
    def _strip_domain(cls, v):
        if v is None:
            return None
        v = str(v).strip().rstrip("/")
        return v or None

    @field_validator("verbose", mode="before")
    @classmethod
    def _flag(cls, v):
        # `--verbose` with no value arrives as True; "0"/"false" strings turn it off.
        if isinstance(v, str):
            return v.strip().lower() not in {"", "0", "false", "no", "off"}
        return bool(v)

    @classmethod
    def recognized_options(cls) -> set[str]:
        """Every option key, including aliases, that the settings accept."""
        names: set[str] = set()
        for name, field in cls.model_fields.items():
            names.add(name)
            alias = field.validation_alias
            if isinstance(alias, AliasChoices):
                names.update(choice for choice in alias.choices if isinstance(choice, str))
        return names

    @classmethod
    def filter_options(cls, options: Mapping[str, Any]) -> tuple[dict[str, Any], list[str]]:
        """Split free-form options into recognised ones and the dropped keys."""
        recognized = cls.recognized_options()
        kept = {key: value for key, value in options.items() if key in recognized}
        dropped = [key for key in options if key not in recognized]
        return kept, dropped

    def merged(self, overrides: Mapping[str, Any]) -> "ValidationSettings":
        """Return new settings with recognised ``overrides`` applied on top."""
        kept, _ = self.filter_options(overrides)
        data = self.model_dump(exclude_unset=True)
        # Resolve aliases before merging so "ps_remote_domain" replaces "remote_domain".
        resolved = type(self).model_validate(kept).model_dump(exclude_unset=True)
        data.update(resolved)
        return type(self).model_validate(data)

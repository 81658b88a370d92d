from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, Mapping

from press_core.codebase.log import get_logger
from press_core.data.local import CONTENT_KINDS, LocalContentReader
from press_core.models.report import Report
from press_core.models.settings import ValidationSettings
from press_core.remote.client import HttpRemoteDataClient, RemoteDataClient

from .base import SourceReader, Validator, registry

_logger = get_logger("runner")

ALL = "all"

ClientFactory = Callable[[ValidationSettings], RemoteDataClient]


def default_client(settings: ValidationSettings) -> RemoteDataClient:
    if not settings.remote_domain:
        raise ValueError("remote_domain is not configured")
    return HttpRemoteDataClient(
        remote_domain=settings.remote_domain,
        remote_key=settings.remote_key,
        timeout_seconds=settings.timeout_seconds,
    )


def resolve_names(names: Iterable[str]) -> list[str]:
    """Expand ``all`` and reject unknown validator names, keeping registry order."""
    requested = [name.strip().lower() for name in names if name and name.strip()]
    if not requested or ALL in requested:
        return registry.names()
    unknown = [name for name in requested if registry.get(name) is None]
    if unknown:
        raise ValueError(f"unknown validator(s): {', '.join(unknown)}; expected one of {registry.names()}")
    return [name for name in registry.names() if name in requested]


def build_validator(
    name: str,
    settings: ValidationSettings,
    *,
    client: RemoteDataClient | None = None,
    reader: SourceReader | None = None,
    client_factory: ClientFactory = default_client,
) -> Validator:
    validator_cls = registry.get(name)
    if validator_cls is None:
        raise ValueError(f"unknown validator {name!r}; expected one of {registry.names()}")
    if reader is None:
        if not settings.local_folder:
            raise ValueError("local_folder is not configured")
        reader = LocalContentReader(settings.local_folder, CONTENT_KINDS[validator_cls.content_kind])
    if client is None:
        client = client_factory(settings)
    return validator_cls(settings, reader, client)


def run_validations(
    names: Iterable[str],
    settings: ValidationSettings,
    *,
    client: RemoteDataClient | None = None,
    readers: Mapping[str, SourceReader] | None = None,
    client_factory: ClientFactory = default_client,
    max_parallel: int | None = None,
) -> dict[str, Report]:
    """Run the named validators and return their reports in registry order.

    Any validator error aborts the whole run; no partial set of reports is returned.
    """
    selected = resolve_names(names)
    readers = readers or {}
    validators = [
        build_validator(
            name,
            settings,
            client=client,
            reader=readers.get(name),
            client_factory=client_factory,
        )
        for name in selected
    ]

    parallel = max_parallel if max_parallel is not None else settings.max_parallel
    if parallel < 1:
        parallel = 1
    if client is not None and parallel > 1:
        # A caller-supplied client is shared; keep access to it sequential.
        _logger.warning("parallel validation limited to 1 with a shared client (requested %d)", parallel)
        parallel = 1

    _logger.info("running validators %s (parallel=%d)", selected, parallel)
    if parallel == 1:
        reports = [validator.report() for validator in validators]
    else:
        with ThreadPoolExecutor(max_workers=parallel) as executor:
            futures = [executor.submit(validator.report) for validator in validators]
            reports = [future.result() for future in futures]

    return dict(zip(selected, reports))


__all__ = ["ALL", "build_validator", "default_client", "resolve_names", "run_validations"]

"""Remote data access for the destination site.

``HttpRemoteDataClient`` talks to the Press Sync REST namespace of the
remote WordPress install. No retries are attempted here: a failed request
aborts the validator and the caller decides whether to run again.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Mapping, Protocol, Sequence, get_args

import requests

from press_core.codebase.log import get_logger
from press_core.errors import RemoteDecodeError, RemoteUnavailable

_logger = get_logger("remote")

SampleType = Literal["posts", "terms", "users"]
SAMPLE_TYPES: frozenset[str] = frozenset(get_args(SampleType))

API_NAMESPACE = "wp-json/press-sync/v1"


class RemoteDataClient(Protocol):
    def get_remote_data(self, path: str, params: Mapping[str, Any] | None = None) -> Any: ...


def _encode_params(path: str, params: Mapping[str, Any] | None) -> dict[str, Any]:
    encoded: dict[str, Any] = {}
    for key, value in (params or {}).items():
        if key == "type" and value not in SAMPLE_TYPES:
            raise ValueError(f"unknown sample type {value!r} for {path}; expected one of {sorted(SAMPLE_TYPES)}")
        if key == "ids" and isinstance(value, Sequence) and not isinstance(value, str):
            encoded[key] = ",".join(str(item) for item in value)
        else:
            encoded[key] = value
    return encoded


def _response_text(response: Any) -> str:
    text = getattr(response, "text", "") or ""
    return str(text)[:256]


@dataclass
class HttpRemoteDataClient:
    remote_domain: str
    remote_key: str | None = None
    timeout_seconds: float | None = None
    session: requests.Session | None = None
    _session: requests.Session = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not str(self.remote_domain or "").strip():
            raise ValueError("remote_domain is required for remote validation")
        domain = self.remote_domain.strip().rstrip("/")
        if "://" not in domain:
            domain = f"https://{domain}"
        self.remote_domain = domain
        self._session = self.session or requests.Session()

    def url_for(self, path: str) -> str:
        return f"{self.remote_domain}/{API_NAMESPACE}/{path.strip('/')}"

    def get_remote_data(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        query = _encode_params(path, params)
        if self.remote_key:
            query["press_sync_key"] = self.remote_key
        url = self.url_for(path)
        _logger.debug("GET %s params=%s", url, sorted(k for k in query if k != "press_sync_key"))

        try:
            response = self._session.get(url, params=query, timeout=self.timeout_seconds)
        except requests.Timeout as exc:
            raise RemoteUnavailable(path, "timeout") from exc
        except requests.RequestException as exc:
            raise RemoteUnavailable(path, str(exc)[:256]) from exc

        if response.status_code >= 400:
            raise RemoteUnavailable(path, f"http_{response.status_code}:{_response_text(response)}")

        try:
            body = response.json()
        except ValueError as exc:
            raise RemoteDecodeError(path, str(exc)[:256]) from exc

        return self._unwrap(path, body)

    def _unwrap(self, path: str, body: Any) -> Any:
        # wp_send_json_success/error envelopes
        if isinstance(body, Mapping) and "success" in body and set(body) <= {"success", "data"}:
            if not body.get("success"):
                raise RemoteUnavailable(path, f"remote reported failure: {body.get('data')!r}"[:256])
            return body.get("data")
        return body

"""Environment-driven client configuration."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import httpx

from simple_search.domain import BasicAuth, ClientConfig

if TYPE_CHECKING:
    from collections.abc import Mapping

ENV_URL = "SIMPLE_SEARCH_URL"
ENV_INDEX = "SIMPLE_SEARCH_INDEX"
ENV_USERNAME = "SIMPLE_SEARCH_USERNAME"
ENV_PASSWORD = "SIMPLE_SEARCH_PASSWORD"  # noqa: S105
ENV_TIMEOUT_MS = "SIMPLE_SEARCH_TIMEOUT_MS"
ENV_VERIFY_CERTS = "SIMPLE_SEARCH_VERIFY_CERTS"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def env_bool(name: str, *, default_value: bool, environ: Mapping[str, str] | None = None) -> bool:
    """Read a boolean value from environment variables.

    Args:
        name (str): Environment variable name.
        default_value (bool): Fallback value when missing or invalid.
        environ (Mapping[str, str] | None): Optional environment override.

    Returns:
        bool: Parsed boolean value.

    """
    source = os.environ if environ is None else environ
    raw = source.get(name)
    if raw is None:
        return default_value
    normalized = raw.strip().lower()
    if normalized in _TRUTHY:
        return True
    if normalized in _FALSY:
        return False
    return default_value


def _env_int(name: str, environ: Mapping[str, str]) -> int | None:
    raw = environ.get(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def connection_fields_from_url(url: str) -> dict[str, object]:
    """Split a service URL into ``protocol``, ``host`` and ``port`` fields.

    Args:
        url (str): Service URL, e.g. ``https://search.local:9201``.

    Returns:
        dict[str, object]: Keyword arguments accepted by `ClientConfig`.

    """
    parsed = httpx.URL(url)
    fields: dict[str, object] = {}
    if parsed.scheme:
        fields["protocol"] = parsed.scheme
    if parsed.host:
        fields["host"] = parsed.host
    if parsed.port is not None:
        fields["port"] = parsed.port
    return fields


def load_config_from_env(environ: Mapping[str, str] | None = None, **overrides: object) -> ClientConfig:
    """Build a client configuration from ``SIMPLE_SEARCH_*`` variables.

    Explicit keyword overrides win over the environment; ``None`` overrides are ignored.

    Args:
        environ (Mapping[str, str] | None): Optional environment override.
        **overrides (object): Explicit `ClientConfig` fields.

    Returns:
        ClientConfig: Immutable configuration.

    """
    source = os.environ if environ is None else environ
    fields: dict[str, object] = {}

    url = source.get(ENV_URL, "").strip()
    if url:
        fields.update(connection_fields_from_url(url))

    index = source.get(ENV_INDEX, "").strip()
    if index:
        fields["index"] = index

    username = source.get(ENV_USERNAME)
    if username:
        fields["auth"] = BasicAuth(username=username, password=source.get(ENV_PASSWORD, ""))

    timeout_ms = _env_int(ENV_TIMEOUT_MS, source)
    if timeout_ms is not None:
        fields["timeout_ms"] = timeout_ms

    fields["verify_certs"] = env_bool(ENV_VERIFY_CERTS, default_value=True, environ=source)
    fields.update({key: value for key, value in overrides.items() if value is not None})
    return ClientConfig(**fields)

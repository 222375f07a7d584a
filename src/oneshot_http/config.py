"""Client options sourced from the environment and optional ``.env`` files."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any, Final

from dotenv import dotenv_values

from .errors import ConfigurationError
from .options import CLIENT_OPTIONS, validate_options


ENV_PREFIX: Final[str] = "ONESHOT_HTTP_"
_USER_AGENT_VAR: Final[str] = f"{ENV_PREFIX}USER_AGENT"
_TIMEOUT_VAR: Final[str] = f"{ENV_PREFIX}TIMEOUT"
_BASE_URL_VAR: Final[str] = f"{ENV_PREFIX}BASE_URL"


def options_from_env(
    environ: Mapping[str, str] | None = None,
    *,
    env_file: str | os.PathLike[str] | None = None,
) -> dict[str, Any]:
    """Collect validated client options from ``environ`` and ``env_file``.

    Values in ``environ`` (``os.environ`` by default) take precedence over the
    ones read from ``env_file``.  The file is parsed without being loaded into
    the process environment.
    """

    settings: dict[str, str] = {}
    if env_file is not None:
        settings.update({key: value for key, value in dotenv_values(env_file).items() if value is not None})
    settings.update(os.environ if environ is None else environ)

    options: dict[str, Any] = {}
    user_agent = settings.get(_USER_AGENT_VAR)
    if user_agent:
        options["user_agent"] = user_agent

    raw_timeout = settings.get(_TIMEOUT_VAR)
    if raw_timeout:
        try:
            options["timeout"] = int(raw_timeout)
        except ValueError as exc:
            raise ConfigurationError(
                f"{_TIMEOUT_VAR} must be an integer, got {raw_timeout!r}",
                option="timeout",
            ) from exc

    base_url = settings.get(_BASE_URL_VAR)
    if base_url:
        options["base_url"] = base_url

    return validate_options(options, CLIENT_OPTIONS)


__all__ = ["ENV_PREFIX", "options_from_env"]

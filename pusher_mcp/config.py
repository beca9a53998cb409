"""
Configuration for the Pusher MCP server.

Credentials come from the process environment.  They are read when the
first provider-touching tool runs (see `ClientAccessor`), never at import.
"""

import logging
import os
import sys
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import ConfigurationError

# Server identity reported in the initialize handshake
SERVER_NAME = "pusher-channels"
SERVER_VERSION = "1.0.0"

# Canonical order; ConfigurationError lists missing names in this order
REQUIRED_ENV_VARS = (
    "PUSHER_APP_ID",
    "PUSHER_KEY",
    "PUSHER_SECRET",
    "PUSHER_CLUSTER",
)

LOG_LEVEL_ENV_VAR = "PUSHER_MCP_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


@dataclass(frozen=True)
class ProviderCredentials:
    """The four values needed to talk to a Pusher Channels app."""
    app_id: str
    key: str
    secret: str
    cluster: str


def load_credentials(environ: Optional[Mapping[str, str]] = None) -> ProviderCredentials:
    """
    Read Pusher credentials from the environment.

    Args:
        environ: Mapping to read from.  Defaults to `os.environ`.

    Raises:
        ConfigurationError: If any required variable is unset or empty.
            The message names every missing variable, not just the first.
    """
    env = os.environ if environ is None else environ
    missing = [name for name in REQUIRED_ENV_VARS if not env.get(name)]
    if missing:
        raise ConfigurationError(missing)

    return ProviderCredentials(
        app_id=env["PUSHER_APP_ID"],
        key=env["PUSHER_KEY"],
        secret=env["PUSHER_SECRET"],
        cluster=env["PUSHER_CLUSTER"],
    )


def get_log_level(environ: Optional[Mapping[str, str]] = None) -> str:
    """Log level name from PUSHER_MCP_LOG_LEVEL, defaulting to INFO."""
    env = os.environ if environ is None else environ
    return (env.get(LOG_LEVEL_ENV_VAR) or DEFAULT_LOG_LEVEL).upper()


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """
    Send all pusher_mcp log records to stderr.

    stdout carries the JSON-RPC stream, so nothing may be logged there.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        stream=sys.stderr,
    )

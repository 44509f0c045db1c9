"""Configuration for the transfer coin client.

Values come from the environment first, then from the Solana CLI config
file, then from built-in defaults.
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import httpx
import yaml

from .constants import (
    DEFAULT_CLI_CONFIG_PATH,
    DEFAULT_COMMITMENT,
    DEFAULT_FEE_MULTIPLIER,
    DEFAULT_PROGRAM_DIR,
    DEFAULT_PROGRAM_NAME,
    DEFAULT_RPC_URL,
    ENV_CLI_CONFIG,
    ENV_COMMITMENT,
    ENV_FEE_MULTIPLIER,
    ENV_PAYER_KEYPAIR,
    ENV_PROGRAM_DIR,
    ENV_RPC_URL,
)
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

_COMMITMENTS = ("processed", "confirmed", "finalized")


@dataclass(frozen=True)
class Settings:
    """Resolved configuration for one run."""

    rpc_url: str = DEFAULT_RPC_URL
    payer_keypair_path: Path | None = None
    program_dir: Path = DEFAULT_PROGRAM_DIR
    program_name: str = DEFAULT_PROGRAM_NAME
    fee_multiplier: int = DEFAULT_FEE_MULTIPLIER
    commitment: str = DEFAULT_COMMITMENT

    @property
    def program_keypair_path(self) -> Path:
        return self.program_dir / f"{self.program_name}-keypair.json"

    @property
    def program_so_path(self) -> Path:
        return self.program_dir / f"{self.program_name}.so"


def read_cli_config(path: Path) -> dict[str, Any]:
    """Read the Solana CLI config file.

    A missing or unreadable file is not an error; the caller falls back to
    defaults.
    """
    try:
        with path.open() as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to read Solana CLI config at '%s': %s", path, e)
        return {}

    if not isinstance(data, dict):
        logger.warning("Ignoring Solana CLI config at '%s': not a mapping", path)
        return {}
    return data


def _parse_fee_multiplier(raw: str | None) -> int:
    if raw is None or raw == "":
        return DEFAULT_FEE_MULTIPLIER
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{ENV_FEE_MULTIPLIER} must be an integer, got {raw!r}")
    if value <= 0:
        raise ConfigurationError(f"{ENV_FEE_MULTIPLIER} must be positive, got {value}")
    return value


def _parse_rpc_url(raw: str) -> str:
    try:
        url = httpx.URL(raw)
    except httpx.InvalidURL as e:
        raise ConfigurationError(f"RPC URL {raw!r} is invalid: {e}") from e
    if url.scheme not in ("http", "https") or not url.host:
        raise ConfigurationError(f"RPC URL must be an http(s) URL, got {raw!r}")
    return raw


def _parse_commitment(raw: str | None) -> str:
    if not raw:
        return DEFAULT_COMMITMENT
    commitment = raw.lower()
    if commitment not in _COMMITMENTS:
        raise ConfigurationError(
            f"{ENV_COMMITMENT} must be one of {', '.join(_COMMITMENTS)}, got {raw!r}"
        )
    return commitment


def load_settings(
    env: Mapping[str, str] | None = None,
    cli_config_path: Path | None = None,
) -> Settings:
    """Resolve settings for a run.

    Args:
        env: Environment mapping (defaults to ``os.environ``).
        cli_config_path: Solana CLI config file. Defaults to
            ``$SOLANA_CLI_CONFIG`` or ``~/.config/solana/cli/config.yml``.

    Returns:
        Settings for the run.

    Raises:
        ConfigurationError: If an explicit value is invalid.
    """
    if env is None:
        env = os.environ

    if cli_config_path is None:
        cli_config_path = Path(env.get(ENV_CLI_CONFIG) or DEFAULT_CLI_CONFIG_PATH)
    cli_config = read_cli_config(cli_config_path)

    rpc_url = env.get(ENV_RPC_URL) or cli_config.get("json_rpc_url")
    if not rpc_url:
        logger.warning("No RPC URL configured, falling back to %s", DEFAULT_RPC_URL)
        rpc_url = DEFAULT_RPC_URL

    payer_path = env.get(ENV_PAYER_KEYPAIR) or cli_config.get("keypair_path")
    program_dir = env.get(ENV_PROGRAM_DIR)

    return Settings(
        rpc_url=_parse_rpc_url(str(rpc_url)),
        payer_keypair_path=Path(payer_path).expanduser() if payer_path else None,
        program_dir=Path(program_dir).expanduser() if program_dir else DEFAULT_PROGRAM_DIR,
        fee_multiplier=_parse_fee_multiplier(env.get(ENV_FEE_MULTIPLIER)),
        commitment=_parse_commitment(env.get(ENV_COMMITMENT)),
    )

"""Keypair loading for the payer and the deployed program."""

import json
import logging
from pathlib import Path

from solders.keypair import Keypair  # type: ignore

from .config import Settings
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


def load_keypair(path: Path) -> Keypair:
    """Load a keypair written by the Solana CLI.

    The file holds a JSON array of the 64 secret key bytes.

    Args:
        path: Path to the keypair file.

    Returns:
        The keypair.

    Raises:
        ConfigurationError: If the file is missing or malformed.
    """
    try:
        with Path(path).open() as f:
            secret = json.load(f)
        return Keypair.from_bytes(bytes(secret))
    except (OSError, ValueError, TypeError) as e:
        raise ConfigurationError(f"Failed to read keypair at '{path}': {e}") from e


def generate_keypair() -> Keypair:
    return Keypair()


def resolve_payer(settings: Settings) -> Keypair:
    """Return the fee payer for this run.

    Uses the configured keypair file when there is one, otherwise a freshly
    generated keypair that the airdrop will fund.
    """
    if settings.payer_keypair_path is not None:
        try:
            return load_keypair(settings.payer_keypair_path)
        except ConfigurationError as e:
            logger.warning("%s; generating a new payer", e)
    else:
        logger.warning("No payer keypair configured; generating a new payer")
    return generate_keypair()

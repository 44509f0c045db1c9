"""Connection to the Solana cluster."""

import logging
from collections.abc import Callable
from typing import Any

import httpx
from solana.rpc.api import Client
from solana.rpc.commitment import Commitment

from .config import Settings
from .errors import ClusterConnectionError
from .types import ClientContext
from .utils import RPC_ERRORS

logger = logging.getLogger(__name__)


def establish_connection(
    settings: Settings,
    client_factory: Callable[..., Any] = Client,
) -> ClientContext:
    """Open a client to the cluster and check it answers.

    Args:
        settings: Resolved settings for the run.
        client_factory: Builds the RPC client from an endpoint and commitment.

    Returns:
        A context holding the connected client.

    Raises:
        ClusterConnectionError: If the node cannot be reached.
    """
    try:
        client = client_factory(settings.rpc_url, commitment=Commitment(settings.commitment))
        version = client.get_version().value
    except (*RPC_ERRORS, httpx.InvalidURL) as e:
        raise ClusterConnectionError(
            f"Failed to connect to cluster at {settings.rpc_url}: {e}"
        ) from e

    logger.info(
        "Connection to cluster established: %s %s",
        settings.rpc_url,
        version.solana_core,
    )
    return ClientContext(settings=settings, client=client)

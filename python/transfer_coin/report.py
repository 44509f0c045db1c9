"""Reads back the transferred account's counter."""

import logging

from .errors import AccountNotFoundError, ClusterConnectionError
from .types import ClientContext, TransferredAccount
from .utils import RPC_ERRORS

logger = logging.getLogger(__name__)


def report_transfers(ctx: ClientContext) -> int:
    """Report how many times the transferred account has been transferred to.

    Returns:
        The account's counter.

    Raises:
        AccountNotFoundError: If the account does not exist.
        DecodeError: If the account data has the wrong size.
    """
    transferred_pubkey = ctx.require_transferred_pubkey()
    try:
        account_info = ctx.client.get_account_info(
            transferred_pubkey, ctx.settings.commitment
        ).value
    except RPC_ERRORS as e:
        raise ClusterConnectionError(
            f"Failed to fetch transferred account {transferred_pubkey}: {e}"
        ) from e

    if account_info is None:
        raise AccountNotFoundError(
            f"Cannot find the transferred account {transferred_pubkey}"
        )

    account = TransferredAccount.from_bytes(account_info.data)
    logger.info(
        "%s has been transferred %d time(s)", transferred_pubkey, account.counter
    )
    return account.counter

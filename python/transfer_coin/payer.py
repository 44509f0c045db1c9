"""Fee payer resolution and funding."""

import dataclasses
import logging
from typing import Any

from solders.keypair import Keypair  # type: ignore
from solders.message import Message  # type: ignore

from .constants import DEFAULT_LAMPORTS_PER_SIGNATURE
from .errors import FundingError
from .signers import resolve_payer
from .types import ClientContext, TransferredAccount
from .utils import RPC_ERRORS, check_confirmation, lamports_to_sol, required_fees

logger = logging.getLogger(__name__)


def get_lamports_per_signature(client: Any, payer: Keypair, commitment: str | None = None) -> int:
    """Price a single-signature message against the latest blockhash."""
    blockhash = client.get_latest_blockhash(commitment).value.blockhash
    message = Message.new_with_blockhash([], payer.pubkey(), blockhash)
    fee = client.get_fee_for_message(message, commitment).value
    if fee is None:
        logger.debug("Node did not price message, using %d lamports", DEFAULT_LAMPORTS_PER_SIGNATURE)
        return DEFAULT_LAMPORTS_PER_SIGNATURE
    return fee


def fund_payer(ctx: ClientContext, payer: Keypair, fees: int) -> int:
    """Top up ``payer`` to at least ``fees`` lamports.

    Requests a single airdrop for the shortfall when the balance is too low
    and waits for it to confirm.

    Returns:
        The payer's balance afterwards.
    """
    client = ctx.client
    commitment = ctx.settings.commitment
    pubkey = payer.pubkey()

    lamports = client.get_balance(pubkey, commitment).value
    if lamports >= fees:
        return lamports

    shortfall = fees - lamports
    logger.info("Requesting airdrop of %d lamports for %s", shortfall, pubkey)
    signature = client.request_airdrop(pubkey, shortfall, commitment).value
    statuses = client.confirm_transaction(signature, commitment).value

    check_confirmation(statuses, signature, FundingError, f"Airdrop to {pubkey}")

    return client.get_balance(pubkey, commitment).value


def establish_payer(ctx: ClientContext) -> ClientContext:
    """Establish an account to pay for everything.

    Raises:
        FundingError: If the balance cannot be read or topped up.
    """
    payer = ctx.payer or resolve_payer(ctx.settings)
    client = ctx.client
    commitment = ctx.settings.commitment

    try:
        # Cost of funding the transferred account
        rent = client.get_minimum_balance_for_rent_exemption(
            TransferredAccount.SIZE, commitment
        ).value
        # Cost of sending transactions
        per_signature = get_lamports_per_signature(client, payer, commitment)
        fees = required_fees(rent, per_signature, ctx.settings.fee_multiplier)

        lamports = fund_payer(ctx, payer, fees)
    except RPC_ERRORS as e:
        raise FundingError(f"Failed to fund payer {payer.pubkey()}: {e}") from e

    logger.info(
        "Using account %s containing %s SOL to pay for fees",
        payer.pubkey(),
        lamports_to_sol(lamports),
    )
    return dataclasses.replace(ctx, payer=payer)

"""Utility functions for the transfer coin client."""

from collections.abc import Sequence
from typing import Any

import httpx
from solana.exceptions import SolanaRpcException
from solana.rpc.core import (
    RPCException,
    TransactionExpiredBlockheightExceededError,
    UnconfirmedTxError,
)
from solders.instruction import Instruction  # type: ignore
from solders.keypair import Keypair  # type: ignore
from solders.pubkey import Pubkey  # type: ignore
from solders.signature import Signature  # type: ignore
from solders.transaction import Transaction  # type: ignore

from .constants import LAMPORTS_PER_SOL, TRANSFER_SEED
from .errors import SubmissionError, TransferCoinError

# Failures surfaced by solana-py for a single RPC round-trip
RPC_ERRORS = (
    RPCException,
    SolanaRpcException,
    UnconfirmedTxError,
    TransactionExpiredBlockheightExceededError,
    httpx.HTTPError,
)


def derive_transferred_address(payer: Pubkey, program_id: Pubkey) -> Pubkey:
    """Derive the address of the payer's transferred account.

    Same payer and program always yield the same address, so the account can
    be found again on later runs.
    """
    return Pubkey.create_with_seed(payer, TRANSFER_SEED, program_id)


def required_fees(
    rent_exempt_lamports: int,
    lamports_per_signature: int,
    fee_multiplier: int,
) -> int:
    """Lamports the payer needs: rent for the account plus a fee margin."""
    return rent_exempt_lamports + lamports_per_signature * fee_multiplier


def lamports_to_sol(lamports: int) -> float:
    return lamports / LAMPORTS_PER_SOL


def check_confirmation(
    statuses: Sequence[Any],
    signature: Signature,
    error: type[TransferCoinError] = SubmissionError,
    label: str = "Transaction",
) -> None:
    """Raise ``error`` unless the first signature status confirmed cleanly."""
    status = statuses[0] if statuses else None
    if status is None:
        raise error(f"{label} {signature} was not confirmed")
    if status.err is not None:
        raise error(f"{label} {signature} failed: {status.err}")


def send_and_confirm(
    client: Any,
    instructions: Sequence[Instruction],
    payer: Keypair,
    commitment: str | None = None,
) -> Signature:
    """Sign, submit and wait for confirmation of a transaction.

    Args:
        client: Solana RPC client.
        instructions: Instructions to put in the transaction.
        payer: Fee payer and sole signer.
        commitment: Commitment level to confirm at.

    Returns:
        The transaction signature.

    Raises:
        SubmissionError: If the transaction is rejected, fails on chain, or
            is not confirmed before its blockhash expires.
    """
    try:
        latest = client.get_latest_blockhash(commitment).value
        tx = Transaction.new_signed_with_payer(
            list(instructions), payer.pubkey(), [payer], latest.blockhash
        )
        signature = client.send_transaction(tx).value
        statuses = client.confirm_transaction(
            signature,
            commitment,
            last_valid_block_height=latest.last_valid_block_height,
        ).value
    except RPC_ERRORS as e:
        raise SubmissionError(f"Transaction failed: {e}") from e

    check_confirmation(statuses, signature)
    return signature

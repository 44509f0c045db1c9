"""The transfer instruction sent to the program."""

import logging

from solders.instruction import AccountMeta, Instruction  # type: ignore
from solders.pubkey import Pubkey  # type: ignore
from solders.signature import Signature  # type: ignore

from .types import ClientContext
from .utils import send_and_confirm

logger = logging.getLogger(__name__)


def build_transfer_instruction(program_id: Pubkey, transferred_pubkey: Pubkey) -> Instruction:
    """Build the program's only instruction.

    It carries no data; the program increments the counter of the single
    writable account it is given.
    """
    return Instruction(
        program_id,
        b"",
        [AccountMeta(pubkey=transferred_pubkey, is_signer=False, is_writable=True)],
    )


def transfer_coin(ctx: ClientContext) -> Signature:
    """Send one transfer instruction and wait for it to confirm.

    Raises:
        SubmissionError: If the transaction is rejected or not confirmed.
    """
    transferred_pubkey = ctx.require_transferred_pubkey()
    logger.info("Transfer Coin to %s", transferred_pubkey)

    instruction = build_transfer_instruction(ctx.require_program_id(), transferred_pubkey)
    signature = send_and_confirm(
        ctx.client, [instruction], ctx.require_payer(), ctx.settings.commitment
    )
    logger.debug("Transfer confirmed: %s", signature)
    return signature

"""Checks on the deployed program and its transferred account."""

import dataclasses
import logging

from solders.system_program import (  # type: ignore
    CreateAccountWithSeedParams,
    create_account_with_seed,
)

from .constants import TRANSFER_SEED
from .errors import ConfigurationError, DeploymentError, SubmissionError
from .signers import load_keypair
from .types import ClientContext, TransferredAccount
from .utils import RPC_ERRORS, derive_transferred_address, send_and_confirm

logger = logging.getLogger(__name__)


def check_program(ctx: ClientContext) -> ClientContext:
    """Check the program has been deployed and ensure its account exists.

    1. Read the program id from the deploy keypair file
    2. Check the program account is on chain and executable
    3. Derive the transferred account address
    4. Create the transferred account if it does not exist yet

    Raises:
        ConfigurationError: If the program keypair cannot be read.
        DeploymentError: If the program is missing or not executable.
        SubmissionError: If creating the transferred account fails.
    """
    settings = ctx.settings
    payer = ctx.require_payer()

    # 1. Program id
    try:
        program_id = load_keypair(settings.program_keypair_path).pubkey()
    except ConfigurationError as e:
        raise ConfigurationError(
            f"{e}. Program may need to be deployed with "
            f"`solana program deploy {settings.program_so_path}`"
        ) from e

    # 2. Deployment
    try:
        program_info = ctx.client.get_account_info(program_id, settings.commitment).value
    except RPC_ERRORS as e:
        raise DeploymentError(f"Failed to fetch program {program_id}: {e}") from e

    if program_info is None:
        if settings.program_so_path.exists():
            raise DeploymentError(
                "Program needs to be deployed with "
                f"`solana program deploy {settings.program_so_path}`"
            )
        raise DeploymentError("Program needs to be built and deployed")
    if not program_info.executable:
        raise DeploymentError(f"Program {program_id} is not executable")

    logger.info("Using program %s", program_id)

    # 3. Derived account
    transferred_pubkey = derive_transferred_address(payer.pubkey(), program_id)
    ctx = dataclasses.replace(
        ctx, program_id=program_id, transferred_pubkey=transferred_pubkey
    )

    # 4. Create on first run
    ensure_transferred_account(ctx)
    return ctx


def ensure_transferred_account(ctx: ClientContext) -> bool:
    """Create the transferred account unless it already exists.

    Not atomic: another process using the same payer may create the account
    between the lookup and the create, in which case the create fails.

    Returns:
        True if the account was created by this call.
    """
    client = ctx.client
    commitment = ctx.settings.commitment
    payer = ctx.require_payer()
    program_id = ctx.require_program_id()
    transferred_pubkey = ctx.require_transferred_pubkey()

    try:
        if client.get_account_info(transferred_pubkey, commitment).value is not None:
            return False

        logger.info("Creating account %s to transfer coin to", transferred_pubkey)
        lamports = client.get_minimum_balance_for_rent_exemption(
            TransferredAccount.SIZE, commitment
        ).value
    except RPC_ERRORS as e:
        raise SubmissionError(
            f"Failed to look up transferred account {transferred_pubkey}: {e}"
        ) from e

    instruction = create_account_with_seed(
        CreateAccountWithSeedParams(
            from_pubkey=payer.pubkey(),
            to_pubkey=transferred_pubkey,
            base=payer.pubkey(),
            seed=TRANSFER_SEED,
            lamports=lamports,
            space=TransferredAccount.SIZE,
            owner=program_id,
        )
    )
    send_and_confirm(client, [instruction], payer, commitment)
    return True

"""Transfer coins to a Solana account.

Runs the whole flow once: connect, fund the payer, check the program, send
one transfer instruction and report the account's counter.
"""

import logging
import sys
from collections.abc import Callable
from typing import Any

from dotenv import load_dotenv
from solana.rpc.api import Client

from .config import Settings, load_settings
from .connection import establish_connection
from .errors import TransferCoinError
from .instruction import transfer_coin
from .payer import establish_payer
from .program import check_program
from .report import report_transfers

logger = logging.getLogger(__name__)


def run(settings: Settings, client_factory: Callable[..., Any] = Client) -> int:
    """Run every step in order and return the transferred account's counter."""
    # Establish connection to the cluster
    ctx = establish_connection(settings, client_factory)

    # Determine who pays for the fees
    ctx = establish_payer(ctx)

    # Check if the program has been deployed
    ctx = check_program(ctx)

    # Transfer coin to the account
    transfer_coin(ctx)

    # Find out how many times that account has been transferred to
    return report_transfers(ctx)


def main() -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    load_dotenv()

    print("Transfer Coins to a Solana account...")
    try:
        settings = load_settings()
        counter = run(settings)
    except TransferCoinError as e:
        logger.debug("Run failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Account has been transferred {counter} time(s)")
    print("Success")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

"""Demo client for the transfer coin Solana program.

Connects to a cluster, funds a fee payer, checks the deployed program,
sends it one transfer instruction and reads back the transferred account's
counter.
"""

from transfer_coin.config import Settings, load_settings
from transfer_coin.connection import establish_connection
from transfer_coin.errors import (
    AccountNotFoundError,
    ClusterConnectionError,
    ConfigurationError,
    DecodeError,
    DeploymentError,
    FundingError,
    SubmissionError,
    TransferCoinError,
)
from transfer_coin.instruction import build_transfer_instruction, transfer_coin
from transfer_coin.payer import establish_payer
from transfer_coin.program import check_program, ensure_transferred_account
from transfer_coin.report import report_transfers
from transfer_coin.types import ClientContext, TransferredAccount
from transfer_coin.utils import derive_transferred_address

__all__ = [
    # Configuration
    "Settings",
    "load_settings",
    # Types
    "ClientContext",
    "TransferredAccount",
    "derive_transferred_address",
    # Steps
    "establish_connection",
    "establish_payer",
    "check_program",
    "ensure_transferred_account",
    "build_transfer_instruction",
    "transfer_coin",
    "report_transfers",
    # Errors
    "TransferCoinError",
    "ClusterConnectionError",
    "FundingError",
    "ConfigurationError",
    "DeploymentError",
    "SubmissionError",
    "AccountNotFoundError",
    "DecodeError",
]

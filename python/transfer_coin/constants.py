"""Constants for the transfer coin client."""

from pathlib import Path

# Seed used to derive the transferred account from the payer's key
TRANSFER_SEED = "transfer"

# Cluster defaults
DEFAULT_RPC_URL = "http://127.0.0.1:8899"
DEFAULT_COMMITMENT = "confirmed"
LAMPORTS_PER_SOL = 1_000_000_000

# Fallback when the node cannot price a message
DEFAULT_LAMPORTS_PER_SIGNATURE = 5000

# Rough margin of signatures' worth of fees kept on the payer
DEFAULT_FEE_MULTIPLIER = 100

# Deploy artifacts of the on-chain program
DEFAULT_PROGRAM_NAME = "transfercoin"
# Relative to the working directory the client is run from
DEFAULT_PROGRAM_DIR = Path("program-rust") / "target" / "deploy"

# Solana CLI config
DEFAULT_CLI_CONFIG_PATH = Path.home() / ".config" / "solana" / "cli" / "config.yml"

# Environment variables
ENV_RPC_URL = "SOLANA_RPC_URL"
ENV_CLI_CONFIG = "SOLANA_CLI_CONFIG"
ENV_PAYER_KEYPAIR = "TRANSFER_COIN_PAYER_KEYPAIR"
ENV_PROGRAM_DIR = "TRANSFER_COIN_PROGRAM_DIR"
ENV_FEE_MULTIPLIER = "TRANSFER_COIN_FEE_MULTIPLIER"
ENV_COMMITMENT = "TRANSFER_COIN_COMMITMENT"

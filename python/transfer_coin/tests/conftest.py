"""Shared fixtures: an in-memory ledger standing in for the RPC client."""

import json
from pathlib import Path
from types import SimpleNamespace

import httpx
import pytest
from solana.rpc.core import RPCException
from solders.hash import Hash
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.system_program import ID as SYSTEM_PROGRAM_ID

from transfer_coin.config import Settings
from transfer_coin.types import TransferredAccount

RENT_EXEMPT_LAMPORTS = 918_720
LAMPORTS_PER_SIGNATURE = 5000


def _resp(value):
    return SimpleNamespace(value=value)


class FakeLedger:
    """Implements the slice of ``solana.rpc.api.Client`` the client uses.

    Executes system create-with-seed instructions and the counter program's
    increment, and records every write so tests can count them.
    """

    def __init__(self):
        self.accounts: dict[Pubkey, SimpleNamespace] = {}
        self.balances: dict[Pubkey, int] = {}
        self.sent: list = []
        self.airdrops: list[tuple[Pubkey, int]] = []
        self.confirmations: list[Signature] = []
        self.unreachable = False
        self.fee: int | None = LAMPORTS_PER_SIGNATURE
        self.airdrop_error = None
        self.endpoint: str | None = None
        self.commitment = None

    # --- Test setup ---

    def factory(self, endpoint, commitment=None):
        self.endpoint = endpoint
        self.commitment = commitment
        return self

    def deploy(self, program_id: Pubkey, executable: bool = True) -> None:
        self.accounts[program_id] = SimpleNamespace(
            data=b"", executable=executable, owner=None, lamports=1
        )

    def set_counter(self, address: Pubkey, owner: Pubkey, counter: int) -> None:
        self.accounts[address] = SimpleNamespace(
            data=TransferredAccount(counter).to_bytes(),
            executable=False,
            owner=owner,
            lamports=RENT_EXEMPT_LAMPORTS,
        )

    def counter(self, address: Pubkey) -> int:
        return TransferredAccount.from_bytes(self.accounts[address].data).counter

    @property
    def writes(self) -> int:
        return len(self.sent) + len(self.airdrops)

    # --- RPC surface ---

    def get_version(self):
        if self.unreachable:
            raise httpx.ConnectError("Connection refused")
        return _resp(SimpleNamespace(solana_core="1.18.26", feature_set=1))

    def get_balance(self, pubkey, commitment=None):
        return _resp(self.balances.get(pubkey, 0))

    def get_minimum_balance_for_rent_exemption(self, usize, commitment=None):
        assert usize == TransferredAccount.SIZE
        return _resp(RENT_EXEMPT_LAMPORTS)

    def get_latest_blockhash(self, commitment=None):
        return _resp(SimpleNamespace(blockhash=Hash.default(), last_valid_block_height=1000))

    def get_fee_for_message(self, message, commitment=None):
        return _resp(self.fee)

    def get_account_info(self, pubkey, commitment=None):
        return _resp(self.accounts.get(pubkey))

    def request_airdrop(self, pubkey, lamports, commitment=None):
        if self.airdrop_error is not None:
            raise self.airdrop_error
        self.airdrops.append((pubkey, lamports))
        self.balances[pubkey] = self.balances.get(pubkey, 0) + lamports
        return _resp(Signature.default())

    def confirm_transaction(self, tx_sig, commitment=None, sleep_seconds=0.5, last_valid_block_height=None):
        self.confirmations.append(tx_sig)
        return _resp([SimpleNamespace(err=None, confirmation_status="confirmed")])

    def send_transaction(self, txn, opts=None):
        message = txn.message
        keys = message.account_keys
        payer = keys[0]
        if self.balances.get(payer, 0) < LAMPORTS_PER_SIGNATURE:
            raise RPCException("Attempt to debit an account but found no record of a prior credit.")
        self.balances[payer] -= LAMPORTS_PER_SIGNATURE

        for ix in message.instructions:
            program = keys[ix.program_id_index]
            accounts = [keys[i] for i in ix.accounts]
            if program == SYSTEM_PROGRAM_ID:
                self._create_account(payer, accounts[1], bytes(ix.data))
            elif program in self.accounts and self.accounts[program].executable:
                self._increment(program, accounts[0])
            else:
                raise RPCException(f"Unknown program {program}")

        self.sent.append(txn)
        return _resp(txn.signatures[0])

    def _create_account(self, payer: Pubkey, address: Pubkey, data: bytes) -> None:
        if address in self.accounts:
            raise RPCException(f"Create Account: account {address} already in use")
        self.balances[payer] -= RENT_EXEMPT_LAMPORTS
        # CreateAccountWithSeed data ends with the owner program id
        self.set_counter(address, Pubkey.from_bytes(data[-32:]), 0)

    def _increment(self, program: Pubkey, address: Pubkey) -> None:
        account = self.accounts.get(address)
        if account is None or account.owner != program:
            raise RPCException("Transferred account does not have the correct program id")
        record = TransferredAccount.from_bytes(account.data)
        record.counter += 1
        account.data = record.to_bytes()


def write_keypair(path: Path, keypair: Keypair) -> Path:
    path.write_text(json.dumps(list(bytes(keypair))))
    return path


@pytest.fixture
def ledger() -> FakeLedger:
    return FakeLedger()


@pytest.fixture
def program_keypair(tmp_path) -> Keypair:
    keypair = Keypair()
    write_keypair(tmp_path / "transfercoin-keypair.json", keypair)
    return keypair


@pytest.fixture
def payer_keypair(tmp_path) -> Keypair:
    keypair = Keypair()
    write_keypair(tmp_path / "payer.json", keypair)
    return keypair


@pytest.fixture
def settings(tmp_path, payer_keypair) -> Settings:
    return Settings(
        rpc_url="http://127.0.0.1:8899",
        payer_keypair_path=tmp_path / "payer.json",
        program_dir=tmp_path,
    )

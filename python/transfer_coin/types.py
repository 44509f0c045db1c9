"""Types for the transfer coin client."""

import struct
from dataclasses import dataclass
from typing import Any, ClassVar

from solders.keypair import Keypair  # type: ignore
from solders.pubkey import Pubkey  # type: ignore

from .config import Settings
from .errors import DecodeError

_COUNTER_LAYOUT = struct.Struct("<I")
_MAX_COUNTER = 2**32 - 1


@dataclass
class TransferredAccount:
    """State of an account managed by the transfer coin program.

    Layout is a single little-endian u32 ``counter``, owned and incremented
    by the program. The client only creates the account and reads it back.
    """

    counter: int = 0

    SIZE: ClassVar[int] = _COUNTER_LAYOUT.size

    def to_bytes(self) -> bytes:
        if not 0 <= self.counter <= _MAX_COUNTER:
            raise ValueError(f"counter must fit in a u32, got {self.counter}")
        return _COUNTER_LAYOUT.pack(self.counter)

    @classmethod
    def from_bytes(cls, data: bytes) -> "TransferredAccount":
        """Decode account data.

        Raises:
            DecodeError: If ``data`` is not exactly ``SIZE`` bytes long.
        """
        if len(data) != cls.SIZE:
            raise DecodeError(
                f"Expected {cls.SIZE} bytes of account data, got {len(data)}"
            )
        (counter,) = _COUNTER_LAYOUT.unpack(bytes(data))
        return cls(counter=counter)


@dataclass(frozen=True)
class ClientContext:
    """Everything resolved so far in a run.

    Each step takes the context produced by the previous one and returns a
    new context with its own fields filled in.
    """

    settings: Settings
    client: Any
    payer: Keypair | None = None
    program_id: Pubkey | None = None
    transferred_pubkey: Pubkey | None = None

    def require_payer(self) -> Keypair:
        if self.payer is None:
            raise RuntimeError("Payer has not been established")
        return self.payer

    def require_program_id(self) -> Pubkey:
        if self.program_id is None:
            raise RuntimeError("Program has not been checked")
        return self.program_id

    def require_transferred_pubkey(self) -> Pubkey:
        if self.transferred_pubkey is None:
            raise RuntimeError("Transferred account has not been derived")
        return self.transferred_pubkey

"""Errors raised by the transfer coin client.

Every step fails with exactly one of these. None of them is retried; they
propagate to the entry point, which reports them and exits non-zero.
"""


class TransferCoinError(Exception):
    """Base class for all transfer coin failures."""


class ClusterConnectionError(TransferCoinError, ConnectionError):
    """The RPC endpoint could not be reached."""


class FundingError(TransferCoinError):
    """The payer could not be funded."""


class ConfigurationError(TransferCoinError):
    """Local configuration or key material is missing or invalid."""


class DeploymentError(TransferCoinError):
    """The program is not deployed, or not executable."""


class SubmissionError(TransferCoinError):
    """A transaction was rejected or never confirmed."""


class AccountNotFoundError(TransferCoinError):
    """The transferred account does not exist on chain."""


class DecodeError(TransferCoinError, ValueError):
    """Account data does not match the expected layout."""

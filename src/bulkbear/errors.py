from __future__ import annotations


class BulkInsertError(Exception):
    """Base class for errors raised while building or running a bulk insert."""


class ArityMismatch(BulkInsertError, ValueError):
    """A row did not supply exactly one value per configured column."""

    def __init__(self, supplied: int, required: int):
        self.supplied = supplied
        self.required = required
        super().__init__(f'wrong number of values: supplied {supplied}, required {required}')


class ConfigurationError(BulkInsertError, ValueError):
    """Column list or placeholder limit cannot produce a valid statement."""


class _BatchFailure(BulkInsertError):

    def __init__(self, batch_index: int, statement: str, cause: BaseException):
        self.batch_index = batch_index
        self.statement = statement
        super().__init__(f'batch {batch_index}: {cause}')


class PrepareFailure(_BatchFailure):
    """The executor could not prepare a batch statement; later batches were skipped."""


class ExecuteFailure(_BatchFailure):
    """The executor could not run a prepared batch; later batches were skipped."""

from bulkbear.builder import BulkInsert
from bulkbear.config import DEFAULT_PLACEHOLDER_LIMIT, placeholder_limit_for
from bulkbear.dispatch import bulk_insert_frame
from bulkbear.errors import (
    ArityMismatch,
    BulkInsertError,
    ConfigurationError,
    ExecuteFailure,
    PrepareFailure,
)
from bulkbear.executor import DbapiExecutor, DryRunExecutor, Executor
from bulkbear.planner import Batch, plan_batches
from bulkbear.statement import upsert_clause

__all__ = [
    'ArityMismatch',
    'Batch',
    'BulkInsert',
    'BulkInsertError',
    'ConfigurationError',
    'DEFAULT_PLACEHOLDER_LIMIT',
    'DbapiExecutor',
    'DryRunExecutor',
    'ExecuteFailure',
    'Executor',
    'PrepareFailure',
    'bulk_insert_frame',
    'placeholder_limit_for',
    'plan_batches',
    'upsert_clause',
]

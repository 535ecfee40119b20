"""
Dispatch domain module
"""
from .models import (
    ItemKind,
    SubmissionPlan,
    FileItem,
    URLItem,
    TransferItem,
    TargetHint,
    ItemBatch,
    SubmissionResult,
    DispatchState,
    DispatchOutcome,
)
from .classifier import classify, classify_one
from .strategy import SubmissionStrategy, select_plan
from .dispatcher import SequentialDispatcher, AtomicDispatcher
from .reporter import Report, report
from .service import DispatchService

__all__ = [
    "ItemKind",
    "SubmissionPlan",
    "FileItem",
    "URLItem",
    "TransferItem",
    "TargetHint",
    "ItemBatch",
    "SubmissionResult",
    "DispatchState",
    "DispatchOutcome",
    "classify",
    "classify_one",
    "SubmissionStrategy",
    "select_plan",
    "SequentialDispatcher",
    "AtomicDispatcher",
    "Report",
    "report",
    "DispatchService",
]

"""
airdrop - share files and URLs via AirDrop from the command line

Hands a batch of local files and web URLs to the system sharing service:
- Atomic submission when the service accepts the whole batch
- Sequential one-at-a-time fallback for mixed or rejected batches
- Per-item success and failure accounting with a single exit status
"""

__version__ = "0.1.0"

# Export domain models
from .domain.dispatch import (
    FileItem,
    URLItem,
    ItemBatch,
    SubmissionPlan,
    SubmissionResult,
    DispatchOutcome,
    DispatchService,
    classify,
    select_plan,
    report,
)

# Export core components
from .core import TransferService, setup_logging

__all__ = [
    # Version
    "__version__",
    # Items
    "FileItem",
    "URLItem",
    "ItemBatch",
    # Dispatch
    "SubmissionPlan",
    "SubmissionResult",
    "DispatchOutcome",
    "DispatchService",
    "classify",
    "select_plan",
    "report",
    # Core
    "TransferService",
    "setup_logging",
]

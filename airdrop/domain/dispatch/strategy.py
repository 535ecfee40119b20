"""
Submission strategy selection

Chooses between one atomic submission and sequential per-item fallback
"""
from ...core.exceptions import EmptyBatchError
from ...core.interfaces import TransferService
from ...core.logging import get_logger
from .models import ItemBatch, SubmissionPlan

logger = get_logger(__name__)


class SubmissionStrategy:
    """Submission strategy selector"""

    @staticmethod
    def choose_plan(batch: ItemBatch, service: TransferService) -> SubmissionPlan:
        """
        Choose submission plan for a batch.

        Mixed URL and file batches are never submitted atomically, so the
        service is only asked for single-kind batches.

        Args:
            batch: Non-empty batch of items
            service: Transfer service asked via can_submit

        Returns:
            SubmissionPlan.ATOMIC or SubmissionPlan.SEQUENTIAL

        Raises:
            EmptyBatchError: If batch is empty
        """
        if not batch:
            raise EmptyBatchError("No valid files or URLs to share")

        if batch.is_mixed:
            logger.info("Mixed URLs and files, sharing items individually")
            return SubmissionPlan.SEQUENTIAL

        if service.can_submit(batch.items):
            return SubmissionPlan.ATOMIC

        logger.info("Service cannot take the batch at once, sharing items individually")
        return SubmissionPlan.SEQUENTIAL


def select_plan(batch: ItemBatch, service: TransferService) -> SubmissionPlan:
    """
    Convenience function to choose a submission plan.

    Args:
        batch: Non-empty batch of items
        service: Transfer service asked via can_submit

    Returns:
        Chosen SubmissionPlan
    """
    return SubmissionStrategy.choose_plan(batch, service)

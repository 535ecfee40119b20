"""
Dispatch service - main business logic
"""
import dataclasses
from typing import Optional, Union

from ...core.exceptions import DispatchError, EmptyBatchError
from ...core.interfaces import TransferService
from ...core.logging import get_logger
from ...core.telemetry import Telemetry, get_telemetry
from .dispatcher import AtomicDispatcher, ProgressCallback, SequentialDispatcher
from .models import DispatchOutcome, ItemBatch, SubmissionPlan, SubmissionResult, TargetHint
from .strategy import select_plan

logger = get_logger(__name__)


class DispatchService:
    """
    Dispatch service - pure business logic.
    
    Runs one dispatch per call: picks a submission plan, drives the matching
    dispatcher through the transfer service's event loop, and returns the outcome.
    """
    
    def __init__(
        self,
        transfer_service: TransferService,
        progress_callback: Optional[ProgressCallback] = None,
        telemetry: Optional[Telemetry] = None,
    ):
        """
        Initialize dispatch service.
        
        Args:
            transfer_service: External transfer capability
            progress_callback: Optional callback for each submission result
            telemetry: Telemetry collector (optional, uses global if None)
        """
        self.transfer_service = transfer_service
        self.progress_callback = progress_callback
        self.telemetry = telemetry or get_telemetry()
    
    def dispatch(self, batch: ItemBatch, target_hint: TargetHint = None) -> DispatchOutcome:
        """
        Dispatch a batch of items.
        
        Args:
            batch: Non-empty batch of items
            target_hint: Optional recipient name, recorded on the outcome only
        
        Returns:
            Final DispatchOutcome
        
        Raises:
            EmptyBatchError: If batch is empty
            DispatchError: If the event loop stops before the run drains
        """
        if not batch:
            raise EmptyBatchError("No valid files or URLs to share")
        
        if target_hint:
            logger.info(f"Target hint: {target_hint!r} (informational only)")
        
        plan = select_plan(batch, self.transfer_service)
        dispatcher: Union[AtomicDispatcher, SequentialDispatcher]
        if plan is SubmissionPlan.ATOMIC:
            dispatcher = AtomicDispatcher(self.transfer_service, self._on_result)
        else:
            dispatcher = SequentialDispatcher(self.transfer_service, self._on_result)
        
        self.telemetry.record_event("dispatch.started", {
            "plan": plan.value,
            "items": len(batch),
            "target_hint": target_hint,
        })
        
        outcomes: list[DispatchOutcome] = []
        
        def on_done(outcome: DispatchOutcome) -> None:
            outcomes.append(outcome)
            self.transfer_service.stop()
        
        self.transfer_service.run(lambda: dispatcher.start(batch, on_done))
        
        if not outcomes:
            raise DispatchError("Transfer service stopped before dispatch completed")
        
        outcome = dataclasses.replace(outcomes[0], target_hint=target_hint)
        
        self.telemetry.record_metric("dispatch.success", outcome.success_count, {"plan": plan.value})
        self.telemetry.record_metric("dispatch.failure", outcome.failure_count, {"plan": plan.value})
        self.telemetry.record_event("dispatch.completed", {
            "plan": plan.value,
            "success": outcome.success_count,
            "failure": outcome.failure_count,
        })
        logger.info(
            f"Dispatch completed ({plan.value}): "
            f"{outcome.success_count} successful, {outcome.failure_count} failed"
        )
        return outcome
    
    def _on_result(self, result: SubmissionResult) -> None:
        if not result.success:
            self.telemetry.record_event("dispatch.item_failed", {
                "items": [str(item) for item in result.items],
                "reason": result.reason,
                "rejected": result.rejected,
            })
        if self.progress_callback:
            self.progress_callback(result)

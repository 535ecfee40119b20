"""
Core interfaces for dependency injection
"""
from abc import ABC, abstractmethod
from typing import Callable, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from ..domain.dispatch.models import TransferItem


SuccessHandler = Callable[[], None]
FailureHandler = Callable[[str], None]


class TransferService(ABC):
    """
    External transfer capability.
    
    Completions are delivered asynchronously from inside ``run``; exactly one
    of the two handlers passed to ``submit`` fires per submission.
    """
    
    @abstractmethod
    def can_submit(self, items: Sequence["TransferItem"]) -> bool:
        """Check whether the service can attempt these items"""
        pass
    
    @abstractmethod
    def submit(
        self,
        items: Sequence["TransferItem"],
        on_success: SuccessHandler,
        on_failure: FailureHandler,
    ) -> None:
        """Submit items and register completion handlers"""
        pass
    
    @abstractmethod
    def run(self, on_ready: Callable[[], None]) -> None:
        """Deliver events until stop() is called, invoking on_ready once first"""
        pass
    
    @abstractmethod
    def stop(self) -> None:
        """Stop the event loop started by run()"""
        pass

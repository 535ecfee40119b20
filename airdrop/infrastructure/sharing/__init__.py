"""
Transfer service factory
"""
from typing import Optional

from ...core.constants import DEFAULT_SERVICE_NAME
from ...core.exceptions import CapabilityUnavailableError
from ...core.interfaces import TransferService
from ...core.logging import get_logger

logger = get_logger(__name__)


def create_transfer_service(
    service_name: str = DEFAULT_SERVICE_NAME,
    target_hint: Optional[str] = None,
) -> TransferService:
    """
    Create the platform transfer service.
    
    Args:
        service_name: Sharing service name
        target_hint: Optional recipient name (informational)
    
    Returns:
        Ready TransferService
    
    Raises:
        CapabilityUnavailableError: If AppKit is missing or the service does not exist
    """
    try:
        from .appkit import AppKitTransferService
    except ImportError as e:
        raise CapabilityUnavailableError(f"AppKit sharing is not available on this system: {e}") from e
    
    logger.debug(f"Creating sharing service {service_name}")
    return AppKitTransferService(service_name, target_hint=target_hint)


__all__ = ["create_transfer_service"]

"""
AppKit transfer service

Wraps NSSharingService through PyObjC. Only importable on macOS.
"""
from typing import Callable, List, Optional, Sequence

import objc
from AppKit import (
    NSApplication,
    NSApplicationActivationPolicyAccessory,
    NSBackingStoreBuffered,
    NSEvent,
    NSEventTypeApplicationDefined,
    NSPopUpMenuWindowLevel,
    NSSharingService,
    NSWindow,
    NSWindowStyleMaskClosable,
)
from Foundation import NSMakePoint, NSMakeRect, NSObject, NSURL
from PyObjCTools import AppHelper

from ...core.constants import PICKER_SOURCE_FRAME, PICKER_WINDOW_SIZE
from ...core.exceptions import CapabilityUnavailableError, DispatchError
from ...core.interfaces import FailureHandler, SuccessHandler, TransferService
from ...core.logging import get_logger
from ...domain.dispatch.models import FileItem, TransferItem

logger = get_logger(__name__)


class SharingDelegate(NSObject):
    """NSSharingServiceDelegate forwarding completions to its owner"""

    def initWithOwner_(self, owner):
        self = objc.super(SharingDelegate, self).init()
        if self is None:
            return None
        self.owner = owner
        return self

    def sharingService_didShareItems_(self, service, items):
        self.owner.complete(None)

    def sharingService_didFailToShareItems_error_(self, service, items, error):
        self.owner.complete(str(error.localizedDescription()))

    def sharingService_sourceFrameOnScreenForShareItem_(self, service, item):
        return NSMakeRect(*PICKER_SOURCE_FRAME)

    def sharingService_sourceWindowForShareItems_sharingContentScope_(self, service, items, scope):
        width, height = PICKER_WINDOW_SIZE
        window = NSWindow.alloc().initWithContentRect_styleMask_backing_defer_(
            NSMakeRect(0, 0, width, height),
            NSWindowStyleMaskClosable,
            NSBackingStoreBuffered,
            False,
        )
        window.center()
        window.setLevel_(NSPopUpMenuWindowLevel)
        window.makeKeyAndOrderFront_(None)
        # sharingContentScope is an in/out pointer, handed back unchanged
        return window, scope


def to_ns_url(item: TransferItem):
    if isinstance(item, FileItem):
        return NSURL.fileURLWithPath_(str(item.path))
    return NSURL.URLWithString_(item.url)


class AppKitTransferService(TransferService):
    """
    Transfer service backed by NSSharingService.

    The system picker handles device selection; the target hint is only logged.
    """

    def __init__(self, service_name: str, target_hint: Optional[str] = None):
        """
        Initialize AppKit transfer service.

        Args:
            service_name: NSSharingService name
            target_hint: Optional recipient name (informational)

        Raises:
            CapabilityUnavailableError: If no sharing service has that name
        """
        self.service_name = service_name
        self.target_hint = target_hint
        self._service = NSSharingService.sharingServiceNamed_(service_name)
        if self._service is None:
            raise CapabilityUnavailableError(f"Sharing service unavailable: {service_name}")

        self._delegate = SharingDelegate.alloc().initWithOwner_(self)
        self._service.setDelegate_(self._delegate)
        self._pending: Optional[tuple[SuccessHandler, FailureHandler]] = None
        self._errors: List[BaseException] = []

        if target_hint:
            logger.debug(f"Target hint {target_hint!r} left to the system picker")

    def _ns_items(self, items: Sequence[TransferItem]) -> Optional[list]:
        ns_items = [to_ns_url(item) for item in items]
        if any(ns_item is None for ns_item in ns_items):
            return None
        return ns_items

    def can_submit(self, items: Sequence[TransferItem]) -> bool:
        ns_items = self._ns_items(items)
        if ns_items is None:
            return False
        return bool(self._service.canPerformWithItems_(ns_items))

    def submit(
        self,
        items: Sequence[TransferItem],
        on_success: SuccessHandler,
        on_failure: FailureHandler,
    ) -> None:
        if self._pending is not None:
            raise DispatchError("A submission is already in flight")

        ns_items = self._ns_items(items)
        if ns_items is None:
            raise DispatchError(f"Cannot convert items for sharing: {', '.join(map(str, items))}")

        self._pending = (on_success, on_failure)
        self._service.performWithItems_(ns_items)

    def complete(self, reason: Optional[str]) -> None:
        """Deliver a completion from the delegate"""
        if self._pending is None:
            logger.warning("Sharing completion received with nothing in flight")
            return
        on_success, on_failure = self._pending
        self._pending = None
        if reason is None:
            self._guarded(on_success)
        else:
            self._guarded(lambda: on_failure(reason))

    def _guarded(self, callback: Callable[[], None]) -> None:
        # Exceptions raised inside the AppKit loop would otherwise only be logged
        try:
            callback()
        except Exception as e:
            self._errors.append(e)
            self.stop()

    def run(self, on_ready: Callable[[], None]) -> None:
        app = NSApplication.sharedApplication()
        app.setActivationPolicy_(NSApplicationActivationPolicyAccessory)

        AppHelper.callAfter(self._guarded, on_ready)
        app.run()

        if self._errors:
            raise self._errors[0]

    def stop(self) -> None:
        app = NSApplication.sharedApplication()
        app.stop_(None)
        # stop_ takes effect after the next event, so post one
        event = NSEvent.otherEventWithType_location_modifierFlags_timestamp_windowNumber_context_subtype_data1_data2_(
            NSEventTypeApplicationDefined,
            NSMakePoint(0, 0),
            0,
            0.0,
            0,
            None,
            0,
            0,
            0,
        )
        app.postEvent_atStart_(event, True)

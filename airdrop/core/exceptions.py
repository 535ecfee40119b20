"""
Unified exception definitions
"""


class AirDropError(Exception):
    """Base exception class"""
    pass


class ConfigError(AirDropError):
    """Configuration error"""
    pass


class InputClassificationError(AirDropError):
    """Input is neither an http(s) URL nor an existing path"""

    def __init__(self, raw: str):
        super().__init__(f"Invalid path or URL: {raw}")
        self.raw = raw


class EmptyBatchError(AirDropError):
    """No valid items left to dispatch"""
    pass


class CapabilityUnavailableError(AirDropError):
    """Transfer service cannot be constructed"""
    pass


class DispatchError(AirDropError):
    """Dispatch run protocol violation"""
    pass


class SubmissionRejected(AirDropError):
    """Transfer service refused an item before submission"""

    def __init__(self, item):
        super().__init__(f"Cannot share: {item}")
        self.item = item


class SubmissionFailed(AirDropError):
    """Transfer service reported a failed completion"""

    def __init__(self, item, reason: str):
        super().__init__(reason)
        self.item = item
        self.reason = reason

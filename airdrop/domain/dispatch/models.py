"""
Dispatch data models
"""
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import ClassVar, Deque, Iterable, Iterator, List, Optional, Tuple, Union

from ...core.constants import EXIT_OK, EXIT_FAILURE
from ...core.exceptions import AirDropError, SubmissionRejected


class ItemKind(str, Enum):
    """Transfer item kind"""
    FILE = "file"
    URL = "url"


class SubmissionPlan(str, Enum):
    """How a batch is handed to the transfer service"""
    ATOMIC = "atomic"          # one call for the whole batch
    SEQUENTIAL = "sequential"  # one call per item


@dataclass(frozen=True)
class FileItem:
    """Local file, verified to exist when classified"""
    path: Path

    kind: ClassVar[ItemKind] = ItemKind.FILE

    def __str__(self) -> str:
        return str(self.path)


@dataclass(frozen=True)
class URLItem:
    """Web URL with an http or https scheme"""
    url: str

    kind: ClassVar[ItemKind] = ItemKind.URL

    def __str__(self) -> str:
        return self.url


TransferItem = Union[FileItem, URLItem]
TargetHint = Optional[str]


@dataclass(frozen=True)
class ItemBatch:
    """Ordered, immutable sequence of transfer items"""
    items: Tuple[TransferItem, ...] = ()

    @classmethod
    def of(cls, items: Iterable[TransferItem]) -> "ItemBatch":
        return cls(tuple(items))

    @property
    def has_urls(self) -> bool:
        return any(item.kind is ItemKind.URL for item in self.items)

    @property
    def has_files(self) -> bool:
        return any(item.kind is ItemKind.FILE for item in self.items)

    @property
    def is_mixed(self) -> bool:
        """Both URLs and files present"""
        return self.has_urls and self.has_files

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[TransferItem]:
        return iter(self.items)

    def __bool__(self) -> bool:
        return bool(self.items)


@dataclass(frozen=True)
class SubmissionResult:
    """
    Completion of one submission.

    Sequential submissions carry a single item, atomic ones the whole batch.
    ``error`` is None on success, a SubmissionRejected when the service refused
    the item up front, or a SubmissionFailed for a failed completion.
    """
    items: Tuple[TransferItem, ...]
    error: Optional[AirDropError] = None

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def rejected(self) -> bool:
        return isinstance(self.error, SubmissionRejected)

    @property
    def reason(self) -> Optional[str]:
        return str(self.error) if self.error is not None else None


@dataclass
class DispatchState:
    """Mutable state of one sequential dispatch run"""
    remaining_items: Deque[TransferItem] = field(default_factory=deque)
    success_count: int = 0
    failure_count: int = 0
    results: List[SubmissionResult] = field(default_factory=list)

    @property
    def is_drained(self) -> bool:
        return not self.remaining_items


@dataclass(frozen=True)
class DispatchOutcome:
    """Final result of a dispatch run"""
    success_count: int
    failure_count: int
    plan: SubmissionPlan = SubmissionPlan.SEQUENTIAL
    results: Tuple[SubmissionResult, ...] = ()
    target_hint: TargetHint = None

    @property
    def total(self) -> int:
        return self.success_count + self.failure_count

    @property
    def exit_code(self) -> int:
        return EXIT_OK if self.failure_count == 0 else EXIT_FAILURE

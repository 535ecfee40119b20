from collections import deque
from typing import Callable, Dict, Iterable, Optional, Sequence

import pytest

from airdrop.core.interfaces import TransferService
from airdrop.domain.dispatch.models import FileItem, ItemBatch, URLItem


class FakeTransferService(TransferService):
    """
    Scripted transfer service.

    Completions are queued on submit and delivered later from run(), the way
    a platform event loop would deliver them.
    """

    def __init__(
        self,
        reject: Iterable[str] = (),
        fail: Optional[Dict[str, str]] = None,
        accept_batch: bool = True,
        batch_failure: Optional[str] = None,
        hang: bool = False,
    ):
        self.reject = set(reject)
        self.fail = fail or {}
        self.accept_batch = accept_batch
        self.batch_failure = batch_failure
        self.hang = hang

        self.capability_checks: list[tuple] = []
        self.submissions: list[tuple] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.stopped = False
        self._queue: deque = deque()
        self._running = False

    def can_submit(self, items: Sequence) -> bool:
        items = tuple(items)
        self.capability_checks.append(items)
        if len(items) > 1:
            return self.accept_batch
        return str(items[0]) not in self.reject

    def submit(self, items, on_success, on_failure) -> None:
        items = tuple(items)
        self.submissions.append(items)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)

        if len(items) > 1:
            reason = self.batch_failure
        else:
            reason = self.fail.get(str(items[0]))

        def deliver():
            self.in_flight -= 1
            if reason is None:
                on_success()
            else:
                on_failure(reason)

        if not self.hang:
            self._queue.append(deliver)

    def run(self, on_ready: Callable[[], None]) -> None:
        self._running = True
        self._queue.append(on_ready)
        while self._running and self._queue:
            self._queue.popleft()()

    def stop(self) -> None:
        self._running = False
        self.stopped = True


@pytest.fixture
def fake_service():
    return FakeTransferService()


@pytest.fixture
def make_files(tmp_path):
    """Create files in tmp_path and return their paths"""

    def _make(*names: str):
        paths = []
        for name in names:
            path = tmp_path / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(name)
            paths.append(path)
        return paths

    return _make


@pytest.fixture
def file_batch(make_files):
    """Three existing files as a batch"""
    paths = make_files("one.txt", "two.txt", "three.txt")
    return ItemBatch.of(FileItem(path=path.resolve()) for path in paths)


@pytest.fixture
def url_batch():
    return ItemBatch.of([
        URLItem("https://example.com/a"),
        URLItem("https://example.com/b"),
    ])


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep user configuration out of the tests"""
    for name in ("AIRDROP_CONFIG", "AIRDROP_LOG_LEVEL", "AIRDROP_LOG_FILE", "AIRDROP_SERVICE_NAME"):
        monkeypatch.delenv(name, raising=False)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))


@pytest.fixture
def make_service():
    """Factory for scripted transfer services"""
    return FakeTransferService

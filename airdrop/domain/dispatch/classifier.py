"""
Input classification

Turns raw command-line or stdin strings into transfer items
"""
from pathlib import Path
from typing import Iterable, List, Optional, Tuple
from urllib.parse import urlsplit

from ...core.constants import URL_SCHEMES
from ...core.exceptions import InputClassificationError
from ...core.logging import get_logger
from .models import FileItem, ItemBatch, TransferItem, URLItem

logger = get_logger(__name__)


def parse_url(raw: str) -> Optional[URLItem]:
    """
    Parse raw input as an absolute http(s) URL.

    Args:
        raw: Raw input string

    Returns:
        URLItem, or None if raw is not an absolute http/https URL
    """
    # unescaped whitespace or control characters make it a malformed URL
    if any(ch.isspace() or ord(ch) < 0x20 or ord(ch) == 0x7f for ch in raw):
        return None

    try:
        parts = urlsplit(raw)
    except ValueError:
        return None

    if parts.scheme.lower() not in URL_SCHEMES or not parts.netloc:
        return None
    return URLItem(url=raw)


def resolve_file(raw: str) -> Optional[FileItem]:
    """
    Resolve raw input as an existing filesystem entry.

    Args:
        raw: Raw input string

    Returns:
        FileItem with an absolute canonical path, or None if nothing exists there
    """
    if not raw.strip():
        return None

    path = Path(raw).expanduser()
    try:
        exists = path.exists()
    except OSError:
        # e.g. name too long
        exists = False
    if not exists:
        return None
    return FileItem(path=path.resolve())


def classify_one(raw: str) -> TransferItem:
    """
    Classify a single input, URL first.

    Raises:
        InputClassificationError: If raw is neither an http(s) URL nor an existing path
    """
    item = parse_url(raw) or resolve_file(raw)
    if item is None:
        raise InputClassificationError(raw)
    return item


def classify(raw_inputs: Iterable[str]) -> Tuple[ItemBatch, List[str]]:
    """
    Classify raw inputs into valid items and invalid inputs.

    Both outputs keep input order, and each input lands in exactly one of them.

    Args:
        raw_inputs: Paths or URLs as given by the user

    Returns:
        (batch, invalid) tuple
    """
    items: List[TransferItem] = []
    invalid: List[str] = []

    for raw in raw_inputs:
        try:
            item = classify_one(raw)
        except InputClassificationError as e:
            logger.debug(str(e))
            invalid.append(e.raw)
            continue
        logger.debug(f"Classified {raw!r} as {item.kind.value}")
        items.append(item)

    return ItemBatch.of(items), invalid

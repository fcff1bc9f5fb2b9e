# state.py
import json
import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, Optional

import aiofiles
import aiofiles.os

from .errors import StateCorruptError
from .utils import log


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ScanState:
    holders: set[str] = field(default_factory=set)
    last_page_cursor: Optional[str] = None
    total_holders: int = 0
    last_save_time: datetime = field(default_factory=utcnow)
    # reserved, never derived from the owners endpoint
    last_processed_block: int = 0

    def merge(self, addresses: Iterable[str]) -> int:
        """Add addresses to the holder set and return how many were new."""
        before = len(self.holders)
        self.holders.update(addresses)
        self.total_holders = len(self.holders)
        return self.total_holders - before

    def to_dict(self) -> dict:
        return {
            "last_processed_block": self.last_processed_block,
            "last_save_time": self.last_save_time.isoformat(),
            "total_holders": self.total_holders,
            "holders": sorted(self.holders),
            "last_page_key": self.last_page_cursor,
        }

    @classmethod
    def from_dict(cls, data) -> "ScanState":
        if not isinstance(data, dict):
            raise ValueError("state is not an object")

        holders = data["holders"]
        if not isinstance(holders, list) or not all(isinstance(h, str) for h in holders):
            raise ValueError("holders must be a list of strings")

        cursor = data.get("last_page_key")
        if cursor is not None and not isinstance(cursor, str):
            raise ValueError("last_page_key must be a string or null")

        block = data.get("last_processed_block", 0)
        if not isinstance(block, int):
            raise ValueError("last_processed_block must be an integer")

        state = cls(
            holders=set(holders),
            last_page_cursor=cursor or None,
            last_save_time=datetime.fromisoformat(data["last_save_time"]),
            last_processed_block=block,
        )
        state.total_holders = len(state.holders)

        stored_total = data.get("total_holders")
        if stored_total != state.total_holders:
            log(
                f"[yellow]state total_holders={stored_total} disagrees with "
                f"{state.total_holders} stored holders, using the holder set"
            )
        return state


class StateStore:
    """
    Owns data/state.json (resume checkpoint) and the sorted holder export.
    """

    def __init__(self, state_path: str, holders_path: str):
        self.state_path = state_path
        self.holders_path = holders_path

    # -------------------------
    async def load(self) -> ScanState:
        if not os.path.exists(self.state_path):
            return ScanState()

        try:
            async with aiofiles.open(self.state_path, "r", encoding="utf-8") as f:
                raw = await f.read()
            return ScanState.from_dict(json.loads(raw))
        except (UnicodeDecodeError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            raise StateCorruptError(
                f"{self.state_path} is unreadable ({e!r}); "
                "fix or remove it to start over"
            ) from e

    # -------------------------
    async def save(self, state: ScanState):
        serialized = json.dumps(state.to_dict(), indent=2)
        await self._replace(self.state_path, serialized)

    async def save_holder_list(self, holders: Iterable[str]):
        lines = "".join(f"{h}\n" for h in sorted(holders))
        await self._replace(self.holders_path, lines)

    # -------------------------
    async def _replace(self, path: str, text: str):
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        tmp = f"{path}.tmp"
        try:
            async with aiofiles.open(tmp, "w", encoding="utf-8") as f:
                await f.write(text)
            await aiofiles.os.replace(tmp, path)
        except BaseException:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise

# scanner.py
import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional

from rich.markup import escape

from .config import ScanConfig
from .errors import MalformedPageError, PersistError
from .fetch import OwnersPageSource
from .state import ScanState, StateStore, utcnow
from .utils import log


class ScanOutcome(str, Enum):
    COMPLETE = "complete"
    EMPTY_PAGE = "empty_page"
    MALFORMED = "malformed"


@dataclass
class ScanSummary:
    outcome: ScanOutcome
    total_holders: int
    new_holders: int
    pages_processed: int
    requests: int
    last_cursor: Optional[str]


class HolderScanner:
    """
    Drives fetch -> merge -> persist until the owners endpoint runs out of pages.

    State is written after every page, so a restart repeats at most the page
    that was in flight. Re-merging a page is a no-op for the holder set.
    """

    def __init__(
        self,
        config: ScanConfig,
        store: StateStore,
        source: OwnersPageSource,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.config = config
        self.store = store
        self.source = source
        self.sleep = sleep

        self.state: Optional[ScanState] = None
        self.pages_processed = 0
        self.request_count = 0

    # -------------------------
    async def run(self) -> ScanSummary:
        self.state = await self.store.load()
        state = self.state
        starting_total = len(state.holders)
        cursor = state.last_page_cursor

        log(f"Starting with {starting_total} existing holders")
        log(f"Last page key: {escape(str(cursor))}")

        while True:
            page_no = self.pages_processed + 1
            label = f"Page {page_no}"
            log(f"[cyan]Fetching {label}")

            self.request_count += 1
            try:
                page = await self.source.fetch(cursor, label=label)
            except MalformedPageError as e:
                log(f"[yellow]{label}: {escape(str(e))}; stopping with what we have")
                outcome = ScanOutcome.MALFORMED
                break

            log(f"{label}: {type(page).__name__} with {len(page.addresses)} addresses")
            if not page.addresses:
                log(f"[yellow]{label}: no owners in response, stopping")
                outcome = ScanOutcome.EMPTY_PAGE
                break

            added = state.merge(page.addresses)
            state.last_save_time = utcnow()
            state.last_page_cursor = page.next_cursor
            cursor = page.next_cursor
            log(
                f"{label}: added {added} new unique owners | "
                f"total={state.total_holders} | next={escape(str(cursor))}"
            )

            await self.persist(state, label)
            self.pages_processed += 1

            if cursor is None:
                log("[green]No more pages to fetch")
                outcome = ScanOutcome.COMPLETE
                break

            await self.sleep(self.config.page_delay)

        return ScanSummary(
            outcome=outcome,
            total_holders=state.total_holders,
            new_holders=state.total_holders - starting_total,
            pages_processed=self.pages_processed,
            requests=self.request_count,
            last_cursor=state.last_page_cursor,
        )

    # -------------------------
    async def persist(self, state: ScanState, label: str):
        try:
            await self.store.save(state)
        except OSError as e:
            raise PersistError(f"{label}: writing {self.store.state_path} failed: {e}") from e
        try:
            await self.store.save_holder_list(state.holders)
        except OSError as e:
            raise PersistError(f"{label}: writing {self.store.holders_path} failed: {e}") from e

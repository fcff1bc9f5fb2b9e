# main.py
import asyncio
import sys

import httpx
import uvloop
from rich.markup import escape

from .config import ScanConfig, load_env
from .errors import HolderScanError
from .fetch import OwnersPageSource
from .scanner import HolderScanner
from .state import StateStore
from .utils import console, log


async def main() -> int:
    load_env()
    try:
        config = ScanConfig.from_env()
    except HolderScanError as e:
        log(f"[red]Configuration error: {escape(str(e))}")
        return 1

    store = StateStore(config.state_path, config.holders_path)
    start_time = asyncio.get_running_loop().time()

    async with httpx.AsyncClient(
        http2=True,
        timeout=config.request_timeout,
        follow_redirects=True,
    ) as client:
        scanner = HolderScanner(config, store, OwnersPageSource(client, config))
        try:
            summary = await scanner.run()
        except HolderScanError as e:
            log(f"[red]{type(e).__name__}: {escape(str(e))}")
            log(
                f"[yellow]Progress is saved up to page {scanner.pages_processed}; "
                "re-run to resume"
            )
            return 1

    elapsed = asyncio.get_running_loop().time() - start_time
    console.rule("Scan complete")
    log(f"Results saved to {config.state_path} and {config.holders_path}")
    log(f"Outcome: {summary.outcome.value}")
    log(f"Total unique holders: {summary.total_holders} (+{summary.new_holders} this run)")
    log(f"Total pages processed: {summary.pages_processed}")
    log(f"Total time: {elapsed:.2f} seconds")
    return 0


def cli():
    try:
        code = uvloop.run(main())
    except KeyboardInterrupt:
        log("\n[yellow]Interrupted. Last completed page is saved; re-run to resume.")
        code = 130
    sys.exit(code)


if __name__ == "__main__":
    cli()

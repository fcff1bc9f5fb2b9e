# fetch.py
import json
import re
from typing import Any, Optional

import demjson3
import httpx

from .config import ScanConfig
from .errors import FetchError, MalformedPageError
from .pages import ParsedPage, parse_page
from .utils import console, log, redact

HEADERS = {"accept": "application/json"}


def repair_broken_json(raw: str) -> str:
    raw = re.sub(r"[\x00-\x1F\x7F]", "", raw)
    raw = re.sub(r",\s*,+", ",", raw)
    raw = re.sub(r",\s*]", "]", raw)
    raw = re.sub(r",\s*}", "}", raw)
    return raw


def decode_body(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass
    try:
        return demjson3.decode(repair_broken_json(text))
    except demjson3.JSONDecodeError as e:
        raise MalformedPageError(f"response is not JSON: {e}") from e


class OwnersPageSource:
    """
    One GET per page against getOwnersForContract.
    """

    def __init__(self, client: httpx.AsyncClient, config: ScanConfig):
        self.client = client
        self.config = config

    def params(self, cursor: Optional[str]) -> dict:
        params = {
            "contractAddress": self.config.contract_address,
            "withTokenBalances": "true",
        }
        if cursor:
            params["pageKey"] = cursor
        return params

    # -------------------------
    async def fetch(self, cursor: Optional[str], label: str = "") -> ParsedPage:
        url = self.config.endpoint
        params = self.params(cursor)
        try:
            resp = await self.client.get(url, params=params, headers=HEADERS)
            log(f"{label} GET {redact(str(resp.request.url), self.config.api_key)}")
            log(f"{label} HTTP {resp.status_code}")
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FetchError(
                f"{label}: HTTP {e.response.status_code} from owners endpoint"
            ) from e
        except httpx.HTTPError as e:
            raise FetchError(
                f"{label}: request failed ({type(e).__name__}: "
                f"{redact(str(e), self.config.api_key)})"
            ) from e

        data = decode_body(resp.text)
        if self.config.verbose:
            console.print_json(data=data, default=str)
        return parse_page(data)

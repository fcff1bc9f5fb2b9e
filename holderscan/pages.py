# pages.py
"""
Recognized page shapes of the owners endpoint.

A decoded body becomes exactly one of:
  Owners       {"owners": [{"ownerAddress": ...}, ...], "pageKey": ...}
  FlatResult   {"result": ["0x...", ...], "pageKey": ...}
  Unrecognized anything else (no addresses)
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Union


@dataclass(frozen=True)
class Owners:
    addresses: list[str]
    next_cursor: Optional[str] = None


@dataclass(frozen=True)
class FlatResult:
    addresses: list[str]
    next_cursor: Optional[str] = None


@dataclass(frozen=True)
class Unrecognized:
    next_cursor: Optional[str] = None
    addresses: list[str] = field(default_factory=list)


ParsedPage = Union[Owners, FlatResult, Unrecognized]


def page_cursor(data: dict) -> Optional[str]:
    key = data.get("pageKey")
    if isinstance(key, str) and key:
        return key
    return None


def parse_page(data: Any) -> ParsedPage:
    if not isinstance(data, dict):
        return Unrecognized()

    cursor = page_cursor(data)

    owners = data.get("owners")
    if isinstance(owners, list):
        addresses = []
        for owner in owners:
            if not isinstance(owner, dict):
                continue
            addr = owner.get("ownerAddress")
            if isinstance(addr, str):
                addresses.append(addr)
        return Owners(addresses, cursor)

    result = data.get("result")
    if isinstance(result, list):
        return FlatResult([a for a in result if isinstance(a, str)], cursor)

    return Unrecognized(cursor)

# utils.py
from rich.console import Console

console = Console()


def log(msg: str):
    console.log(msg)


def redact(url: str, secret: str) -> str:
    if not secret:
        return url
    return url.replace(secret, "***")

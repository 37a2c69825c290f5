"""Helpers for building Discord API requests."""

from __future__ import annotations


def build_headers(token: str, user_agent: str) -> dict[str, str]:
    """Return the request headers; the token is sent verbatim without a scheme prefix."""

    return {
        "Authorization": token,
        "Content-Type": "application/json",
        "User-Agent": user_agent,
    }


def mask_token(token: str, visible: int = 4) -> str:
    """Return a log-safe rendition of ``token``."""

    if len(token) <= visible * 2:
        return "*" * len(token)
    return f"{token[:visible]}...{token[-visible:]}"

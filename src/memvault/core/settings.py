"""Settings loader for memvault."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, cast

from dotenv import find_dotenv, load_dotenv

Transport = Literal["stdio", "sse", "streamable-http"]

DEFAULT_STORAGE_ROOT = Path("~") / ".mcp" / "memories"


@dataclass(frozen=True)
class Settings:
    storage_root: Path
    log_level: str
    transport: Transport
    server_name: str


def _parse_transport(value: str) -> Transport:
    normalized = value.strip().lower()
    if normalized not in {"stdio", "sse", "streamable-http"}:
        raise ValueError(f"Invalid value for MEMVAULT_TRANSPORT: {value}")
    return cast(Transport, normalized)


def _parse_log_level(value: str) -> str:
    normalized = value.strip().upper()
    if not isinstance(logging.getLevelName(normalized), int):
        raise ValueError(f"Invalid value for MEMVAULT_LOG_LEVEL: {value}")
    return normalized


def load_settings() -> Settings:
    load_dotenv(find_dotenv(usecwd=True))
    storage_root = Path(
        os.environ.get("MEMVAULT_ROOT", str(DEFAULT_STORAGE_ROOT))
    ).expanduser()
    log_level = _parse_log_level(os.environ.get("MEMVAULT_LOG_LEVEL", "INFO"))
    transport = _parse_transport(os.environ.get("MEMVAULT_TRANSPORT", "stdio"))
    server_name = os.environ.get("MEMVAULT_SERVER_NAME", "memory")

    return Settings(
        storage_root=storage_root,
        log_level=log_level,
        transport=transport,
        server_name=server_name,
    )

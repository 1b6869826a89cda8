# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional, Tuple

import yaml

from musicauth.errors import ConfigError

log = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = os.getenv("MUSICAUTH_CONFIG_PATH", "configs/authserver.yml")


@dataclass
class Config:
    bind_addr: str = "127.0.0.1:8080"
    database_url: str = ""
    session_key: str = ""
    cors_origin: str = "http://localhost"
    log_level: str = "info"
    password_time_cost: Optional[int] = None
    password_memory_cost: Optional[int] = None
    password_parallelism: Optional[int] = None

    def bind(self) -> Tuple[str, int]:
        """Split ``host:port``; an empty host means all interfaces."""
        host, sep, port = self.bind_addr.rpartition(":")
        if not sep or not port.isdigit():
            raise ConfigError(f"bad bind_addr {self.bind_addr!r}")
        return (host or "0.0.0.0"), int(port)


def load_config(path: Optional[str] = None) -> Config:
    p = Path(path or DEFAULT_CONFIG_PATH)
    raw = {}
    if p.exists():
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
        if not isinstance(raw, dict):
            raise ConfigError(f"{p}: expected a mapping at top level")

    known = {f.name for f in fields(Config)}
    cfg = Config(**{k: v for k, v in raw.items() if k in known})
    for k in sorted(set(raw) - known):
        log.warning("%s: ignoring unknown config key %r", p, k)

    cfg.database_url = os.getenv("MUSICAUTH_DATABASE_URL", cfg.database_url)
    cfg.session_key = os.getenv("MUSICAUTH_SESSION_KEY", cfg.session_key)
    return cfg

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class AuthConfig:
    base_url: str = os.getenv("TCHIN_AUTH_URL", "http://localhost:4000")
    verify_path: str = "/verify"
    timeout: float = 5.0


DEFAULT_AUTH_CONFIG = AuthConfig()

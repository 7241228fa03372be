from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

BACKEND_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


@dataclass
class Settings:
    """
    Env:
      SITES_CSV_PATH            CSV with the sites (default viewer-backend/data/Sites.csv)
      STATIC_DIR                frontend directory served at / (default viewer-backend/public)
      BASIC_AUTH_USER           Basic auth is enabled only when both user and
      BASIC_AUTH_PASS           password are set
      HOST, PORT                bind address for `python -m app` (0.0.0.0:3000)
      CSV_READ_TIMEOUT_SECONDS  bound on stat/read of the CSV (default 5)
    """

    csv_path: str
    static_dir: str
    auth_user: Optional[str] = None
    auth_pass: Optional[str] = None
    host: str = "0.0.0.0"
    port: int = 3000
    read_timeout: float = 5.0

    @property
    def auth_enabled(self) -> bool:
        return bool(self.auth_user and self.auth_pass)

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            csv_path=os.getenv("SITES_CSV_PATH", os.path.join(BACKEND_ROOT, "data", "Sites.csv")),
            static_dir=os.getenv("STATIC_DIR", os.path.join(BACKEND_ROOT, "public")),
            auth_user=os.getenv("BASIC_AUTH_USER") or None,
            auth_pass=os.getenv("BASIC_AUTH_PASS") or None,
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3000")),
            read_timeout=float(os.getenv("CSV_READ_TIMEOUT_SECONDS", "5")),
        )

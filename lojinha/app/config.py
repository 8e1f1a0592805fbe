"""Runtime settings read from the environment (and a ``.env`` file if present)."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv  # type: ignore

from ..core.types import BackendMode


@dataclass
class Settings:
    api_url: str = "http://localhost:3000/api"
    backend: BackendMode = BackendMode.REMOTE
    storage_dir: str = ".lojinha"
    timeout: float = 5.0
    whatsapp_number: str = ""
    dry_run: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        backend = (os.getenv("LOJINHA_BACKEND") or "remote").strip().lower()
        return cls(
            api_url=os.getenv("LOJINHA_API_URL", cls.api_url),
            backend=BackendMode(backend),
            storage_dir=os.getenv("LOJINHA_STORAGE_DIR", cls.storage_dir),
            timeout=float(os.getenv("LOJINHA_TIMEOUT", cls.timeout)),
            whatsapp_number=os.getenv("LOJINHA_WHATSAPP_NUMBER", cls.whatsapp_number),
            dry_run=os.getenv("LOJINHA_DRY_RUN") == "1",
            log_level=(os.getenv("LOJINHA_LOG_LEVEL") or cls.log_level).upper(),
        )

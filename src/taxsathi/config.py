from __future__ import annotations

import os
import secrets
from dataclasses import dataclass
from pathlib import Path

BACKEND_LOCAL = "local"
BACKEND_SUPABASE = "supabase"


class ConfigError(Exception):
    """Raised when the environment does not describe a usable setup."""


@dataclass
class Settings:
    backend: str = BACKEND_LOCAL
    data_dir: Path = Path.home() / ".taxsathi"
    supabase_url: str = ""
    supabase_key: str = ""
    documents_bucket: str = "documents"
    secret_key: str = ""
    log_level: str = "INFO"
    max_upload_mb: int = 20

    @property
    def db_path(self) -> Path:
        return self.data_dir / "taxsathi.db"

    @property
    def storage_dir(self) -> Path:
        return self.data_dir / "storage"

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024

    @classmethod
    def from_env(cls) -> Settings:
        backend = os.environ.get("TAXSATHI_BACKEND", BACKEND_LOCAL).strip().lower()
        if backend not in (BACKEND_LOCAL, BACKEND_SUPABASE):
            raise ConfigError(f"Unknown TAXSATHI_BACKEND {backend!r}")

        settings = cls(
            backend=backend,
            data_dir=Path(os.environ.get("TAXSATHI_DATA_DIR", cls.data_dir)).expanduser(),
            supabase_url=os.environ.get("SUPABASE_URL", ""),
            supabase_key=os.environ.get("SUPABASE_KEY", ""),
            documents_bucket=os.environ.get("TAXSATHI_DOCUMENTS_BUCKET", "documents"),
            secret_key=os.environ.get("TAXSATHI_SECRET_KEY") or secrets.token_hex(32),
            log_level=os.environ.get("TAXSATHI_LOG_LEVEL", "INFO"),
        )
        try:
            settings.max_upload_mb = int(os.environ.get("TAXSATHI_MAX_UPLOAD_MB", "20"))
        except ValueError as exc:
            raise ConfigError("TAXSATHI_MAX_UPLOAD_MB must be an integer") from exc

        if backend == BACKEND_SUPABASE and not (settings.supabase_url and settings.supabase_key):
            raise ConfigError("SUPABASE_URL and SUPABASE_KEY are required for the supabase backend")
        return settings

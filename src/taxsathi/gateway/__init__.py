"""The single boundary through which the site reads and writes remote data.

Every dashboard screen talks to a :class:`Gateway`: table-scoped select,
insert, update and delete; object storage upload, download and remove; and
session authentication. Nothing is cached, retried or batched here.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Sequence

from taxsathi.config import BACKEND_SUPABASE, Settings

# Tables whose rows carry a user_id; reads and writes are scoped to the caller.
OWNED_TABLES = frozenset({"clients", "services", "documents", "appointments"})


class GatewayError(Exception):
    """A remote operation failed. No finer classification is made."""


@dataclass(frozen=True)
class UserContext:
    user_id: str
    email: str
    access_token: str
    refresh_token: str = ""

    def to_session(self) -> dict[str, str]:
        return {
            "user_id": self.user_id,
            "email": self.email,
            "access_token": self.access_token,
            "refresh_token": self.refresh_token,
        }

    @classmethod
    def from_session(cls, data: dict[str, Any] | None) -> UserContext | None:
        if not data or not data.get("user_id") or not data.get("access_token"):
            return None
        return cls(
            user_id=data["user_id"],
            email=data.get("email", ""),
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token", ""),
        )


@dataclass(frozen=True)
class Relation:
    """A to-one join whose display field is flattened into the row as ``alias``."""

    table: str
    column: str
    field: str
    alias: str


class Gateway(ABC):
    @abstractmethod
    def select(
        self,
        ctx: UserContext | None,
        table: str,
        columns: str = "*",
        relations: Sequence[Relation] = (),
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]: ...

    @abstractmethod
    def get(self, ctx: UserContext | None, table: str, record_id: str) -> dict[str, Any]: ...

    @abstractmethod
    def insert(self, ctx: UserContext | None, table: str, values: dict[str, Any]) -> dict[str, Any]: ...

    @abstractmethod
    def update(
        self, ctx: UserContext | None, table: str, record_id: str, values: dict[str, Any]
    ) -> dict[str, Any]: ...

    @abstractmethod
    def delete(self, ctx: UserContext | None, table: str, record_id: str) -> None: ...

    @abstractmethod
    def upload(
        self, ctx: UserContext, bucket: str, path: str, data: bytes, content_type: str
    ) -> str: ...

    @abstractmethod
    def download(self, ctx: UserContext, bucket: str, path: str) -> bytes: ...

    @abstractmethod
    def remove(self, ctx: UserContext, bucket: str, paths: Sequence[str]) -> None: ...

    @abstractmethod
    def sign_up(self, email: str, password: str, full_name: str = "") -> UserContext | None: ...

    @abstractmethod
    def sign_in(self, email: str, password: str) -> UserContext: ...

    @abstractmethod
    def sign_out(self, ctx: UserContext) -> None: ...

    @abstractmethod
    def get_user(self, ctx: UserContext) -> UserContext: ...

    @staticmethod
    def _require_owner(ctx: UserContext | None, table: str) -> None:
        if table in OWNED_TABLES and ctx is None:
            raise GatewayError(f"{table} requires an authenticated user")


def build_gateway(settings: Settings) -> Gateway:
    if settings.backend == BACKEND_SUPABASE:
        from taxsathi.gateway.supabase import SupabaseGateway

        return SupabaseGateway(settings.supabase_url, settings.supabase_key)

    from taxsathi.gateway.local import LocalGateway

    return LocalGateway(settings.db_path, settings.storage_dir)

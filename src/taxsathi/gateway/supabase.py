"""Hosted backend reached through the supabase client.

A fresh client is built per call and bound to the caller's session, so the
backend's row-level security sees the same user the dashboard does.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Sequence

import httpx
from supabase import AuthError, Client, PostgrestAPIError, StorageException, create_client

from taxsathi.gateway import OWNED_TABLES, Gateway, GatewayError, Relation, UserContext

logger = logging.getLogger(__name__)


@contextmanager
def _guard(action: str) -> Iterator[None]:
    try:
        yield
    except (PostgrestAPIError, StorageException, AuthError, httpx.HTTPError) as exc:
        raise GatewayError(f"{action}: {exc}") from exc


def _context(session: Any) -> UserContext:
    return UserContext(
        user_id=session.user.id,
        email=session.user.email or "",
        access_token=session.access_token,
        refresh_token=session.refresh_token,
    )


class SupabaseGateway(Gateway):
    def __init__(self, url: str, key: str) -> None:
        self.url = url
        self.key = key

    def _client(self, ctx: UserContext | None = None) -> Client:
        client = create_client(self.url, self.key)
        if ctx is not None:
            client.auth.set_session(ctx.access_token, ctx.refresh_token)
        return client

    def _owned(self, query: Any, ctx: UserContext | None, table: str) -> Any:
        self._require_owner(ctx, table)
        if table in OWNED_TABLES:
            query = query.eq("user_id", ctx.user_id)
        return query

    @staticmethod
    def _flatten(row: dict[str, Any], relations: Sequence[Relation]) -> dict[str, Any]:
        for rel in relations:
            nested = row.pop(rel.table, None)
            row[rel.alias] = nested.get(rel.field) if nested else None
        return row

    # -- tables --------------------------------------------------------------

    def select(
        self,
        ctx: UserContext | None,
        table: str,
        columns: str = "*",
        relations: Sequence[Relation] = (),
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        embedded = "".join(f", {rel.table}({rel.field})" for rel in relations)
        with _guard(f"select {table}"):
            query = self._client(ctx).table(table).select(columns + embedded)
            query = self._owned(query, ctx, table)
            if order_by:
                query = query.order(order_by, desc=descending)
            response = query.execute()
        return [self._flatten(row, relations) for row in response.data or []]

    def get(self, ctx: UserContext | None, table: str, record_id: str) -> dict[str, Any]:
        with _guard(f"get {table}"):
            query = self._client(ctx).table(table).select("*").eq("id", record_id)
            response = self._owned(query, ctx, table).limit(1).execute()
        if not response.data:
            raise GatewayError(f"No {table} row with id {record_id}")
        return response.data[0]

    def insert(self, ctx: UserContext | None, table: str, values: dict[str, Any]) -> dict[str, Any]:
        self._require_owner(ctx, table)
        row = dict(values)
        if table in OWNED_TABLES:
            row["user_id"] = ctx.user_id
        with _guard(f"insert {table}"):
            response = self._client(ctx).table(table).insert(row).execute()
        if not response.data:
            raise GatewayError(f"Insert into {table} returned no row")
        return response.data[0]

    def update(
        self, ctx: UserContext | None, table: str, record_id: str, values: dict[str, Any]
    ) -> dict[str, Any]:
        with _guard(f"update {table}"):
            query = self._client(ctx).table(table).update(values).eq("id", record_id)
            response = self._owned(query, ctx, table).execute()
        if not response.data:
            raise GatewayError(f"No {table} row with id {record_id}")
        return response.data[0]

    def delete(self, ctx: UserContext | None, table: str, record_id: str) -> None:
        with _guard(f"delete {table}"):
            query = self._client(ctx).table(table).delete().eq("id", record_id)
            response = self._owned(query, ctx, table).execute()
        if not response.data:
            raise GatewayError(f"No {table} row with id {record_id}")

    # -- storage -------------------------------------------------------------

    def upload(
        self, ctx: UserContext, bucket: str, path: str, data: bytes, content_type: str
    ) -> str:
        with _guard(f"upload {path}"):
            self._client(ctx).storage.from_(bucket).upload(
                path, data, {"content-type": content_type}
            )
        return path

    def download(self, ctx: UserContext, bucket: str, path: str) -> bytes:
        with _guard(f"download {path}"):
            return self._client(ctx).storage.from_(bucket).download(path)

    def remove(self, ctx: UserContext, bucket: str, paths: Sequence[str]) -> None:
        with _guard("remove " + ", ".join(paths)):
            self._client(ctx).storage.from_(bucket).remove(list(paths))

    # -- auth ----------------------------------------------------------------

    def sign_up(self, email: str, password: str, full_name: str = "") -> UserContext | None:
        with _guard("sign up"):
            response = self._client().auth.sign_up(
                {
                    "email": email,
                    "password": password,
                    "options": {"data": {"full_name": full_name}},
                }
            )
        if response.session is None:
            # Email confirmation pending; no session until the link is followed.
            return None
        return _context(response.session)

    def sign_in(self, email: str, password: str) -> UserContext:
        with _guard("sign in"):
            response = self._client().auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        if response.session is None:
            raise GatewayError("Sign in returned no session")
        return _context(response.session)

    def sign_out(self, ctx: UserContext) -> None:
        with _guard("sign out"):
            self._client(ctx).auth.sign_out()

    def get_user(self, ctx: UserContext) -> UserContext:
        with _guard("get user"):
            session = self._client(ctx).auth.get_session()
        if session is None:
            raise GatewayError("Session expired or revoked")
        return _context(session)

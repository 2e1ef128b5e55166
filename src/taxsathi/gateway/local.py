"""sqlite + filesystem backend for development and tests.

Mirrors the hosted backend closely enough that screens cannot tell the two
apart: owned tables are filtered by user_id, storage paths are namespaced by
the owner, and sessions are opaque bearer tokens.
"""
from __future__ import annotations

import logging
import re
import secrets
import sqlite3
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from taxsathi.db import get_db, init_db
from taxsathi.gateway import OWNED_TABLES, Gateway, GatewayError, Relation, UserContext

logger = logging.getLogger(__name__)

_IDENTIFIER = re.compile(r"^[a-z_][a-z0-9_]*$")
_TIMESTAMPED = frozenset({"clients", "services", "appointments", "profiles"})


def _ident(name: str) -> str:
    if not _IDENTIFIER.match(name):
        raise GatewayError(f"Invalid identifier {name!r}")
    return name


class LocalGateway(Gateway):
    def __init__(self, db_path: Path, storage_dir: Path) -> None:
        self.db_path = db_path
        self.storage_dir = storage_dir
        init_db(db_path)
        storage_dir.mkdir(parents=True, exist_ok=True)

    @contextmanager
    def _guard(self, action: str) -> Iterator[None]:
        try:
            yield
        except sqlite3.Error as exc:
            raise GatewayError(f"{action}: {exc}") from exc
        except OSError as exc:
            raise GatewayError(f"{action}: {exc}") from exc

    def _scope(self, ctx: UserContext | None, table: str, alias: str = "") -> tuple[str, list[Any]]:
        self._require_owner(ctx, table)
        if table in OWNED_TABLES:
            prefix = f"{alias}." if alias else ""
            return f" AND {prefix}user_id = ?", [ctx.user_id]
        return "", []

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
        table = _ident(table)
        fields = [
            "t.*" if col.strip() == "*" else f"t.{_ident(col.strip())}"
            for col in columns.split(",")
        ]
        joins = []
        for i, rel in enumerate(relations):
            fields.append(f"r{i}.{_ident(rel.field)} AS {_ident(rel.alias)}")
            joins.append(
                f"LEFT JOIN {_ident(rel.table)} r{i} ON t.{_ident(rel.column)} = r{i}.id"
            )
        where, params = self._scope(ctx, table, "t")
        sql = f"SELECT {', '.join(fields)} FROM {table} t {' '.join(joins)} WHERE 1 = 1{where}"
        if order_by:
            sql += f" ORDER BY t.{_ident(order_by)} {'DESC' if descending else 'ASC'}"
        with self._guard(f"select {table}"), get_db(self.db_path) as db:
            return [dict(row) for row in db.execute(sql, params).fetchall()]

    def get(self, ctx: UserContext | None, table: str, record_id: str) -> dict[str, Any]:
        table = _ident(table)
        where, params = self._scope(ctx, table)
        with self._guard(f"get {table}"), get_db(self.db_path) as db:
            row = db.execute(
                f"SELECT * FROM {table} WHERE id = ?{where}", [record_id, *params]
            ).fetchone()
        if row is None:
            raise GatewayError(f"No {table} row with id {record_id}")
        return dict(row)

    def insert(self, ctx: UserContext | None, table: str, values: dict[str, Any]) -> dict[str, Any]:
        table = _ident(table)
        self._require_owner(ctx, table)
        row = dict(values)
        row.setdefault("id", str(uuid.uuid4()))
        if table in OWNED_TABLES:
            row["user_id"] = ctx.user_id
        columns = [_ident(c) for c in row]
        placeholders = ", ".join("?" for _ in columns)
        with self._guard(f"insert {table}"), get_db(self.db_path) as db:
            db.execute(
                f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders})",
                list(row.values()),
            )
            created = db.execute(f"SELECT * FROM {table} WHERE id = ?", (row["id"],)).fetchone()
        return dict(created)

    def update(
        self, ctx: UserContext | None, table: str, record_id: str, values: dict[str, Any]
    ) -> dict[str, Any]:
        table = _ident(table)
        changes = {k: v for k, v in values.items() if k not in ("id", "user_id")}
        assignments = [f"{_ident(c)} = ?" for c in changes]
        if table in _TIMESTAMPED and "updated_at" not in changes:
            assignments.append("updated_at = strftime('%Y-%m-%dT%H:%M:%fZ', 'now')")
        if not assignments:
            raise GatewayError(f"Nothing to update in {table}")
        where, params = self._scope(ctx, table)
        with self._guard(f"update {table}"), get_db(self.db_path) as db:
            cur = db.execute(
                f"UPDATE {table} SET {', '.join(assignments)} WHERE id = ?{where}",
                [*changes.values(), record_id, *params],
            )
            if cur.rowcount == 0:
                raise GatewayError(f"No {table} row with id {record_id}")
            row = db.execute(f"SELECT * FROM {table} WHERE id = ?", (record_id,)).fetchone()
        return dict(row)

    def delete(self, ctx: UserContext | None, table: str, record_id: str) -> None:
        table = _ident(table)
        where, params = self._scope(ctx, table)
        with self._guard(f"delete {table}"), get_db(self.db_path) as db:
            cur = db.execute(f"DELETE FROM {table} WHERE id = ?{where}", [record_id, *params])
            if cur.rowcount == 0:
                raise GatewayError(f"No {table} row with id {record_id}")

    # -- storage -------------------------------------------------------------

    def _blob(self, ctx: UserContext, bucket: str, path: str) -> Path:
        if not path.startswith(f"{ctx.user_id}/"):
            raise GatewayError(f"Path {path!r} is outside the caller's folder")
        root = (self.storage_dir / _ident(bucket)).resolve()
        target = (root / path).resolve()
        if not target.is_relative_to(root):
            raise GatewayError(f"Path {path!r} escapes bucket {bucket!r}")
        return target

    def upload(
        self, ctx: UserContext, bucket: str, path: str, data: bytes, content_type: str
    ) -> str:
        target = self._blob(ctx, bucket, path)
        if target.exists():
            raise GatewayError(f"The resource already exists: {path}")
        with self._guard(f"upload {path}"):
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        return path

    def download(self, ctx: UserContext, bucket: str, path: str) -> bytes:
        target = self._blob(ctx, bucket, path)
        with self._guard(f"download {path}"):
            return target.read_bytes()

    def remove(self, ctx: UserContext, bucket: str, paths: Sequence[str]) -> None:
        for path in paths:
            target = self._blob(ctx, bucket, path)
            with self._guard(f"remove {path}"):
                target.unlink(missing_ok=True)

    # -- auth ----------------------------------------------------------------

    def _open_session(self, db: sqlite3.Connection, user: sqlite3.Row) -> UserContext:
        ctx = UserContext(
            user_id=user["id"],
            email=user["email"],
            access_token=secrets.token_urlsafe(32),
            refresh_token=secrets.token_urlsafe(32),
        )
        db.execute(
            "INSERT INTO auth_sessions (token, refresh_token, user_id) VALUES (?, ?, ?)",
            (ctx.access_token, ctx.refresh_token, ctx.user_id),
        )
        return ctx

    def sign_up(self, email: str, password: str, full_name: str = "") -> UserContext | None:
        user_id = str(uuid.uuid4())
        with self._guard("sign up"), get_db(self.db_path) as db:
            if db.execute("SELECT 1 FROM users WHERE email = ?", (email,)).fetchone():
                raise GatewayError("User already registered")
            db.execute(
                "INSERT INTO users (id, email, password_hash) VALUES (?, ?, ?)",
                (user_id, email, generate_password_hash(password, method="pbkdf2:sha256")),
            )
            db.execute(
                "INSERT INTO profiles (id, full_name) VALUES (?, ?)",
                (user_id, full_name or None),
            )
            user = db.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
            ctx = self._open_session(db, user)
        logger.info("Registered local user %s", email)
        return ctx

    def sign_in(self, email: str, password: str) -> UserContext:
        with self._guard("sign in"), get_db(self.db_path) as db:
            user = db.execute("SELECT * FROM users WHERE email = ?", (email,)).fetchone()
            if not user or not check_password_hash(user["password_hash"], password):
                raise GatewayError("Invalid login credentials")
            return self._open_session(db, user)

    def sign_out(self, ctx: UserContext) -> None:
        with self._guard("sign out"), get_db(self.db_path) as db:
            db.execute("DELETE FROM auth_sessions WHERE token = ?", (ctx.access_token,))

    def get_user(self, ctx: UserContext) -> UserContext:
        with self._guard("get user"), get_db(self.db_path) as db:
            row = db.execute(
                """SELECT u.id, u.email FROM auth_sessions s
                   JOIN users u ON s.user_id = u.id
                   WHERE s.token = ?""",
                (ctx.access_token,),
            ).fetchone()
        if row is None:
            raise GatewayError("Session expired or revoked")
        return UserContext(
            user_id=row["id"],
            email=row["email"],
            access_token=ctx.access_token,
            refresh_token=ctx.refresh_token,
        )

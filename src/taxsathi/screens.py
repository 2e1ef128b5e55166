"""The record list / record form pattern shared by the dashboard tabs.

Each tab fetches its whole collection on every visit, submits inserts or
updates keyed by the presence of a record id, and deletes after the browser
has confirmed. Outcomes are reported as toasts; failures leave nothing
changed and are logged. There is no local state to reconcile: the redirect
after each mutation re-fetches the list.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from fastapi import Request
from pydantic import ValidationError

from taxsathi.gateway import Gateway, GatewayError, Relation, UserContext
from taxsathi.models import ClientOption, FormModel, Row, ServiceOption
from taxsathi.notifications import ERROR, SUCCESS, notify

logger = logging.getLogger(__name__)

CLIENT_NAME = Relation(table="clients", column="client_id", field="name", alias="client_name")
SERVICE_NAME = Relation(
    table="services", column="service_id", field="service_name", alias="service_name"
)


@dataclass(frozen=True)
class RecordScreen:
    table: str
    label: str
    plural: str
    row_model: type[Row]
    form_model: type[FormModel] | None = None
    order_by: str = "created_at"
    descending: bool = True
    relations: tuple[Relation, ...] = ()

    def fail(self, request: Request, action: str, exc: Exception) -> None:
        message = f"Error {action} {self.label.lower()}"
        logger.error("%s: %s", message, exc)
        notify(request, ERROR, message)

    def succeed(self, request: Request, done: str) -> None:
        notify(request, SUCCESS, f"{self.label} {done} successfully")

    def fetch(self, request: Request, gateway: Gateway, ctx: UserContext) -> list[Row] | None:
        """The whole collection, or ``None`` when it could not be loaded."""
        try:
            rows = gateway.select(
                ctx,
                self.table,
                relations=self.relations,
                order_by=self.order_by,
                descending=self.descending,
            )
            return [self.row_model.model_validate(row) for row in rows]
        except (GatewayError, ValidationError) as exc:
            message = f"Error fetching {self.plural}"
            logger.error("%s: %s", message, exc)
            notify(request, ERROR, message)
            return None

    def load(self, gateway: Gateway, ctx: UserContext, record_id: str) -> Row | None:
        try:
            return self.row_model.model_validate(gateway.get(ctx, self.table, record_id))
        except (GatewayError, ValidationError) as exc:
            logger.error("Error loading %s %s: %s", self.label.lower(), record_id, exc)
            return None

    def save(
        self,
        request: Request,
        gateway: Gateway,
        ctx: UserContext,
        data: Mapping[str, Any],
        record_id: str | None = None,
    ) -> bool:
        action, done = ("updating", "updated") if record_id else ("creating", "created")
        try:
            payload = self.form_model.model_validate(dict(data)).payload()
            if record_id:
                gateway.update(ctx, self.table, record_id, payload)
            else:
                gateway.insert(ctx, self.table, payload)
        except (GatewayError, ValidationError) as exc:
            self.fail(request, action, exc)
            return False
        self.succeed(request, done)
        return True

    def remove(self, request: Request, gateway: Gateway, ctx: UserContext, record_id: str) -> bool:
        try:
            gateway.delete(ctx, self.table, record_id)
        except GatewayError as exc:
            self.fail(request, "deleting", exc)
            return False
        self.succeed(request, "deleted")
        return True


def _options(
    gateway: Gateway, ctx: UserContext, table: str, columns: str, order_by: str, model: type[Row]
) -> Sequence[Row]:
    # Select boxes degrade to empty; the failure is only logged.
    try:
        rows = gateway.select(ctx, table, columns=columns, order_by=order_by)
        return [model.model_validate(row) for row in rows]
    except (GatewayError, ValidationError) as exc:
        logger.error("Error fetching %s: %s", table, exc)
        return []


def client_options(gateway: Gateway, ctx: UserContext) -> Sequence[ClientOption]:
    return _options(gateway, ctx, "clients", "id, name", "name", ClientOption)


def service_options(gateway: Gateway, ctx: UserContext) -> Sequence[ServiceOption]:
    return _options(gateway, ctx, "services", "id, service_name", "service_name", ServiceOption)

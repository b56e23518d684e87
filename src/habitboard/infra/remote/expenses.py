"""Expense repository backed by the REST ``expenses`` table."""

from __future__ import annotations

from uuid import UUID

from ...logging_config import get_logger
from ...models.expense import Expense
from ...models.session import SessionUser
from .client import RestClient, decode_rows, first_row

logger = get_logger(__name__)

TABLE = "expenses"


class RemoteExpenseRepository:
    """REST implementation of ExpenseRepository protocol."""

    def __init__(self, client: RestClient):
        self.client = client

    def fetch_expenses(self, user: SessionUser) -> list[Expense]:
        payload = self.client.request(
            "GET",
            TABLE,
            access_token=user.access_token,
            params={"user_id": f"eq.{user.id}", "order": "created_at.desc"},
        )
        expenses = decode_rows(payload, Expense.from_row)
        logger.debug("Fetched expenses", extra={"user_id": str(user.id), "count": len(expenses)})
        return expenses

    def create_expense(self, user: SessionUser, category: str, amount: float) -> Expense:
        body = [{"category": category, "amount": amount, "user_id": str(user.id)}]
        payload = self.client.request("POST", TABLE, access_token=user.access_token, json=body)
        return first_row(payload, Expense.from_row)

    def delete_expense(self, user: SessionUser, expense_id: UUID) -> None:
        self.client.request(
            "DELETE",
            TABLE,
            access_token=user.access_token,
            params={"id": f"eq.{expense_id}"},
        )

"""
Async client for the Kove API.

Mirrors what the lease-thread chat does: pay, wait for the payment to
settle, check overdue status, and work maintenance tickets.

    async with KoveClient("http://localhost:8000") as api:
        created = await api.create_test_payment()
        result = await api.wait_for_payment(created["id"])
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from kove.models.payment import PaymentIntentInfo, PaymentMethod, PollResult
from kove.services.payment_polling import DEFAULT_DELAY_SECONDS, DEFAULT_MAX_ATTEMPTS, poll_payment_intent

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


class KoveApiError(Exception):
    """Non-2xx response from the API."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class KoveClient:
    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "KoveClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _call(self, method: str, path: str, json: Optional[dict] = None) -> Any:
        response = await self._client.request(method, path, json=json)
        if response.is_success:
            return response.json()
        try:
            message = response.json().get("detail", response.text)
        except ValueError:
            message = response.text
        raise KoveApiError(response.status_code, str(message))

    # ── Health ────────────────────────────────────────────────────

    async def health(self) -> dict:
        return await self._call("GET", "/v1/health")

    # ── Payments ──────────────────────────────────────────────────

    async def create_test_payment(self, method: PaymentMethod = PaymentMethod.CARD) -> dict:
        path = "/v1/test/payment_intent_ach" if method == PaymentMethod.ACH else "/v1/test/payment_intent"
        return await self._call("POST", path, json={})

    async def get_payment_intent(self, payment_intent_id: str) -> PaymentIntentInfo:
        data = await self._call("GET", f"/v1/test/payment_intent/{payment_intent_id}")
        return PaymentIntentInfo.model_validate(data)

    async def create_rent_intent(
        self,
        rent_amount: int,
        due_timestamp: str,
        *,
        autopay_enabled_at: Optional[str] = None,
        paid_at: Optional[str] = None,
    ) -> dict:
        payload: dict[str, Any] = {"rentAmount": rent_amount, "dueTimestamp": due_timestamp}
        if autopay_enabled_at:
            payload["autopayEnabledAt"] = autopay_enabled_at
        if paid_at:
            payload["paidAt"] = paid_at
        return await self._call("POST", "/v1/payments/rent_intent", json=payload)

    async def wait_for_payment(
        self,
        payment_intent_id: str,
        *,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        delay_seconds: float = DEFAULT_DELAY_SECONDS,
    ) -> PollResult:
        """Poll the intent until it settles; see ``poll_payment_intent``."""
        return await poll_payment_intent(
            self.get_payment_intent,
            payment_intent_id,
            max_attempts=max_attempts,
            delay_seconds=delay_seconds,
        )

    # ── Rent ──────────────────────────────────────────────────────

    async def check_overdue(self, amount: int, due_timestamp: str, grace_days: Optional[int] = None) -> dict:
        payload: dict[str, Any] = {"amount": amount, "dueTimestamp": due_timestamp}
        if grace_days is not None:
            payload["graceDays"] = grace_days
        return await self._call("POST", "/v1/overdue/check", json=payload)

    # ── Tickets ───────────────────────────────────────────────────

    async def create_ticket(self, summary: str) -> dict:
        return await self._call("POST", "/v1/tickets", json={"summary": summary})

    async def list_tickets(self) -> list[dict]:
        return await self._call("GET", "/v1/tickets")

    async def get_ticket(self, ticket_id: str) -> dict:
        return await self._call("GET", f"/v1/tickets/{ticket_id}")

    async def advance_ticket(
        self,
        ticket_id: str,
        action: Optional[str] = None,
        *,
        assigned: Optional[str] = None,
        eta: Optional[str] = None,
    ) -> dict:
        payload = {k: v for k, v in {"action": action, "assigned": assigned, "eta": eta}.items() if v}
        return await self._call("POST", f"/v1/tickets/{ticket_id}/advance", json=payload)

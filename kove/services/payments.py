"""
Payment processor client — creates and reads PaymentIntents.

Talks to Stripe through the official ``stripe`` SDK (secret key and pinned
API version passed per request).

When no secret key is configured, falls back to a local simulation ledger
so the chat UI flows work without any external account:
  • card intents succeed immediately
  • ACH intents report ``processing`` once, then ``succeeded``
"""

from __future__ import annotations

import logging
import threading
import uuid
from typing import Any

import stripe

from kove.config import get_settings
from kove.errors import PaymentIntentNotFoundError, PaymentProcessorError
from kove.models.payment import PaymentIntentInfo, PaymentMethod

logger = logging.getLogger(__name__)

# Processor test fixtures for the two supported rails
TEST_CARD_PAYMENT_METHOD = "pm_card_visa"
TEST_ACH_PAYMENT_METHOD = "pm_usBankAccount"

# ── Local simulation ledger (lives for the process lifetime) ─────
_simulated: dict[str, dict[str, Any]] = {}
_simulated_lock = threading.Lock()

_sdk_configured = False


# ═══════════════════════════════════════════════════════════════════
# Request building
# ═══════════════════════════════════════════════════════════════════

def build_intent_params(amount: int, method: PaymentMethod, currency: str) -> dict[str, Any]:
    """PaymentIntent creation parameters for a confirmed test payment."""
    if method == PaymentMethod.ACH:
        return {
            "amount": amount,
            "currency": currency,
            "payment_method_types": ["us_bank_account"],
            "payment_method_options": {
                "us_bank_account": {
                    "financial_connections": {"permissions": ["payment_method"]},
                },
            },
            "payment_method": TEST_ACH_PAYMENT_METHOD,
            "confirm": True,
        }
    return {
        "amount": amount,
        "currency": currency,
        "automatic_payment_methods": {"enabled": True, "allow_redirects": "never"},
        "payment_method": TEST_CARD_PAYMENT_METHOD,
        "confirm": True,
    }


def _plain(value: Any) -> Any:
    """StripeObject -> dict; plain values pass through."""
    if hasattr(value, "to_dict"):
        return value.to_dict()
    return value


def _to_info(intent: Any) -> PaymentIntentInfo:
    """Map a PaymentIntent (SDK object or ledger record) to PaymentIntentInfo."""
    if isinstance(intent, dict):
        get = intent.get
    else:
        def get(key, default=None):
            return getattr(intent, key, default)

    latest_charge = get("latest_charge")
    if latest_charge is not None and not isinstance(latest_charge, str):
        # expanded charge object
        latest_charge = _plain(latest_charge).get("id")
    return PaymentIntentInfo(
        id=get("id"),
        status=get("status") or "unknown",
        amount=get("amount") or 0,
        currency=get("currency") or "usd",
        latest_charge=latest_charge,
        next_action=_plain(get("next_action")),
    )


# ═══════════════════════════════════════════════════════════════════
# SDK setup
# ═══════════════════════════════════════════════════════════════════

def _configure_sdk() -> None:
    """Point the SDK at the configured API base with our timeout (once)."""
    global _sdk_configured
    if _sdk_configured:
        return
    settings = get_settings()
    stripe.api_base = settings.stripe_api_base
    stripe.default_http_client = stripe.RequestsClient(timeout=settings.payment_timeout_seconds)
    _sdk_configured = True
    logger.info("Stripe SDK configured (api_base=%s, version=%s)", settings.stripe_api_base, settings.stripe_api_version)


def _request_options() -> dict[str, str]:
    settings = get_settings()
    return {"api_key": settings.stripe_secret_key, "stripe_version": settings.stripe_api_version}


def _processor_error(e: stripe.StripeError) -> PaymentProcessorError:
    if isinstance(e, stripe.APIConnectionError):
        return PaymentProcessorError(f"Payment processor unreachable: {e.user_message or e}")
    return PaymentProcessorError(e.user_message or str(e) or f"HTTP {e.http_status}")


# ═══════════════════════════════════════════════════════════════════
# Local simulation
# ═══════════════════════════════════════════════════════════════════

def _simulate_create(amount: int, method: PaymentMethod, currency: str) -> PaymentIntentInfo:
    intent_id = f"pi_sim_{uuid.uuid4().hex[:24]}"
    if method == PaymentMethod.ACH:
        record = {"id": intent_id, "status": "processing", "amount": amount,
                  "currency": currency, "latest_charge": None, "reads": 0}
    else:
        record = {"id": intent_id, "status": "succeeded", "amount": amount,
                  "currency": currency, "latest_charge": f"ch_sim_{uuid.uuid4().hex[:24]}", "reads": 0}
    with _simulated_lock:
        _simulated[intent_id] = record
    logger.info("Simulated %s PaymentIntent %s for %d (%s)", method.value, intent_id, amount, record["status"])
    return _to_info(record)


def _simulate_retrieve(payment_intent_id: str) -> PaymentIntentInfo:
    with _simulated_lock:
        record = _simulated.get(payment_intent_id)
        if record is None:
            raise PaymentIntentNotFoundError(payment_intent_id)
        record["reads"] += 1
        if record["status"] == "processing" and record["reads"] >= 2:
            record["status"] = "succeeded"
            record["latest_charge"] = f"py_sim_{uuid.uuid4().hex[:24]}"
        return _to_info(dict(record))


def reset_simulation() -> None:
    with _simulated_lock:
        _simulated.clear()




# ═══════════════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════════════

def create_payment_intent(amount: int, *, method: PaymentMethod = PaymentMethod.CARD) -> PaymentIntentInfo:
    """
    Create and confirm a PaymentIntent for ``amount`` minor units.

    Raises PaymentProcessorError when the processor rejects the request or
    cannot be reached.
    """
    settings = get_settings()
    if amount <= 0:
        raise PaymentProcessorError("Amount must be positive")
    if not settings.payments_configured:
        return _simulate_create(amount, method, settings.payment_currency)

    _configure_sdk()
    params = build_intent_params(amount, method, settings.payment_currency)
    try:
        intent = stripe.PaymentIntent.create(**params, **_request_options())
    except stripe.StripeError as e:
        logger.error("Create PaymentIntent failed (%s): %s", e.http_status, e)
        raise _processor_error(e) from e

    info = _to_info(intent)
    logger.info("Created PaymentIntent %s (status=%s)", info.id, info.status)
    return info


def retrieve_payment_intent(payment_intent_id: str) -> PaymentIntentInfo:
    """Read the current state of a PaymentIntent."""
    if not get_settings().payments_configured:
        return _simulate_retrieve(payment_intent_id)

    _configure_sdk()
    try:
        intent = stripe.PaymentIntent.retrieve(payment_intent_id, **_request_options())
    except stripe.InvalidRequestError as e:
        if e.http_status == 404 or e.code == "resource_missing":
            raise PaymentIntentNotFoundError(payment_intent_id) from e
        raise _processor_error(e) from e
    except stripe.StripeError as e:
        raise _processor_error(e) from e
    return _to_info(intent)

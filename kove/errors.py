"""
Domain errors raised by the calculators, ticket workflow and payment client.

Routers translate these into HTTP responses; services never return HTTP
status codes themselves.
"""


class KoveError(Exception):
    """Base class for all domain errors."""


class ValidationError(KoveError):
    """A required field is missing or empty."""


class InvalidInputError(KoveError):
    """A supplied value could not be parsed (e.g. a timestamp)."""


class UnknownActionError(KoveError):
    """A ticket command is not part of the workflow."""


class NotFoundError(KoveError):
    """Base class for unknown-identifier errors."""


class TicketNotFoundError(NotFoundError):
    def __init__(self, ticket_id: str):
        super().__init__(f"Ticket {ticket_id} not found.")
        self.ticket_id = ticket_id


class PaymentIntentNotFoundError(NotFoundError):
    def __init__(self, payment_intent_id: str):
        super().__init__(f"PaymentIntent {payment_intent_id} not found.")
        self.payment_intent_id = payment_intent_id


class PaymentProcessorError(KoveError):
    """The payment processor rejected a request or could not be reached."""

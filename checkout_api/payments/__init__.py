"""
Module 'payments' (feature-first): point d'entrée public.
Réunit conversion des montants, validation, metadata Stripe, client Stripe et handlers.
"""

from .amounts import ReconciledAmount, reconcile_amount, normalize_quantity, format_amount
from .cart import ChargeRequest, parse_charge_request, to_line_items
from .metadata import make_metadata, extract_order_fields
from .interfaces import SessionProvider, RecordStore
from .stripe_client import StripeSessionProvider
from .service import (
    CheckoutHandler,
    ConfirmationHandler,
    ConfirmationState,
    OrderRecorded,
    PaymentRejected,
    ConfirmationFailed,
)

__all__ = [
    # amounts
    "ReconciledAmount",
    "reconcile_amount",
    "normalize_quantity",
    "format_amount",
    # cart
    "ChargeRequest",
    "parse_charge_request",
    "to_line_items",
    # metadata
    "make_metadata",
    "extract_order_fields",
    # adapters
    "SessionProvider",
    "RecordStore",
    "StripeSessionProvider",
    # services
    "CheckoutHandler",
    "ConfirmationHandler",
    "ConfirmationState",
    "OrderRecorded",
    "PaymentRejected",
    "ConfirmationFailed",
]

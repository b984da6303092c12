"""
Cas d'usage 'payments': orchestre cart, amounts, metadata, Stripe et le store des commandes.

- CheckoutHandler: valide la demande, réconcilie le montant, crée la session Stripe et renvoie l'URL.
- ConfirmationHandler: vérifie une session payée et enregistre la commande.
  Machine à états explicite: PENDING -> VERIFIED -> RECORDED | REJECTED | FAILED,
  chaque branche renvoyant un résultat typé (OrderRecorded, PaymentRejected, ConfirmationFailed).
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, Optional, Union

from checkout_api.config import Settings
from checkout_api.errors import (
    CheckoutError,
    ConfigurationMissing,
    PaymentIncomplete,
    ProviderError,
    UnknownError,
    ValidationError,
)
from checkout_api.orders.models import OrderRecord, OrderStatus, generate_order_id, reference_number
from checkout_api.orders.repository import SupabaseOrderStore
from . import cart
from . import metadata as meta
from .amounts import reconcile_amount
from .interfaces import RecordStore, SessionProvider
from .stripe_client import StripeSessionProvider

logger = logging.getLogger(__name__)

PAID_STATUS = "paid"

# module checkout_api.payments.service
class CheckoutHandler:
    def __init__(self, settings: Settings, provider: Optional[SessionProvider] = None):
        self._settings = settings
        # Validée une fois, à la construction
        self._missing = settings.missing_for_checkout()
        if provider is None and not self._missing:
            provider = StripeSessionProvider(settings.stripe_secret_key, settings.stripe_api_version)
        self._provider = provider

    @property
    def configured(self) -> bool:
        return not self._missing

    def create_checkout_session(self, body: Any) -> Dict[str, str]:
        """
        Crée la session Checkout et renvoie {"url": ...}.
        Étapes:
          1) Configuration Stripe présente, sinon ConfigurationMissing (aucun appel externe)
          2) Validation du body (cart.parse_charge_request)
          3) Réconciliation du montant (amounts.reconcile_amount)
          4) line_items + metadata réconciliées, puis un seul appel Stripe
        """
        if self._missing:
            raise ConfigurationMissing("Stripe is not configured")

        charge = cart.parse_charge_request(body)
        amount = reconcile_amount(
            charge.total_php,
            charge.quantity,
            subunits_per_unit=self._settings.currency_subunits,
        )
        if amount.adjusted:
            logger.info(
                "payments.checkout total adjusted requested=%s charged=%s quantity=%s",
                amount.requested_amount, amount.total_amount, amount.quantity,
            )

        session = self._provider.create(
            line_items=cart.to_line_items(charge.product_title, amount, self._settings.currency),
            mode="payment",
            success_url=charge.success_url,
            cancel_url=charge.cancel_url,
            metadata=meta.make_metadata(
                product_title=charge.product_title,
                amount=amount,
                user_id=charge.user_id,
                credits_used=charge.credits_used,
            ),
        )
        url = (session or {}).get("url")
        if not url:
            raise ProviderError("Checkout session has no redirect URL")
        logger.info("payments.checkout session created id=%s unit_amount=%s quantity=%s",
                    session.get("id"), amount.unit_amount, amount.quantity)
        return {"url": url}

class ConfirmationState(str, Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    RECORDED = "recorded"
    REJECTED = "rejected"
    FAILED = "failed"

@dataclass(frozen=True)
class OrderRecorded:
    order_id: str
    record: OrderRecord
    state: ClassVar[ConfirmationState] = ConfirmationState.RECORDED
    status_code: ClassVar[int] = 200

    def payload(self) -> Dict[str, Any]:
        return {"order_id": self.order_id}

@dataclass(frozen=True)
class PaymentRejected:
    session_id: str
    payment_status: str
    state: ClassVar[ConfirmationState] = ConfirmationState.REJECTED

    @property
    def error(self) -> CheckoutError:
        return PaymentIncomplete()

    @property
    def status_code(self) -> int:
        return self.error.status_code

    def payload(self) -> Dict[str, Any]:
        return {"message": self.error.message}

@dataclass(frozen=True)
class ConfirmationFailed:
    session_id: str
    error: CheckoutError
    # Id généré avant l'échec de l'insert: jamais renvoyé au client
    candidate_order_id: Optional[str] = None
    state: ClassVar[ConfirmationState] = ConfirmationState.FAILED

    @property
    def status_code(self) -> int:
        return self.error.status_code

    def payload(self) -> Dict[str, Any]:
        return {"message": self.error.message}

ConfirmationOutcome = Union[OrderRecorded, PaymentRejected, ConfirmationFailed]

def parse_session_id(body: Any) -> str:
    session_id = body.get("session_id") if isinstance(body, dict) else None
    if isinstance(session_id, str):
        session_id = session_id.strip()
    if not session_id or not isinstance(session_id, str):
        raise ValidationError("Missing session_id")
    return session_id

def build_order_record(session_id: str, session: Dict[str, Any], order_id: str) -> OrderRecord:
    """Mappe les métadonnées de session vers une commande 'Processing' (sans comptes attachés)."""
    fields = meta.extract_order_fields(session)
    return OrderRecord(
        id=order_id,
        product_title=fields["product_title"],
        quantity=fields["quantity"],
        total=fields["total"],
        ref_number=reference_number(session_id),
        credits_used=fields["credits_used"],
        status=OrderStatus.PROCESSING,
        accounts_data=[],
        refund_request=None,
        user_id=fields["user_id"],
    )

class ConfirmationHandler:
    def __init__(
        self,
        settings: Settings,
        provider: Optional[SessionProvider] = None,
        store: Optional[RecordStore] = None,
    ):
        self._missing = settings.missing_for_confirmation()
        if not self._missing:
            provider = provider or StripeSessionProvider(settings.stripe_secret_key, settings.stripe_api_version)
            store = store or SupabaseOrderStore(settings)
        self._provider = provider
        self._store = store

    @property
    def configured(self) -> bool:
        return not self._missing

    def confirm(self, body: Any) -> ConfirmationOutcome:
        """
        Confirme une session Stripe et enregistre la commande.
        - ConfigurationMissing / ValidationError sont levées avant tout appel externe.
        - Les échecs Stripe/Supabase deviennent ConfirmationFailed (500), sans id de commande renvoyé.
        """
        if self._missing:
            raise ConfigurationMissing("Server configuration error")
        session_id = parse_session_id(body)

        state = ConfirmationState.PENDING
        order_id: Optional[str] = None
        try:
            session = self._provider.retrieve(session_id)
            payment_status = str((session or {}).get("payment_status") or "")
            if payment_status != PAID_STATUS:
                logger.info("payments.confirm %s -> %s session_id=%s payment_status=%s",
                            state.value, ConfirmationState.REJECTED.value, session_id, payment_status)
                return PaymentRejected(session_id=session_id, payment_status=payment_status)
            state = ConfirmationState.VERIFIED

            order_id = generate_order_id()
            record = build_order_record(session_id, session, order_id)
            self._store.insert_order(record)
        except CheckoutError as e:
            logger.warning("payments.confirm %s -> %s session_id=%s error=%s",
                           state.value, ConfirmationState.FAILED.value, session_id, e.message)
            return ConfirmationFailed(session_id=session_id, error=e, candidate_order_id=order_id)
        except Exception as e:
            logger.exception("payments.confirm unexpected error session_id=%s", session_id)
            return ConfirmationFailed(
                session_id=session_id,
                error=UnknownError("Could not confirm order"),
                candidate_order_id=order_id,
            )

        logger.info("payments.confirm %s -> %s session_id=%s order_id=%s",
                    state.value, ConfirmationState.RECORDED.value, session_id, order_id)
        return OrderRecorded(order_id=order_id, record=record)

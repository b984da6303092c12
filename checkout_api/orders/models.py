# module checkout_api.orders.models
"""Modèle des commandes créées après confirmation d'une session Stripe.
- OrderRecord: ligne insérée (une seule fois) dans la table 'orders'.
- Helpers pour l'identifiant de commande et la référence de paiement.
"""
import secrets
import string
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional

ORDER_ID_PREFIX = "STKZ-"
ORDER_ID_SUFFIX_LENGTH = 9
REFERENCE_PREFIX = "STRIPE-"
_ORDER_ID_ALPHABET = string.ascii_uppercase + string.digits

class OrderStatus(str, Enum):
    PROCESSING = "Processing"
    COMPLETED = "Completed"
    REFUNDED = "Refunded"
    CANCELLED = "Cancelled"

def generate_order_id() -> str:
    """
    Identifiant court lisible: préfixe fixe + 9 caractères alphanumériques majuscules.
    Unicité non garantie (36^9 combinaisons), pas de vérification en base.
    """
    suffix = "".join(secrets.choice(_ORDER_ID_ALPHABET) for _ in range(ORDER_ID_SUFFIX_LENGTH))
    return ORDER_ID_PREFIX + suffix

def reference_number(session_id: str) -> str:
    """Référence déterministe: permet de retrouver la session Stripe depuis la commande."""
    return REFERENCE_PREFIX + session_id

@dataclass
class OrderRecord:
    id: str
    product_title: str
    quantity: int
    total: Decimal
    ref_number: str
    credits_used: Decimal = Decimal("0")
    status: OrderStatus = OrderStatus.PROCESSING
    accounts_data: List[Dict[str, Any]] = field(default_factory=list)
    refund_request: Optional[Dict[str, Any]] = None
    user_id: Optional[str] = None

    def to_row(self) -> Dict[str, Any]:
        # Decimal n'est pas sérialisable en JSON par le client PostgREST
        return {
            "id": self.id,
            "product_title": self.product_title,
            "quantity": self.quantity,
            "total": float(self.total),
            "ref_number": self.ref_number,
            "credits_used": float(self.credits_used),
            "status": self.status.value,
            "accounts_data": list(self.accounts_data),
            "refund_request": self.refund_request,
            "user_id": self.user_id or None,
        }

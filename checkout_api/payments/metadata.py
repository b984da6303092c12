"""
Sérialisation/désérialisation des métadonnées Stripe (product_title, quantity, total_php, user_id, credits_used).
Stripe n'accepte que des valeurs texte: tout est converti en str à l'écriture et re-parsé à la lecture.
"""
from decimal import Decimal
from typing import Any, Dict, Optional

from checkout_api.errors import InvalidAmount
from .amounts import ReconciledAmount, format_amount, to_decimal

# module checkout_api.payments.metadata
def make_metadata(
    *,
    product_title: str,
    amount: ReconciledAmount,
    user_id: Optional[Any] = None,
    credits_used: Optional[Any] = None,
) -> Dict[str, str]:
    """
    Métadonnées de session construites à partir des valeurs réconciliées.
    - quantity / total_php: ce qui est réellement facturé (pas la demande brute).
    - user_id: "" si absent; credits_used: "0" si absent.
    """
    return {
        "product_title": str(product_title),
        "quantity": str(amount.quantity),
        "total_php": format_amount(amount.total),
        "user_id": str(user_id) if user_id else "",
        "credits_used": format_amount(to_decimal(credits_used, "credits_used")) if credits_used is not None else "0",
    }

def _parse_quantity(raw: Any) -> int:
    try:
        qty = int(to_decimal(raw, "quantity"))
    except InvalidAmount:
        return 1
    return qty if qty > 0 else 1

def _parse_money(raw: Any) -> Decimal:
    try:
        return to_decimal(raw)
    except InvalidAmount:
        return Decimal("0")

def extract_order_fields(session: Dict[str, Any]) -> Dict[str, Any]:
    """
    Extrait les champs de commande depuis session["metadata"] (lecture tolérante).
    - product_title: "Order" par défaut
    - quantity: 1 si absente, illisible ou <= 0
    - total / credits_used: 0 si absents ou illisibles
    - user_id: None si vide
    """
    meta = (session or {}).get("metadata") or {} if isinstance(session, dict) else {}
    return {
        "product_title": meta.get("product_title") or "Order",
        "quantity": _parse_quantity(meta.get("quantity") or "1"),
        "total": _parse_money(meta.get("total_php") or "0"),
        "credits_used": _parse_money(meta.get("credits_used") or "0"),
        "user_id": meta.get("user_id") or None,
    }

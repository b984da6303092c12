"""
Logique panier pure (pas de Stripe, pas de DB).
Validation de la demande de paiement et construction des line_items Stripe.
"""
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic import ValidationError as PydanticValidationError

from checkout_api.errors import ValidationError
from .amounts import ReconciledAmount, to_decimal

REQUIRED_FIELDS = ("product_title", "quantity", "total_php", "success_url", "cancel_url")

# module checkout_api.payments.cart
def _check_url(v: str) -> str:
    parsed = urlparse(v)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("must be an absolute http(s) URL")
    return v

class ChargeRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    product_title: str
    quantity: Any
    total_php: Any
    user_id: Optional[str] = None
    credits_used: Optional[Any] = None
    success_url: str
    cancel_url: str

    @field_validator("product_title", "user_id", mode="before")
    def as_text(cls, v: Any) -> Any:
        return str(v).strip() if v is not None else v

    @field_validator("success_url", "cancel_url")
    def absolute_url(cls, v: str) -> str:
        return _check_url(v.strip())

def missing_fields(body: Dict[str, Any]) -> List[str]:
    """
    Champs requis absents: product_title vide/falsy, quantity/total_php à null,
    success_url/cancel_url vides.
    """
    missing = []
    for name in REQUIRED_FIELDS:
        value = body.get(name)
        if name in ("quantity", "total_php"):
            if value is None:
                missing.append(name)
        elif not value:
            missing.append(name)
    return missing

def parse_charge_request(body: Any) -> ChargeRequest:
    """
    Valide le body JSON de création de session.
    - Soulève ValidationError (400) si body non-objet, champs manquants ou URLs invalides.
    - credits_used est parsé en Decimal (InvalidAmount si non numérique).
    - Les montants ne sont pas interprétés ici (voir amounts.reconcile_amount).
    """
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    if missing_fields(body):
        raise ValidationError("Missing required fields: " + ", ".join(REQUIRED_FIELDS))
    try:
        charge = ChargeRequest.model_validate(body)
    except PydanticValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(part) for part in err.get("loc", ())) or "body"
        reason = (err.get("ctx") or {}).get("error") or err.get("msg")
        raise ValidationError(f"Invalid {field}: {reason}") from e
    if not charge.product_title:
        raise ValidationError("Missing required fields: " + ", ".join(REQUIRED_FIELDS))
    if charge.credits_used is not None:
        charge.credits_used = to_decimal(charge.credits_used, "credits_used")
    return charge

def to_line_items(product_title: str, amount: ReconciledAmount, currency: str) -> List[Dict[str, Any]]:
    """
    Une seule ligne Stripe: unit_amount (unités minimales) × quantity = total réconcilié.
    La description "Quantity: N" n'est ajoutée que si N > 1.
    """
    product_data: Dict[str, Any] = {"name": product_title}
    if amount.quantity > 1:
        product_data["description"] = f"Quantity: {amount.quantity}"
    return [{
        "quantity": amount.quantity,
        "price_data": {
            "currency": currency,
            "unit_amount": amount.unit_amount,
            "product_data": product_data,
        },
    }]

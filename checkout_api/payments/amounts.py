"""
Conversion montant -> unités minimales Stripe (logique pure, pas de Stripe, pas de DB).

Stripe facture unit_amount × quantity: le total demandé est donc réconcilié vers le bas
pour rester un multiple exact du prix unitaire. Les métadonnées de session portent ce total
réconcilié, jamais le montant brut demandé.
"""
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_FLOOR, ROUND_HALF_UP
from typing import Any

from checkout_api.errors import InvalidAmount

# Au-delà de 10^15 unités, aucun montant ni quantité n'est réaliste
MAX_MAGNITUDE = 15

# module checkout_api.payments.amounts
@dataclass(frozen=True)
class ReconciledAmount:
    quantity: int
    unit_amount: int          # unités minimales, par article
    total_amount: int         # unités minimales, = unit_amount * quantity
    requested_amount: int     # unités minimales, avant réconciliation
    total: Decimal            # unités majeures, ce qui est réellement facturé

    @property
    def adjusted(self) -> bool:
        return self.total_amount != self.requested_amount

def to_decimal(value: Any, field: str = "amount") -> Decimal:
    """
    Parse un nombre JSON (int/float/str/Decimal) en Decimal fini.
    - Les floats passent par str() pour éviter les artefacts binaires (0.1 -> "0.1").
    - bool, None, NaN, infinis et chaînes non numériques -> InvalidAmount.
    - Ordre de grandeur > 10^15 -> InvalidAmount (évite les calculs géants).
    """
    if value is None or isinstance(value, bool):
        raise InvalidAmount(f"{field} must be a number")
    try:
        number = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise InvalidAmount(f"{field} must be a number")
    if not number.is_finite():
        raise InvalidAmount(f"{field} must be a number")
    if number and number.adjusted() > MAX_MAGNITUDE:
        raise InvalidAmount(f"{field} is too large")
    return number

def _round_half_up(value: Decimal) -> int:
    return int(value.to_integral_value(rounding=ROUND_HALF_UP))

def normalize_quantity(quantity: Any) -> int:
    """Arrondit la quantité et la borne à 1 minimum (0 ou négatif -> 1)."""
    return max(1, _round_half_up(to_decimal(quantity, "quantity")))

def reconcile_amount(
    total: Any,
    quantity: Any,
    *,
    subunits_per_unit: int = 1,
    minimum_unit: int = 1,
) -> ReconciledAmount:
    """
    Calcule le prix unitaire Stripe et le total réellement facturé.
    - total_smallest = round(total × subunits_per_unit), plafonné à floor(total × subunits_per_unit)
    - unit = max(minimum_unit, floor(total_smallest / quantity))
    - total réconcilié = unit × quantity, jamais supérieur au total demandé
    Soulève InvalidAmount si le total est <= 0 après arrondi, non numérique,
    ou trop petit pour facturer minimum_unit par article.
    """
    qty = normalize_quantity(quantity)
    try:
        scaled = to_decimal(total, "total_php") * subunits_per_unit
    except ArithmeticError as e:
        raise InvalidAmount("total_php is too large") from e
    requested = _round_half_up(scaled)
    if requested <= 0:
        raise InvalidAmount("total_php must be positive")

    # L'arrondi ne doit jamais facturer plus que le montant demandé
    chargeable = min(requested, int(scaled.to_integral_value(rounding=ROUND_FLOOR)))
    unit_amount = max(minimum_unit, chargeable // qty)
    total_amount = unit_amount * qty
    if total_amount > chargeable:
        raise InvalidAmount("total_php is too small for the requested quantity")

    return ReconciledAmount(
        quantity=qty,
        unit_amount=unit_amount,
        total_amount=total_amount,
        requested_amount=requested,
        total=Decimal(total_amount) / Decimal(subunits_per_unit),
    )

def format_amount(value: Decimal) -> str:
    """Représentation texte stable pour les métadonnées Stripe ("99", "99.5", jamais "9.9E+1")."""
    return format(value.normalize(), "f")

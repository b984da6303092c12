"""
Erreurs métier des handlers checkout/confirmation.
Chaque type porte son code HTTP et un message lisible destiné au client:
les handlers d'exceptions (app_setup.exception_handlers) les convertissent en {"message": ...}.
"""
from typing import Optional

# module checkout_api.errors
class CheckoutError(Exception):
    status_code: int = 500
    default_message: str = "Unexpected error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

class ConfigurationMissing(CheckoutError):
    """Secret ou URL requis absent: aucun appel externe n'est tenté."""
    status_code = 500
    default_message = "Server configuration error"

class ValidationError(CheckoutError):
    """Champ requis manquant ou mal formé."""
    status_code = 400
    default_message = "Invalid request"

class InvalidAmount(ValidationError):
    default_message = "total_php must be positive"

class PaymentIncomplete(CheckoutError):
    status_code = 400
    default_message = "Payment not completed"

class ProviderError(CheckoutError):
    """Appel Stripe en échec (exception SDK, réseau, timeout)."""
    status_code = 500
    default_message = "Payment provider request failed"

class PersistenceError(CheckoutError):
    """Insert Supabase en échec (aucune ligne partielle)."""
    status_code = 500
    default_message = "Failed to create order"

class UnknownError(CheckoutError):
    status_code = 500

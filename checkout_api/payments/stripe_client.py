"""
Adaptateur Stripe: centralise les appels et la configuration Stripe.
"""
import logging
from typing import Any, Dict, List, Optional

import stripe

from checkout_api.errors import ProviderError

logger = logging.getLogger(__name__)

# module checkout_api.payments.stripe_client
def _as_dict(obj: Any) -> Dict[str, Any]:
    # StripeObject -> dict récursif (metadata incluse)
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    return dict(obj or {})

def _client_message(error: stripe.StripeError, default: str) -> str:
    # Seul le texte d'un refus de carte est destiné au client; le reste (réseau, clé, SDK) reste dans les logs
    if isinstance(error, stripe.CardError):
        return error.user_message or default
    return default

class StripeSessionProvider:
    """
    Implémentation SessionProvider sur le SDK stripe.
    - api_key et stripe_version passés à chaque appel (pas de stripe.api_key global partagé).
    - Toute stripe.StripeError devient ProviderError avec un message générique
      (message Stripe conservé uniquement pour un refus de carte).
    """

    def __init__(self, api_key: str, api_version: Optional[str] = None):
        self._api_key = api_key
        self._api_version = api_version

    def _request_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {"api_key": self._api_key}
        if self._api_version:
            options["stripe_version"] = self._api_version
        return options

    def create(
        self,
        *,
        line_items: List[Dict[str, Any]],
        success_url: str,
        cancel_url: str,
        metadata: Dict[str, str],
        mode: str = "payment",
    ) -> Dict[str, Any]:
        """
        Crée une session Stripe Checkout.
        Retour: dict session (ex: {"id": "cs_test_...", "url": "https://..."})
        """
        try:
            session = stripe.checkout.Session.create(
                mode=mode,
                line_items=line_items,
                success_url=success_url,
                cancel_url=cancel_url,
                metadata=metadata,
                **self._request_options(),
            )
        except stripe.StripeError as e:
            logger.warning("stripe_client.create failed: %s", e)
            raise ProviderError(_client_message(e, "Failed to create checkout session")) from e
        return _as_dict(session)

    def retrieve(self, session_id: str) -> Dict[str, Any]:
        """
        Récupère une session Stripe Checkout par son identifiant (line_items étendus).
        Retour: dict session incluant "id", "payment_status", "metadata", etc.
        """
        try:
            session = stripe.checkout.Session.retrieve(
                session_id,
                expand=["line_items"],
                **self._request_options(),
            )
        except stripe.StripeError as e:
            logger.warning("stripe_client.retrieve failed session_id=%s: %s", session_id, e)
            raise ProviderError(_client_message(e, "Could not retrieve checkout session")) from e
        return _as_dict(session)

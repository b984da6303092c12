"""
Contrats des collaborateurs externes des handlers.
Les handlers ne dépendent que de ces interfaces: Stripe/Supabase en production, doubles en tests.
"""
from typing import Any, Dict, Protocol

from checkout_api.orders.models import OrderRecord

# module checkout_api.payments.interfaces
class SessionProvider(Protocol):
    def create(self, **params: Any) -> Dict[str, Any]:
        """Crée une session Checkout; retourne au moins {"id", "url"}."""
        ...

    def retrieve(self, session_id: str) -> Dict[str, Any]:
        """Relit une session; retourne au moins {"id", "payment_status", "metadata"}."""
        ...

class RecordStore(Protocol):
    def insert_order(self, record: OrderRecord) -> None:
        """Insert atomique d'une ligne; soulève PersistenceError en cas d'échec."""
        ...

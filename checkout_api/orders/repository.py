"""
Accès aux données pour la feature 'orders'.
"""
import logging
from typing import Optional

from supabase import Client

import checkout_api.infra.supabase_client as supabase_client
from checkout_api.config import Settings
from checkout_api.errors import PersistenceError
from checkout_api.orders.models import OrderRecord

logger = logging.getLogger(__name__)

# module checkout_api.orders.repository
class SupabaseOrderStore:
    """
    Implémentation RecordStore sur Supabase (service-role).
    - insert_order: un seul insert d'une ligne, tout ou rien côté PostgREST.
    - Le client est créé à la première écriture.
    """

    def __init__(self, settings: Settings, client: Optional[Client] = None):
        self._settings = settings
        self._client = client

    def _get_client(self) -> Client:
        if self._client is None:
            self._client = supabase_client.get_service_supabase(self._settings)
        return self._client

    def insert_order(self, record: OrderRecord) -> None:
        try:
            (
                self._get_client()
                .table(self._settings.orders_table)
                .insert([record.to_row()])
                .execute()
            )
        except Exception as e:
            logger.exception("orders.repository.insert_order failed order_id=%s ref=%s", record.id, record.ref_number)
            raise PersistenceError() from e

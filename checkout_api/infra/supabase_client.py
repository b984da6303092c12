from supabase import create_client, Client

from checkout_api.config import Settings

def get_service_supabase(settings: Settings) -> Client:
    """
    Client Supabase service-role (bypass RLS) pour les écritures côté serveur.
    Un client par store: aucune instance globale partagée entre invocations.
    """
    if not settings.supabase_url or not settings.supabase_service_key:
        raise RuntimeError("SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY manquants pour get_service_supabase()")
    return create_client(settings.supabase_url, settings.supabase_service_key)

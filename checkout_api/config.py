# checkout_api.config
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional
import os
from dotenv import load_dotenv

# Calculer le chemin du projet puis charger .env de manière explicite
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"
load_dotenv(dotenv_path=ENV_PATH, override=False)

"""
Configuration centrale des handlers.

- Charge le fichier .env à la racine du projet (BASE_DIR/.env) sans écraser l'environnement du process
- Normalise les secrets/URLs (Stripe, Supabase)
- Expose Settings: structure explicite injectée dans chaque handler à la construction
"""

DEFAULT_STRIPE_API_VERSION = "2024-11-20.acacia"
DEFAULT_CURRENCY = "php"
DEFAULT_ORDERS_TABLE = "orders"

def _clean_env(v: Optional[str]) -> str:
    """
    Nettoie une valeur d'environnement:
    - supprime les espaces et guillemets (simples, doubles) et backticks
    - retourne toujours une chaîne (jamais None)
    """
    return (v or "").strip().strip("'").strip('"').strip("`")

def _normalize_supabase_url(url: str) -> str:
    # SUPABASE_URL peut parfois être sans schéma: on préfixe en https:// si nécessaire
    if url and not url.startswith("http"):
        url = "https://" + url
    return url.rstrip("/")

def _int_env(raw: str, default: int) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default

@dataclass(frozen=True)
class Settings:
    """
    Configuration injectée dans les handlers (aucune lecture d'environnement au moment des requêtes).
    - stripe_secret_key: clé secrète Stripe (checkout + confirmation)
    - supabase_url / supabase_service_key: accès service-role à la table des commandes (confirmation)
    - currency / currency_subunits: devise Stripe et nombre d'unités minimales par unité majeure
    """
    stripe_secret_key: str = ""
    supabase_url: str = ""
    supabase_service_key: str = ""
    stripe_api_version: str = DEFAULT_STRIPE_API_VERSION
    currency: str = DEFAULT_CURRENCY
    currency_subunits: int = 1
    orders_table: str = DEFAULT_ORDERS_TABLE

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            stripe_secret_key=_clean_env(env.get("STRIPE_SECRET_KEY")),
            supabase_url=_normalize_supabase_url(
                _clean_env(env.get("SUPABASE_URL") or env.get("NEXT_PUBLIC_SUPABASE_URL"))
            ),
            supabase_service_key=_clean_env(
                env.get("SUPABASE_SERVICE_ROLE_KEY") or env.get("SUPABASE_SERVICE_KEY")
            ),
            stripe_api_version=_clean_env(env.get("STRIPE_API_VERSION")) or DEFAULT_STRIPE_API_VERSION,
            currency=(_clean_env(env.get("CHECKOUT_CURRENCY")) or DEFAULT_CURRENCY).lower(),
            currency_subunits=_int_env(_clean_env(env.get("CURRENCY_SUBUNITS")), 1),
            orders_table=_clean_env(env.get("ORDERS_TABLE")) or DEFAULT_ORDERS_TABLE,
        )

    def missing_for_checkout(self) -> List[str]:
        return [] if self.stripe_secret_key else ["STRIPE_SECRET_KEY"]

    def missing_for_confirmation(self) -> List[str]:
        missing = self.missing_for_checkout()
        if not self.supabase_url:
            missing.append("SUPABASE_URL")
        if not self.supabase_service_key:
            missing.append("SUPABASE_SERVICE_ROLE_KEY")
        return missing

"""
Factory d’application recommandée pour les entrypoints (ex: checkout_api.asgi).
Ordonne les étapes d’initialisation de manière lisible et testable.
"""
from typing import Optional

from fastapi import FastAPI

from checkout_api.config import Settings
from checkout_api.payments.interfaces import RecordStore, SessionProvider
from checkout_api.payments.service import CheckoutHandler, ConfirmationHandler
from .exception_handlers import register_exception_handlers
from .lifespan import lifespan
from .middlewares import register_cors_middleware
from .routers import register_routers

def create_app(
    settings: Optional[Settings] = None,
    provider: Optional[SessionProvider] = None,
    store: Optional[RecordStore] = None,
) -> FastAPI:
    """
    Construit l’app FastAPI et enregistre:
      - les handlers checkout/confirmation (configuration validée une fois, ici)
      - le middleware CORS fixe et les gestionnaires d’exceptions JSON
      - les routers (paiements, health)
    Paramètres:
      - settings: Settings.from_env() par défaut
      - provider / store: doubles de test; Stripe / Supabase par défaut
    """
    settings = settings or Settings.from_env()
    app = FastAPI(title="Checkout API", lifespan=lifespan)
    app.state.settings = settings
    app.state.checkout_handler = CheckoutHandler(settings, provider=provider)
    app.state.confirmation_handler = ConfirmationHandler(settings, provider=provider, store=store)
    register_cors_middleware(app)
    register_exception_handlers(app)
    register_routers(app)
    return app

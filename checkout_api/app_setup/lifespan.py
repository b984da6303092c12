"""
Lifespan FastAPI: journalise l'état de la configuration au démarrage.
- Les handlers sont construits (et leur configuration validée) par create_app(), avant toute requête.
- Aucun secret n'est journalisé, seulement les noms des variables manquantes.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger = logging.getLogger("uvicorn.error")
    settings = app.state.settings
    for name, missing in (
        ("create-stripe-checkout", settings.missing_for_checkout()),
        ("confirm-stripe-order", settings.missing_for_confirmation()),
    ):
        if missing:
            logger.warning("%s disabled: missing %s", name, ", ".join(missing))
        else:
            logger.info("%s ready", name)
    yield

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from checkout_api.app_setup.middlewares import CORS_HEADERS
from checkout_api.errors import CheckoutError, UnknownError
from checkout_api.payments.service import CheckoutHandler, ConfirmationHandler

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/functions/v1", tags=["Payments"])

# module checkout_api.payments.views
def get_checkout_handler(request: Request) -> CheckoutHandler:
    return request.app.state.checkout_handler

def get_confirmation_handler(request: Request) -> ConfirmationHandler:
    return request.app.state.confirmation_handler

async def _read_json(request: Request) -> Any:
    # Body illisible -> None: le handler répond 400 après la vérification de configuration
    try:
        return await request.json()
    except ValueError:
        return None

@router.post("/create-stripe-checkout")
async def create_stripe_checkout(request: Request, handler: CheckoutHandler = Depends(get_checkout_handler)):
    """
    Crée une session Checkout Stripe et renvoie l'URL de redirection.
    - Entrée JSON: { product_title, quantity, total_php, user_id?, credits_used?, success_url, cancel_url }
    - Succès: {"url": "https://checkout.stripe.com/..."}
    - Erreurs: {"message": ...} en 400 (validation, montant) ou 500 (configuration, Stripe)
    """
    body = await _read_json(request)
    try:
        result = await run_in_threadpool(handler.create_checkout_session, body)
    except CheckoutError:
        raise
    except Exception as e:
        logger.exception("Erreur create_stripe_checkout")
        raise UnknownError("Failed to create checkout session") from e
    return JSONResponse(result, headers=CORS_HEADERS)

@router.post("/confirm-stripe-order")
async def confirm_stripe_order(request: Request, handler: ConfirmationHandler = Depends(get_confirmation_handler)):
    """
    Vérifie une session Stripe payée et crée la commande.
    - Entrée JSON: { "session_id": "cs_..." }
    - Succès: {"order_id": "STKZ-..."}
    - Erreurs: 400 si session_id manquant ou paiement non complété, 500 si configuration/Stripe/Supabase en échec
    """
    body = await _read_json(request)
    try:
        outcome = await run_in_threadpool(handler.confirm, body)
    except CheckoutError:
        raise
    except Exception as e:
        logger.exception("Erreur confirm_stripe_order")
        raise UnknownError("Could not confirm order") from e
    return JSONResponse(outcome.payload(), status_code=outcome.status_code, headers=CORS_HEADERS)

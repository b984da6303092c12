from fastapi import APIRouter, Request

router = APIRouter(prefix="/health", tags=["Health"])

@router.get("")
def health_root():
    return {"ok": True}

@router.get("/config")
def health_config(request: Request):
    """Indique quels handlers sont configurés (booléens uniquement, aucun secret)."""
    return {
        "create_stripe_checkout": request.app.state.checkout_handler.configured,
        "confirm_stripe_order": request.app.state.confirmation_handler.configured,
    }

"""
Registre central des routers (paiements, health).
- Paiements: /functions/v1/create-stripe-checkout, /functions/v1/confirm-stripe-order
- Health: /health, /health/config
"""
from fastapi import FastAPI
from checkout_api.payments import views as payments_views
from checkout_api.health.router import router as health_router

def register_routers(app: FastAPI) -> None:
    app.include_router(payments_views.router)
    app.include_router(health_router)

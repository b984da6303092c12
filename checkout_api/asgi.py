"""
ASGI entrypoint: expose `app` for process managers / deployments.

- En production, un process manager (ex: gunicorn/uvicorn-workers) importe `checkout_api.asgi:app`.
- La configuration (middlewares, handlers, routers) est centralisée dans checkout_api.app_setup.factory.
"""

from checkout_api.app import app

if __name__ == "__main__":
    import os
    import uvicorn
    uvicorn.run(
        "checkout_api.asgi:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8000")),
        reload=True,     # rechargement automatique en dev
    )

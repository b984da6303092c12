from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

"""
Middlewares transverses de l’application.
- register_cors_middleware: CORS fixe « allow-all » attendu par le front (mêmes en-têtes partout).
Notes:
- Le pré-vol (OPTIONS) est court-circuité avant le routage: réponse "ok" quel que soit le chemin.
- Les réponses d'erreur construites hors middleware (handler 500) ajoutent CORS_HEADERS elles-mêmes.
"""

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

def register_cors_middleware(app: FastAPI) -> None:
    """
    Ajoute les en-têtes CORS fixes à toutes les réponses et répond aux pré-vols.
    - OPTIONS: 200 "ok" + CORS_HEADERS, aucun handler appelé.
    - Autres méthodes: en-têtes ajoutés s'ils ne sont pas déjà présents.
    """
    @app.middleware("http")
    async def fixed_cors(request: Request, call_next):
        if request.method.upper() == "OPTIONS":
            return PlainTextResponse("ok", headers=CORS_HEADERS)
        response = await call_next(request)
        for name, value in CORS_HEADERS.items():
            if name not in response.headers:
                response.headers[name] = value
        return response

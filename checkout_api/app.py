# module checkout_api.app
from checkout_api.app_setup.factory import create_app

# App globale (configuration lue depuis l'environnement / .env)
app = create_app()

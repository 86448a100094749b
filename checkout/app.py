# module checkout.app
from checkout.app_setup.factory import create_app

# App globale
app = create_app()

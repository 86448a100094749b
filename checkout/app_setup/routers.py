"""
Registre central des routers.
- API v1: payments (+ alias du chemin serverless historique)
- Health: health_router
"""
from fastapi import FastAPI
from checkout.payments import views as payments_views
from checkout.health.router import router as health_router


def register_routers(app: FastAPI) -> None:
    app.include_router(payments_views.router)
    app.include_router(payments_views.netlify_router)
    # Health & monitoring
    app.include_router(health_router)

"""
ASGI entrypoint: expose `app` for process managers / deployments.

- En production, un process manager (ex: gunicorn/uvicorn-workers, hypercorn) importe `checkout.asgi:app`.
- Toute la configuration FastAPI (routes, middlewares, gateway Stripe) est centralisée
  dans checkout.app_setup.factory, ce fichier ne fait qu’exposer l’instance `app`.
"""

from checkout.app import app

if __name__ == "__main__":
    import os
    import uvicorn
    uvicorn.run(
        "checkout.asgi:app",
        host="0.0.0.0",  # écoute toutes interfaces (Docker/VM)
        port=int(os.getenv("PORT", "8000")),
        reload=True,     # rechargement automatique en dev
    )

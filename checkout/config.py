# checkout.config
from dataclasses import dataclass
from pathlib import Path
import os
from dotenv import load_dotenv

from checkout.errors import ConfigurationError

# Calculer le chemin du projet puis charger .env de manière explicite
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"
load_dotenv(dotenv_path=ENV_PATH, override=True)

"""
Configuration centrale du service checkout.

- Charge le fichier .env à la racine du projet (BASE_DIR/.env)
- Expose les réglages transverses (CORS/hosts, cookies sécurisés)
- Construit la configuration Stripe explicite (StripeSettings) passée au gateway
"""

def _clean_env(v: str) -> str:
    """
    Nettoie une valeur d'environnement:
    - supprime les espaces et guillemets (simples, doubles) et backticks
    - retourne toujours une chaîne (jamais None)
    """
    return (v or "").strip().strip("'").strip('"').strip("`")

# Sécurité: active HSTS quand le service est servi en HTTPS
COOKIE_SECURE = (os.getenv("COOKIE_SECURE", "false").lower() == "true")

# CORS (le front statique appelle l'API depuis une autre origine)
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
ALLOWED_HOSTS = [h.strip() for h in os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",") if h.strip()]

# Rate limiting de l'endpoint de paiement (requêtes / fenêtre en secondes)
PAYMENT_RATE_LIMIT_TIMES = int(os.getenv("PAYMENT_RATE_LIMIT_TIMES", "10"))
PAYMENT_RATE_LIMIT_SECONDS = int(os.getenv("PAYMENT_RATE_LIMIT_SECONDS", "60"))


@dataclass(frozen=True)
class StripeSettings:
    """Configuration Stripe résolue au démarrage, injectée dans le gateway."""
    secret_key: str

    def __repr__(self) -> str:
        # Ne jamais exposer la clé dans les logs
        return "StripeSettings(secret_key=***)"


def load_stripe_settings() -> StripeSettings:
    """
    Lit STRIPE_SECRET_KEY depuis l'environnement au moment de l'appel.
    - Soulève ConfigurationError si la clé est absente ou vide.
    """
    secret_key = _clean_env(os.getenv("STRIPE_SECRET_KEY") or "")
    if not secret_key:
        raise ConfigurationError("Missing STRIPE_SECRET_KEY")
    return StripeSettings(secret_key=secret_key)

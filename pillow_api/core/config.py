# pillow_api/core/config.py

import os

from dotenv import load_dotenv

from pillow_api.pillow.schema import TransportSettings

load_dotenv()

# Correspondance variable d'environnement -> champ de TransportSettings
ENV_SETTINGS = {
    "PILLOW_CONNECT_TIMEOUT": "connect_timeout",
    "PILLOW_TIMEOUT": "timeout",
    "PILLOW_MAX_CONNECTIONS": "max_connections",
    "PILLOW_FOLLOW_REDIRECTS": "follow_redirects",
    "PILLOW_VERIFY_TLS": "verify_tls",
    "PILLOW_USER_AGENT": "user_agent",
}


def get_transport_settings() -> TransportSettings:
    """
    Construit le bloc de réglages du transport.
    Les valeurs absentes de l'environnement gardent leur valeur par défaut,
    les valeurs invalides lèvent une ValidationError pydantic.
    """
    overrides = {
        field: os.getenv(env_name)
        for env_name, field in ENV_SETTINGS.items()
        if os.getenv(env_name) not in (None, "")
    }
    return TransportSettings(**overrides)

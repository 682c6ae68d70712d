# pillow_api/pillow/resolver.py

import re
from typing import Optional

from pillow_api.core.exceptions import UsageError

# Nom réservé : l'appel vise directement l'URL de base
SIMPLE_CALL = "SimpleCall"

_IDENTIFIER = re.compile(r"^[A-Za-z0-9_]+$")
_WORD_BOUNDARY = re.compile(r"(?=[A-Z])")


def build_path(name: str) -> Optional[str]:
    """
    Convertit un nom d'opération en segment d'URL.

    Le nom est découpé devant chaque majuscule (la majuscule est conservée),
    les fragments sont joints par '/' puis le tout est passé en minuscules :
        v1OauthAccess_token -> v1/oauth/access_token

    Les '_' ne sont pas des séparateurs. SimpleCall retourne None.
    Une majuscule initiale ne produit pas de '/' en tête : V1Users -> v1/users.
    """
    if name == SIMPLE_CALL:
        return None
    if not isinstance(name, str) or not _IDENTIFIER.match(name):
        raise UsageError(f"Nom d'opération invalide : {name!r}")

    fragments = [fragment for fragment in _WORD_BOUNDARY.split(name) if fragment]
    return "/".join(fragments).lower()

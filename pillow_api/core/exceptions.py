# pillow_api/core/exceptions.py
class PillowError(Exception):
    """Erreur lors de l'appel d'une API distante"""
    pass


class TransportError(PillowError):
    """Erreur de connexion, timeout ou boucle de redirections."""
    pass


class DecodeError(PillowError):
    """Corps de réponse illisible dans le format demandé (JSON invalide)."""
    pass


class UsageError(PillowError, ValueError):
    """Mauvaise utilisation du client : nom d'opération vide, appel déjà envoyé..."""
    pass

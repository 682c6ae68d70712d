from typing import Dict, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


# --- Réglages du transport (bloc unique, jamais modifié par appel) ---

class TransportSettings(BaseModel):
    """Réglages HTTP communs à tous les appels d'un client Pillow"""
    connect_timeout: float = Field(15.0, gt=0, description="Délai max de la connexion initiale, en secondes")
    timeout: float = Field(15.0, gt=0, description="Délai max d'exécution de la requête, en secondes")
    max_connections: int = Field(3, ge=1, description="Nombre max de connexions ouvertes dans le pool")
    follow_redirects: bool = Field(True, description="Suivre automatiquement les redirections")
    verify_tls: bool = Field(False, description="Vérification du certificat et de l'hôte TLS")
    user_agent: str = Field("Pillow/0.0.1", description="En-tête User-Agent envoyé")

    model_config = ConfigDict(frozen=True)


# --- Authentification HTTP Basic ---

class Authorization(BaseModel):
    """Couple identifiant / mot de passe pour l'authentification Basic"""
    name: Optional[str] = None
    password: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    def as_basic_auth(self) -> Optional[Tuple[str, str]]:
        # les deux valeurs sont nécessaires, sinon pas d'auth
        if self.name is None or self.password is None:
            return None
        return self.name, self.password


# --- Requête prête à être envoyée ---

class RequestConfig(BaseModel):
    """
    Schéma de la requête construite par le client, juste avant l'envoi.
    `body` vaut None pour un GET, la chaîne form-encodée pour un POST.
    """
    method: Literal["GET", "POST"] = "GET"
    url: str
    body: Optional[str] = None
    auth: Optional[Tuple[str, str]] = None
    headers: Dict[str, str] = Field(default_factory=dict)
    settings: TransportSettings = Field(default_factory=TransportSettings)
    verify_tls: bool = False

    model_config = ConfigDict(frozen=True)

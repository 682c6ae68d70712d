# pillow_api/pillow/api_client.py

import json
from typing import Any, Mapping, Optional, Tuple, Union
from urllib.parse import unquote_plus

from pillow_api.core.config import get_transport_settings
from pillow_api.core.exceptions import DecodeError, TransportError, UsageError
from pillow_api.core.http_client import HTTPClient
from pillow_api.core.logger import InfoLogger, get_logger
from pillow_api.pillow.params import PostParams, build_query
from pillow_api.pillow.resolver import build_path
from pillow_api.pillow.schema import Authorization, RequestConfig, TransportSettings

logger = get_logger(__name__)

AuthorizationLike = Union[Authorization, Mapping[str, Optional[str]], Tuple[str, str]]


def _to_authorization(authorization: Optional[AuthorizationLike]) -> Optional[Authorization]:
    """Accepte un Authorization, un tuple (name, password) ou un dict name/password (ou auth_name/auth_pass)."""
    if authorization is None or isinstance(authorization, Authorization):
        return authorization
    if isinstance(authorization, tuple):
        name, password = authorization
        return Authorization(name=name, password=password)
    return Authorization(
        name=authorization.get("name", authorization.get("auth_name")),
        password=authorization.get("password", authorization.get("auth_pass")),
    )


class PendingCall:
    """
    Appel distant en cours de construction, obtenu via Pillow.call(name).

    Les paramètres POST s'accumulent jusqu'à l'envoi. Un PendingCall ne sert
    qu'une fois : un second get()/post() lève UsageError.
    """

    def __init__(self, client: "Pillow", path: Optional[str]):
        self.client = client
        self.path = path
        self.query_string: Optional[str] = None
        self.post_params = PostParams()
        self.request_url: Optional[str] = None
        self._sent = False

    def set_post_param(self, key: str, value: Any) -> "PendingCall":
        self.post_params.set(key, value)
        return self

    def set_query(self, arguments: Optional[Mapping[str, Any]]) -> "PendingCall":
        # pas de fusion : la dernière query string posée remplace la précédente
        self.query_string = build_query(arguments)
        return self

    def get_api_query_url(self) -> str:
        """URL complète : le '/' final est toujours ajouté après le chemin."""
        path = self.path or ""
        if self.query_string:
            return f"{self.client.api_url}{path}/?{self.query_string}"
        return f"{self.client.api_url}{path}/"

    def build_request(self) -> RequestConfig:
        post = self.post_params.get()
        auth = self.client.authorization.as_basic_auth() if self.client.authorization else None
        return RequestConfig(
            method="GET" if post is None else "POST",
            url=self.get_api_query_url(),
            body=None if post is None else build_query(post),
            auth=auth,
            settings=self.client.settings,
            verify_tls=self.client.verify_tls,
        )

    def get(self, arguments: Optional[Mapping[str, Any]] = None, as_: str = "json") -> Any:
        if arguments:
            self.set_query(arguments)
        return self.fetch(as_)

    def post(self, arguments: Optional[Mapping[str, Any]] = None, as_: str = "json") -> Any:
        if arguments:
            self.post_params.update(arguments)
        return self.fetch(as_)

    def fetch(self, as_: str = "json") -> Any:
        if self._sent:
            raise UsageError(f"Appel déjà envoyé : {self.request_url}. Utiliser Pillow.call() pour un nouvel appel.")
        self._sent = True
        return self.client.fetch(self, as_)


class Pillow:
    """
    Client REST générique : le chemin appelé est déduit du nom de l'opération.

        api = Pillow("http://localhost/")
        token = api.call("v1OauthAccess_token").post({"client_id": "...", "scope": "none"})
        # -> POST http://localhost/v1/oauth/access_token/

    Les échecs (transport, réponse vide) ne lèvent pas d'exception :
    get()/post() retournent False et le détail part dans le logger injecté.
    """

    def __init__(self,
                 api_url: str,
                 logger: Optional[InfoLogger] = None,
                 authorization: Optional[AuthorizationLike] = None,
                 settings: Optional[TransportSettings] = None,
                 verify_tls: Optional[bool] = None,
                 http_client: Optional[HTTPClient] = None):
        self.api_url = api_url
        self.logger = logger
        self.authorization = _to_authorization(authorization)
        self.settings = settings if settings is not None else get_transport_settings()
        # la vérification TLS est désactivée par défaut, à activer explicitement
        self.verify_tls = self.settings.verify_tls if verify_tls is None else verify_tls
        self.http = http_client if http_client is not None else HTTPClient()

    def log(self, msg: str) -> None:
        if self.logger:
            self.logger.info(msg)

    # ---------------- Construction des appels ----------------
    def call(self, name: str) -> PendingCall:
        """Nouvel appel pour l'opération `name` (v1OauthAccess_token -> v1/oauth/access_token)."""
        return PendingCall(self, build_path(name))

    def get(self, name: str, arguments: Optional[Mapping[str, Any]] = None, as_: str = "json") -> Any:
        return self.call(name).get(arguments, as_)

    def post(self, name: str, arguments: Optional[Mapping[str, Any]] = None, as_: str = "json") -> Any:
        return self.call(name).post(arguments, as_)

    # ---------------- Envoi et décodage ----------------
    def fetch(self, call: PendingCall, as_: str = "json") -> Any:
        """
        Envoie la requête construite par `call` et décode la réponse.
        Retourne False si aucune donnée n'a été reçue.
        """
        request = call.build_request()
        request_url = call.request_url = request.url

        self.log(f"Request to: {unquote_plus(request_url)}")

        try:
            response = self.http.send(request).strip()
        except TransportError as e:
            self.log(f"Request to: {request_url}\r\n{e}")
            response = ""

        self.log(f"Response: {request_url} - {response}")

        if not response:
            self.log(f"No data received from: {request_url} - {response}")
            logger.warning("No data received from %s", request_url)
            return False

        return self.decode(response, as_, request_url)

    def decode(self, response: str, as_: str = "json", request_url: Optional[str] = None) -> Any:
        """
        json : corps décodé (None si le JSON est invalide).
        Tout autre format (xml, text...) : corps brut inchangé.
        """
        if as_ != "json":
            return response

        try:
            return json.loads(response)
        except (ValueError, RecursionError) as e:
            # JSON invalide ou imbrication trop profonde
            error = DecodeError(f"Invalid JSON document: {e}")
            self.log(f"Unable to decode response from {request_url} as {as_}: {error}")
            logger.debug("Decode error on %s: %s", request_url, error)
            return None

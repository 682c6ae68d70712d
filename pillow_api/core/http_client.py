import httpx
from typing import Optional

from pillow_api.pillow.schema import RequestConfig
from .exceptions import TransportError
from .logger import get_logger

logger = get_logger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class HTTPClient:
    """Client HTTP synchrone basé sur httpx, un seul aller-retour par requête."""

    def __init__(self, transport: Optional[httpx.BaseTransport] = None):
        # transport injectable (httpx.MockTransport dans les tests)
        self._transport = transport

    def _build_client(self, config: RequestConfig) -> httpx.Client:
        settings = config.settings
        return httpx.Client(
            timeout=httpx.Timeout(settings.timeout, connect=settings.connect_timeout),
            limits=httpx.Limits(max_connections=settings.max_connections),
            follow_redirects=settings.follow_redirects,
            verify=config.verify_tls,
            headers={"User-Agent": settings.user_agent},
            transport=self._transport,
        )

    def send(self, config: RequestConfig) -> str:
        """
        Exécute la requête une seule fois (aucun retry) et retourne le corps brut.
        Un statut 4xx/5xx n'est pas une erreur : seul un échec du transport
        lève une TransportError.
        """
        headers = dict(config.headers)
        if config.body is not None:
            headers.setdefault("Content-Type", FORM_CONTENT_TYPE)

        logger.debug(f"➡️ {config.method} {config.url}")

        try:
            with self._build_client(config) as client:
                response = client.request(
                    config.method,
                    config.url,
                    content=config.body,
                    headers=headers,
                    auth=config.auth,
                )
        except httpx.HTTPError as e:
            # erreurs de connexion / timeout / redirections de httpx
            logger.error(f"HTTPX Error on {config.url}: {e}")
            raise TransportError(f"{type(e).__name__}: {e}") from e

        logger.debug(f"⬅️ Response {response.status_code}: {response.text[:300]}")
        return response.text

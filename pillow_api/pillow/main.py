import argparse
import json
import sys
from typing import List, Optional

from pillow_api.core.logger import get_logger
from pillow_api.pillow.api_client import Pillow
from pillow_api.pillow.schema import Authorization

log = get_logger(__name__)


def parse_params(params: List[str]) -> dict:
    """KEY=VALUE -> dict. Une clé répétée est transmise plusieurs fois."""
    pairs = []
    for item in params:
        if "=" not in item:
            raise argparse.ArgumentTypeError(f"Paramètre invalide (attendu KEY=VALUE) : {item}")
        key, value = item.split("=", 1)
        pairs.append((key, value))

    out: dict = {}
    for key, value in pairs:
        if key in out:
            out[key] = (out[key] if isinstance(out[key], list) else [out[key]]) + [value]
        else:
            out[key] = value
    return out


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pillow-call",
        description="Appelle une opération REST dont le chemin est déduit du nom (v1OauthAccess_token -> v1/oauth/access_token/).",
    )
    parser.add_argument("api_url", help="URL de base, terminée par '/'")
    parser.add_argument("operation", help="Nom de l'opération (SimpleCall pour l'URL de base)")
    parser.add_argument("param", nargs="*", default=[], help="Paramètres au format KEY=VALUE")
    parser.add_argument("-m", "--method", choices=["get", "post"], default="get", help="Méthode HTTP")
    parser.add_argument("--as", dest="as_", default="json", help="Format de sortie : json (défaut) ou raw")
    parser.add_argument("--user", help="Identifiant pour l'authentification Basic")
    parser.add_argument("--password", help="Mot de passe pour l'authentification Basic")
    parser.add_argument("--verify-tls", action="store_true", default=None, help="Active la vérification TLS")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        params = parse_params(args.param)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))

    authorization = None
    if args.user is not None or args.password is not None:
        authorization = Authorization(name=args.user, password=args.password)

    api = Pillow(args.api_url, logger=log, authorization=authorization, verify_tls=args.verify_tls)
    call = api.call(args.operation)
    result = call.post(params, args.as_) if args.method == "post" else call.get(params, args.as_)

    if result is False:
        print(f"Aucune donnée reçue de {call.request_url}", file=sys.stderr)
        return 1

    if args.as_ == "json":
        print(json.dumps(result, indent=2, ensure_ascii=False))
    else:
        print(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())

# pillow_api/pillow/params.py

from typing import Any, Dict, Iterator, Mapping, Optional, Tuple
from urllib.parse import quote_plus


# --- Encodage form-urlencoded (conventions de http_build_query) ---

def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


def _flatten(prefix: str, value: Any) -> Iterator[Tuple[str, str]]:
    if value is None:
        return
    if isinstance(value, Mapping):
        items = value.items()
    elif isinstance(value, (list, tuple)):
        items = enumerate(value)
    else:
        yield prefix, _scalar(value)
        return
    for key, item in items:
        yield from _flatten(f"{prefix}[{key}]", item)


def build_query(arguments: Optional[Mapping[str, Any]]) -> str:
    """
    Sérialise un dictionnaire en query string form-urlencoded.

    L'ordre d'insertion est conservé, les listes et dictionnaires imbriqués
    utilisent la notation à crochets (a[0]=1&a[1]=2, a[b]=c) et les
    valeurs None sont ignorées.
    """
    if not arguments:
        return ""
    pairs = []
    for key, value in arguments.items():
        for name, scalar in _flatten(str(key), value):
            pairs.append(f"{quote_plus(name)}={quote_plus(scalar)}")
    return "&".join(pairs)


# --- Accumulateur des paramètres POST ---

class PostParams:
    """
    Paramètres POST d'une requête.

    Une clé posée une seule fois garde sa valeur ; posée de nouveau, une
    valeur scalaire devient la liste [ancienne, nouvelle] et une valeur déjà
    liste reçoit la nouvelle valeur en fin de liste. Une clé dont la valeur
    est None est traitée comme absente.
    """

    def __init__(self):
        self._params: Dict[str, Any] = {}

    def set(self, key: str, value: Any) -> None:
        # une valeur None compte comme absente : elle est remplacée
        if self._params.get(key) is None:
            # copie : la liste de l'appelant ne doit pas être modifiée
            self._params[key] = list(value) if isinstance(value, (list, tuple)) else value
            return

        current = self._params[key]
        if isinstance(current, list):
            current.append(value)
        else:
            self._params[key] = [current, value]

    def update(self, arguments: Mapping[str, Any]) -> None:
        for key, value in arguments.items():
            self.set(key, value)

    def get(self) -> Optional[Dict[str, Any]]:
        """Retourne None si aucune clé n'a été posée (pas de corps)"""
        if not self._params:
            return None
        return {key: list(value) if isinstance(value, list) else value
                for key, value in self._params.items()}

    def __len__(self) -> int:
        return len(self._params)

    def __repr__(self) -> str:
        return f"PostParams({self.get()!r})"

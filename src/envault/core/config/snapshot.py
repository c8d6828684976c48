# src/envault/core/config/snapshot.py
"""
Immutable Config Snapshot.

Cópia profundamente congelada do mapa validado, entregue ao código da
aplicação. Nenhum campo pode ser alterado após a construção:

    - dicionários aninhados viram `MappingProxyType` sobre cópias privadas
    - listas viram tuplas
    - atribuição de item ou de atributo levanta `TypeError`/`AttributeError`

Um snapshot nunca é atualizado; recarregar produz um novo snapshot.

Igualdade é a de `Mapping` (por conteúdo); por isso o snapshot não é
hashable. Para identidade estável use `fingerprint`.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Dict, Iterator, Optional

from .hashing import compute_config_hash


def freeze(value: Any) -> Any:
    """Congela recursivamente dicts (→ mapping proxy) e listas (→ tupla)."""
    if isinstance(value, Mapping):
        return MappingProxyType({k: freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(v) for v in value)
    return value


def thaw(value: Any) -> Any:
    """Inverso de `freeze`: devolve dicts e listas mutáveis."""
    if isinstance(value, Mapping):
        return {k: thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [thaw(v) for v in value]
    return value


class ConfigSnapshot(Mapping):
    """
    Mapa read-only de configuração carregada.

    Campos:
    - source: caminho resolvido do arquivo de origem (None se sintético)
    - fingerprint: SHA-256 canônico do conteúdo
    """

    __slots__ = ("_data", "_source", "_fingerprint")

    def __init__(self, data: Optional[Mapping[str, Any]] = None, *, source: Optional[str] = None) -> None:
        frozen = {k: freeze(v) for k, v in (data or {}).items()}
        object.__setattr__(self, "_data", frozen)
        object.__setattr__(self, "_source", source)
        object.__setattr__(self, "_fingerprint", compute_config_hash(frozen))

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("ConfigSnapshot é imutável")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("ConfigSnapshot é imutável")

    def __repr__(self) -> str:
        return f"ConfigSnapshot(source={self._source!r}, keys={list(self._data)!r})"

    @property
    def source(self) -> Optional[str]:
        return self._source

    @property
    def fingerprint(self) -> str:
        return self._fingerprint

    def to_dict(self) -> Dict[str, Any]:
        """Retorna cópia profunda mutável (dicts e listas comuns)."""
        return {k: thaw(v) for k, v in self._data.items()}

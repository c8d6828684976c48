# src/envault/core/env/sink.py
"""
Tabela de ambiente como colaborador explícito.

O ambiente do processo é um estado global. Aqui ele é tratado como uma
interface (`EnvironmentSink`) injetada em quem precisa ler ou escrever
variáveis, de modo que testes possam substituí-lo por uma tabela em memória.

Componentes:
    - EnvironmentSink     → protocolo (`get`, `set`, `in`)
    - ProcessEnvironment  → adapter sobre `os.environ`
    - InMemoryEnvironment → tabela isolada para testes e sandboxes
    - merge_into_environment → grava um mapa plano no sink
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict, Iterator, Mapping, MutableMapping, Optional, Protocol, runtime_checkable

from ..errors import EnvironmentConflictError


@runtime_checkable
class EnvironmentSink(Protocol):
    """Tabela de variáveis de ambiente (nome -> string)."""

    def get(self, name: str) -> Optional[str]:
        ...

    def set(self, name: str, value: str) -> None:
        ...

    def __contains__(self, name: object) -> bool:
        ...


class _MappingEnvironment:
    def __init__(self, table: MutableMapping[str, str]) -> None:
        self._table = table

    def get(self, name: str) -> Optional[str]:
        return self._table.get(name)

    def set(self, name: str, value: str) -> None:
        self._table[name] = str(value)

    def __contains__(self, name: object) -> bool:
        return name in self._table

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)


class ProcessEnvironment(_MappingEnvironment):
    """Adapter sobre `os.environ` (efeito global)."""

    def __init__(self) -> None:
        super().__init__(os.environ)


class InMemoryEnvironment(_MappingEnvironment):
    """Tabela isolada; nunca toca o ambiente do processo."""

    def __init__(self, initial: Optional[Mapping[str, str]] = None) -> None:
        super().__init__(dict(initial or {}))

    def as_dict(self) -> Dict[str, str]:
        return dict(self._table)


def stringify_env_value(value: Any) -> str:
    """
    Converte um valor de configuração para a forma textual do ambiente.

    - bool → "true"/"false" (mesma grafia aceita pelo coercer)
    - None → "null" (o coercer devolve None)
    - dict/list/tuple (ou mapas read-only) → JSON canônico
    - demais → `str(value)`
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, Mapping):
        return json.dumps(_plain(value), sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    if isinstance(value, (list, tuple)):
        return json.dumps(_plain(value), sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return str(value)


def _plain(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def merge_into_environment(
    values: Mapping[str, Any],
    env: Optional[EnvironmentSink] = None,
    *,
    override: bool = False,
) -> None:
    """
    Grava cada par de `values` no ambiente, sempre como string.

    Args:
        values: mapa plano (ex.: um `ConfigSnapshot`).
        env: destino; padrão é o ambiente do processo.
        override: quando False, uma variável já existente é erro.

    Raises:
        TypeError: se `values` não for um mapeamento.
        EnvironmentConflictError: variável existente com override desabilitado.
    """
    if not isinstance(values, Mapping):
        raise TypeError(
            f"merge_into_environment requer um mapeamento, recebido: {type(values).__name__}"
        )

    env = env if env is not None else ProcessEnvironment()

    # conflitos são verificados antes de qualquer escrita: sem merge parcial
    if not override:
        for name in values:
            if name in env:
                raise EnvironmentConflictError(name)

    for name, value in values.items():
        env.set(name, stringify_env_value(value))

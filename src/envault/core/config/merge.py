# src/envault/core/config/merge.py
"""
Política canônica de sobreposição (layering) de configurações.

Quando vários arquivos de configuração são carregados para compor uma única
configuração efetiva, as camadas são sobrepostas na ordem recebida.

Política de layering (v1):
    - sobrescrita rasa: a chave inteira é substituída, mesmo se for um dict
    - última camada vence, sem verificação de tipo
    - chaves não sobrescritas são preservadas

A mesma política vale dentro de um arquivo (última linha vence), de modo
que "arquivo posterior sobrescreve arquivo anterior" e "linha posterior
sobrescreve linha anterior" se comportam igual.

Invariantes:
    - Nenhum input é mutado
    - A mesma sequência de camadas sempre produz o mesmo resultado

Limites explícitos:
    - Não faz deep-merge
    - Não carrega arquivos
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Optional

from .snapshot import ConfigSnapshot, thaw


def layer_configs(layers: Iterable[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Sobrepõe mapas em ordem, com a última ocorrência de cada chave vencendo.

    Args:
        layers: mapas (dicts ou snapshots) na ordem de precedência crescente.

    Returns:
        Dict[str, Any]: novo dicionário mutável resultante.
    """
    result: Dict[str, Any] = {}
    for layer in layers:
        for key, value in layer.items():
            result[key] = thaw(value)
    return result


def layer_snapshots(
    snapshots: Iterable[Mapping[str, Any]],
    *,
    source: Optional[str] = None,
) -> ConfigSnapshot:
    """Sobrepõe snapshots e congela o resultado em um novo `ConfigSnapshot`."""
    return ConfigSnapshot(layer_configs(snapshots), source=source)

# src/envault/core/config/hashing.py
"""
Hashing canônico de configuração do Envault.

O hash representa a **identidade estrutural** de uma configuração carregada
e é exposto como `ConfigSnapshot.fingerprint`, permitindo:
    - detectar que uma recarga produziu configuração diferente
    - registrar em log qual configuração está ativa sem expor valores

Política de hashing (v1):
    - Serialização JSON canônica (chaves ordenadas, separadores compactos)
    - Codificação UTF-8
    - Algoritmo SHA-256
    - Valores não serializáveis em JSON são representados por `str(value)`

Invariantes:
    - Configurações estruturalmente equivalentes produzem o mesmo hash
    - O valor gerado é sempre uma string hexadecimal de 64 caracteres
    - Nenhuma mutação ocorre sobre o input

Limites explícitos:
    - Não carrega nem valida configuração
    - Não é um MAC: não autentica o conteúdo
"""

import hashlib
import json
from typing import Any, Mapping


def _plain(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {str(k): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def compute_config_hash(config: Mapping[str, Any]) -> str:
    """
    Gera um hash SHA-256 determinístico da configuração.

    Aceita dicionários comuns e mapas read-only (inclusive `ConfigSnapshot`);
    tuplas são tratadas como listas. Valores que o JSON não representa
    (ex.: `timedelta`, `Decimal`, `Path`) entram pela forma `str()`, de modo
    que o hashing nunca impede uma carga válida.

    Args:
        config: configuração a ser identificada.

    Returns:
        str: hash hexadecimal de 64 caracteres.

    Raises:
        TypeError: se o objeto fornecido não for um mapeamento.
    """
    if not isinstance(config, Mapping):
        raise TypeError(
            f"Config para hashing deve ser mapeamento, recebido: {type(config).__name__}"
        )

    canonical_json = json.dumps(
        _plain(config),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )

    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()

# src/envault/core/settings.py
"""
Constantes e detecção de modo de execução do Envault.

Centraliza nomes de variáveis de ambiente, nome padrão do arquivo de chave
e os tamanhos fixos do envelope criptográfico.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .env.sink import EnvironmentSink


# Variável de ambiente que transporta a chave hexadecimal.
ENCRYPT_KEY_VAR = "ENCRYPT_KEY"

# Nome convencional do arquivo de chave (texto UTF-8, trimado).
DEFAULT_KEY_FILE = "_secret.key"

# Variável que define o modo de execução; "production" ativa a precedência do ambiente.
MODE_VAR = "APP_ENV"
PRODUCTION_MODE = "production"

# Envelope: IV(16) || ciphertext(AES-256-CBC, múltiplo de 16)
KEY_SIZE = 32
IV_SIZE = 16
BLOCK_SIZE_BITS = 128
KEY_HEX_LENGTH = KEY_SIZE * 2


def is_production(env: "EnvironmentSink") -> bool:
    """Indica se o ambiente declara modo de produção via `APP_ENV`."""
    mode = env.get(MODE_VAR)
    return bool(mode) and mode.strip().lower() == PRODUCTION_MODE

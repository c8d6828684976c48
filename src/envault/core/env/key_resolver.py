# src/envault/core/env/key_resolver.py
"""
Resolução externa da chave de cifragem.

Política de precedência:
    - fora de produção: o arquivo de chave, se existir, sempre vence e é
      copiado para `ENCRYPT_KEY` no ambiente
    - em produção: `ENCRYPT_KEY` já definido vence; na ausência, o arquivo
      é lido e copiado para o ambiente

Em ambos os casos o valor final é lido de `ENCRYPT_KEY` e precisa ter
exatamente 64 caracteres.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from ..errors import IOFailureError, KeyUnavailableError
from ..settings import DEFAULT_KEY_FILE, ENCRYPT_KEY_VAR, KEY_HEX_LENGTH, is_production
from .sink import EnvironmentSink, ProcessEnvironment

logger = logging.getLogger(__name__)


def _read_key_file(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise IOFailureError(
            f"Falha ao ler arquivo de chave: {path}", filename=str(path)
        ) from exc


def resolve_external_key(
    filename: Union[str, Path] = DEFAULT_KEY_FILE,
    *,
    env: Optional[EnvironmentSink] = None,
    production: Optional[bool] = None,
    cwd: Optional[Union[str, Path]] = None,
) -> str:
    """
    Resolve a chave hexadecimal a partir do ambiente ou de um arquivo.

    Args:
        filename: arquivo de chave (relativo a `cwd` quando não absoluto).
        env: tabela de ambiente; padrão é o ambiente do processo.
        production: força o modo; None consulta `APP_ENV` no próprio `env`.
        cwd: diretório base para caminhos relativos.

    Returns:
        str: chave com 64 caracteres.

    Raises:
        KeyUnavailableError: se nenhuma fonte fornecer 64 caracteres.
        IOFailureError: se o arquivo existir mas não puder ser lido.
    """
    env = env if env is not None else ProcessEnvironment()
    if production is None:
        production = is_production(env)

    path = Path(filename)
    if not path.is_absolute():
        path = Path(cwd or Path.cwd()) / path

    if not production or not env.get(ENCRYPT_KEY_VAR):
        if path.exists():
            logger.debug("Chave carregada do arquivo: %s", path)
            env.set(ENCRYPT_KEY_VAR, _read_key_file(path))
    else:
        logger.debug("Chave obtida de %s (produção)", ENCRYPT_KEY_VAR)

    key = env.get(ENCRYPT_KEY_VAR)
    if not key or len(key) != KEY_HEX_LENGTH:
        raise KeyUnavailableError(
            f"Chave de cifragem ausente ou inválida. Esperado string de {KEY_HEX_LENGTH} caracteres."
        )

    return key

# src/envault/core/config/multi.py
"""
Carregamento de múltiplos arquivos de configuração via padrão glob.

Política:
    - o padrão é expandido com `glob` (suporta `**`) relativo a `cwd`
    - os caminhos são absolutizados e ordenados, o que dá uma ordem de
      expansão estável entre plataformas
    - nenhum arquivo encontrado é erro (`NoFilesMatchedError`)
    - os arquivos são carregados um a um; a primeira falha aborta a
      chamada inteira e é propagada com o arquivo anexado
    - não existe modo de sucesso parcial
"""

from __future__ import annotations

import glob
import logging
import os
from pathlib import Path
from typing import Any, List, Optional, Union

from ..errors import EnvaultError, NoFilesMatchedError
from .loader import KeyLike, LoadOptions, load_config_file
from .merge import layer_snapshots
from .snapshot import ConfigSnapshot

logger = logging.getLogger(__name__)


def expand_pattern(pattern: str, *, cwd: Optional[Union[str, Path]] = None) -> List[str]:
    """Expande `pattern` em caminhos absolutos ordenados."""
    base = str(cwd or Path.cwd())
    full = pattern if os.path.isabs(pattern) else os.path.join(glob.escape(base), pattern)
    return sorted(os.path.abspath(p) for p in glob.glob(full, recursive=True))


def load_config_files(
    pattern: str,
    key: KeyLike = None,
    schema: Any = None,
    options: Optional[LoadOptions] = None,
    *,
    cwd: Optional[Union[str, Path]] = None,
) -> List[ConfigSnapshot]:
    """
    Carrega todos os arquivos que correspondem a `pattern`.

    Returns:
        List[ConfigSnapshot]: um snapshot por arquivo, na ordem de expansão.

    Raises:
        NoFilesMatchedError: se o padrão não encontrar arquivos.
        EnvaultError: a primeira falha por arquivo, com `filename` definido.
    """
    files = expand_pattern(pattern, cwd=cwd)
    logger.debug("load_config_files: %s -> %d arquivo(s)", pattern, len(files))

    if not files:
        raise NoFilesMatchedError(pattern)

    configs: List[ConfigSnapshot] = []
    for file in files:
        try:
            configs.append(load_config_file(file, key, schema, options))
        except EnvaultError as err:
            if err.filename is None:
                err.filename = file
            logger.error('Erro ao carregar arquivo de configuração "%s": %s', file, err)
            raise

    return configs


def load_layered_config(
    pattern: str,
    key: KeyLike = None,
    schema: Any = None,
    options: Optional[LoadOptions] = None,
    *,
    cwd: Optional[Union[str, Path]] = None,
) -> ConfigSnapshot:
    """
    Carrega os arquivos de `pattern` e os sobrepõe em um único snapshot.

    Arquivos posteriores na ordem de expansão sobrescrevem chaves de
    arquivos anteriores (ver `config.merge`).
    """
    snapshots = load_config_files(pattern, key, schema, options, cwd=cwd)
    return layer_snapshots(snapshots, source=pattern)

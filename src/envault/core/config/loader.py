# src/envault/core/config/loader.py
"""
Loader canônico de configuração do Envault.

Este módulo orquestra o carregamento de um único arquivo de configuração:

    existência → leitura (em claro ou decifrada) → parse → schema → snapshot

Responsabilidades do módulo:
    - Resolver o caminho relativo contra o diretório de trabalho
    - Decifrar o arquivo quando uma chave é fornecida
    - Fazer o parse `key=value` com coerção de tipos
    - Invocar o validador de schema opcional e reportar todas as violações
    - Congelar o resultado em um `ConfigSnapshot`

Princípios fundamentais:
    - Erros estruturais são falhas fatais; nada é retentado
    - Toda falha carrega o arquivo de origem
    - O modo verbose é puramente observacional

Invariantes:
    - Em caso de erro nenhum snapshot parcial é produzido
    - O retorno é sempre um `ConfigSnapshot` novo

Limites explícitos:
    - Não expande padrões glob (ver `config.multi`)
    - Não escreve no ambiente do processo
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from ..crypto.files import decrypt_bytes_from_file
from ..crypto.keys import KeyMaterial
from ..errors import (
    CipherError,
    ConfigFileNotFoundError,
    DecryptionFailedError,
    IOFailureError,
    ValidationFailedError,
)
from .coerce import coerce_primitive
from .parser import Coercer, parse_config_text
from .schema import normalize_validation_result
from .snapshot import ConfigSnapshot

logger = logging.getLogger(__name__)

KeyLike = Union[KeyMaterial, str, None]


@dataclass(frozen=True)
class LoadOptions:
    """
    Opções de carregamento.

    - verbose: registra uma linha INFO por chave carregada
    - encoding: codificação de arquivos em claro
    - coerce: coercer de tokens literais
    """

    verbose: bool = False
    encoding: str = "utf-8"
    coerce: Coercer = coerce_primitive


def _resolve_key(key: KeyLike) -> Optional[KeyMaterial]:
    if key is None or key == "":
        return None
    if isinstance(key, KeyMaterial):
        return key
    return KeyMaterial.from_hex(key)


def _resolve_path(filename: Union[str, Path], cwd: Optional[Union[str, Path]]) -> Path:
    path = Path(filename)
    if not path.is_absolute():
        path = Path(cwd or Path.cwd()) / path
    return path.resolve()


def _read_plaintext(path: Path, filename: str, encoding: str) -> str:
    try:
        return path.read_text(encoding=encoding)
    except UnicodeDecodeError as exc:
        raise IOFailureError(
            f"Arquivo de configuração não está em {encoding}: {filename}", filename=filename
        ) from exc
    except OSError as exc:
        raise IOFailureError(
            f"Falha ao ler arquivo de configuração: {filename}", filename=filename
        ) from exc


def _read_encrypted(path: Path, filename: str, key: KeyMaterial) -> str:
    try:
        return decrypt_bytes_from_file(key, path).decode("utf-8")
    except (CipherError, UnicodeDecodeError) as exc:
        message = f"Falha ao decifrar arquivo. ({filename})"
        logger.debug(message)
        raise DecryptionFailedError(message, filename=filename) from exc


def _log_loaded(filename: str, values: Any) -> None:
    logger.info('Configuração carregada de "%s":', filename)
    for key, value in values.items():
        display = json.dumps(value, ensure_ascii=False, default=str) if isinstance(value, (dict, list)) else value
        logger.info("  %s = %s", key, display)


def load_config_file(
    filename: Union[str, Path],
    key: KeyLike = None,
    schema: Any = None,
    options: Optional[LoadOptions] = None,
    *,
    cwd: Optional[Union[str, Path]] = None,
) -> ConfigSnapshot:
    """
    Carrega, decifra (opcional), valida (opcional) e congela um arquivo.

    Args:
        filename: caminho do arquivo (relativo a `cwd` quando não absoluto).
        key: `KeyMaterial`, chave hexadecimal de 64 caracteres ou None para
            arquivo em claro.
        schema: colaborador com `validate(raw_map)`; None desabilita.
        options: `LoadOptions`; padrão sem verbose e UTF-8.
        cwd: diretório base para caminhos relativos.

    Returns:
        ConfigSnapshot: configuração imutável.

    Raises:
        ConfigFileNotFoundError: se o arquivo não existir.
        IOFailureError: se o arquivo não puder ser lido.
        DecryptionFailedError: se a decifragem falhar.
        ValidationFailedError: se o schema reportar violações.
        InvalidKeyLengthError: se `key` for string hexadecimal inválida.
    """
    options = options or LoadOptions()
    material = _resolve_key(key)
    name = str(filename)
    path = _resolve_path(filename, cwd)

    logger.debug("load_config_file: %s (cifrado=%s)", path, material is not None)

    if not path.exists():
        raise ConfigFileNotFoundError(
            f"Arquivo de configuração não encontrado: {path}", filename=name
        )

    if material is None:
        text = _read_plaintext(path, name, options.encoding)
    else:
        text = _read_encrypted(path, name, material)

    parsed = parse_config_text(text, coerce=options.coerce)
    validated = parsed.values

    if schema is not None and callable(getattr(schema, "validate", None)):
        result = normalize_validation_result(schema.validate(dict(parsed.values)), parsed.values)
        if result.errors:
            raise ValidationFailedError(name, result.errors)
        validated = result.validated

    if options.verbose:
        _log_loaded(name, validated)

    return ConfigSnapshot(validated, source=str(path))

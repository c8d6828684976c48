# src/envault/core/crypto/files.py
"""
Variantes em arquivo da cifra simétrica.

Cada função abre o arquivo de origem/destino em um bloco `with`, delega à
operação de buffer correspondente em `crypto.cipher` e libera o handle em
todos os caminhos de saída.

Política de erros:
    - `OSError` vira `IOFailureError` (grosseiro, carrega o arquivo)
    - erros de cifra mantêm seu tipo e recebem o arquivo na mensagem
    - `KeyNotSetError` é verificado antes de qualquer I/O
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..env.sink import EnvironmentSink, ProcessEnvironment
from ..errors import CipherError, DecryptionFailedError, IOFailureError
from .cipher import (
    _require_key,
    decode_json_payload,
    decrypt_bytes,
    decrypt_json,
    encode_json_payload,
    encrypt_bytes,
    encrypt_json,
)
from .keys import KeyMaterial

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _read_bytes(filename: PathLike) -> bytes:
    try:
        with open(filename, "rb") as f:
            return f.read()
    except OSError as exc:
        raise IOFailureError(
            f"Falha ao ler arquivo: {filename}", filename=str(filename)
        ) from exc


def _write_bytes(filename: PathLike, data: bytes) -> None:
    try:
        with open(filename, "wb") as f:
            f.write(data)
    except OSError as exc:
        raise IOFailureError(
            f"Falha ao escrever arquivo: {filename}", filename=str(filename)
        ) from exc


def _annotate(exc: CipherError, filename: PathLike) -> CipherError:
    """Reconstrói o erro de cifra com o arquivo anexado, preservando o tipo."""
    return type(exc)(f"{exc.message} ({filename})", filename=str(filename))


# ---------------------------------------------------------------------------
# Arquivo -> arquivo
# ---------------------------------------------------------------------------

def encrypt_file(key: KeyMaterial, src: PathLike, dst: PathLike) -> None:
    """Cifra o conteúdo de `src` e grava o envelope em `dst`."""
    key = _require_key(key)
    envelope = encrypt_bytes(key, _read_bytes(src))
    _write_bytes(dst, envelope)
    logger.debug("Arquivo cifrado: %s -> %s", src, dst)


def decrypt_file(key: KeyMaterial, src: PathLike, dst: PathLike) -> None:
    """Decifra o envelope em `src` e grava o plaintext em `dst`."""
    plaintext = decrypt_bytes_from_file(key, src)
    _write_bytes(dst, plaintext)
    logger.debug("Arquivo decifrado: %s -> %s", src, dst)


# ---------------------------------------------------------------------------
# Buffers
# ---------------------------------------------------------------------------

def encrypt_bytes_to_file(key: KeyMaterial, data: bytes, filename: PathLike) -> None:
    """Cifra `data` e grava o envelope bruto em `filename`."""
    key = _require_key(key)
    _write_bytes(filename, encrypt_bytes(key, data))


def decrypt_bytes_from_file(key: KeyMaterial, filename: PathLike) -> bytes:
    """Lê um envelope bruto de `filename` e retorna o plaintext."""
    key = _require_key(key)
    envelope = _read_bytes(filename)
    try:
        return decrypt_bytes(key, envelope)
    except CipherError as exc:
        raise _annotate(exc, filename) from exc


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------

def encrypt_json_to_file(key: KeyMaterial, value: Any, filename: PathLike) -> None:
    """Grava `value` como envelope bruto (JSON canônico cifrado)."""
    key = _require_key(key)
    _write_bytes(filename, encrypt_bytes(key, encode_json_payload(value)))


def decrypt_json_from_file(key: KeyMaterial, filename: PathLike) -> Any:
    """Lê um envelope bruto gravado por `encrypt_json_to_file`."""
    plaintext = decrypt_bytes_from_file(key, filename)
    try:
        return decode_json_payload(plaintext)
    except CipherError as exc:
        raise _annotate(exc, filename) from exc


def save_json_to_file(key: KeyMaterial, value: Any, filename: PathLike) -> None:
    """Grava `value` no formato de transporte (base64 em texto)."""
    key = _require_key(key)
    _write_bytes(filename, encrypt_json(key, value).encode("ascii"))


def load_json_from_file(key: KeyMaterial, filename: PathLike) -> Any:
    """Lê o formato de transporte gravado por `save_json_to_file`."""
    key = _require_key(key)
    text = _read_bytes(filename)
    try:
        return decrypt_json(key, text.strip())
    except CipherError as exc:
        raise _annotate(exc, filename) from exc


# ---------------------------------------------------------------------------
# Arquivo de ambiente
# ---------------------------------------------------------------------------

def decrypt_env_from_file(
    key: KeyMaterial,
    filename: PathLike,
    env: Optional[EnvironmentSink] = None,
) -> Dict[str, str]:
    """
    Decifra um arquivo `NAME=value` e grava os pares no ambiente.

    Política best-effort:
        - linhas em branco são ignoradas
        - cada linha é dividida no primeiro `=`
        - linhas sem nome ou sem valor (após trim) são ignoradas em silêncio
        - não há validação nem coerção de tipos

    Args:
        key: material de chave.
        filename: arquivo cifrado.
        env: destino das variáveis; padrão é o ambiente do processo.

    Returns:
        Dict[str, str]: pares efetivamente gravados, na ordem do arquivo.

    Raises:
        KeyNotSetError, IOFailureError, DecryptionFailedError
    """
    env = env if env is not None else ProcessEnvironment()
    plaintext = decrypt_bytes_from_file(key, filename)

    try:
        text = plaintext.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise _annotate(DecryptionFailedError("Plaintext decifrado não é UTF-8"), filename) from exc

    applied: Dict[str, str] = {}
    for line in text.split("\n"):
        if not line.strip():
            continue

        name, sep, value = line.partition("=")
        name, value = name.strip(), value.strip()
        if not sep or not name or not value:
            continue

        env.set(name, value)
        applied[name] = value

    logger.debug("%d variável(is) carregada(s) de %s", len(applied), filename)
    return applied

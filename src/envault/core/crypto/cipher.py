# src/envault/core/crypto/cipher.py
"""
Cifra simétrica canônica do Envault (AES-256-CBC).

Este módulo implementa a primitiva de confidencialidade usada para guardar
configuração em repouso. Todo envelope produzido segue o formato:

    [IV (16 bytes)][ciphertext (múltiplo de 16 bytes)]

Política de cifragem (v1):
    - AES-256 em modo CBC, via `cryptography`
    - Padding PKCS#7 (bloco de 128 bits), aceitando plaintext de qualquer tamanho
    - IV aleatório e novo a cada chamada, prefixado ao ciphertext
    - JSON canônico (chaves ordenadas, separadores compactos) + base64 para
      transporte de valores estruturados

Decisões arquiteturais:
    - Funções puras recebem `KeyMaterial`; `SymmetricCipher` (ver
      `crypto.symmetric`) é apenas um valor imutável que guarda a chave
      e delega a essas funções
    - Nenhuma tag de autenticação: adulteração é detectada apenas
      incidentalmente pelo padding. Adicionar uma tag mudaria o formato de
      fio e quebraria arquivos existentes
    - Erros do backend nunca escapam; são encadeados em `CipherError`

Invariantes:
    - `len(envelope) >= 16` e `(len(envelope) - 16) % 16 == 0`
    - `decrypt_bytes(k, encrypt_bytes(k, b)) == b` para todo `b`
    - Duas cifragens do mesmo plaintext produzem envelopes distintos

Limites explícitos:
    - Não é AEAD
    - Não lê nem escreve arquivos (ver `crypto.files`)
"""

from __future__ import annotations

import base64
import binascii
import json
import os
from typing import Any, Optional

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from ..errors import (
    DecryptionFailedError,
    KeyNotSetError,
    MalformedCiphertextError,
    MalformedPayloadError,
)
from ..settings import BLOCK_SIZE_BITS, IV_SIZE
from .keys import KeyMaterial


_BLOCK_SIZE = BLOCK_SIZE_BITS // 8


def _require_key(key: Optional[KeyMaterial]) -> KeyMaterial:
    if key is None:
        raise KeyNotSetError("Chave não definida")
    if not isinstance(key, KeyMaterial):
        raise KeyNotSetError(
            f"Chave deve ser KeyMaterial, recebido: {type(key).__name__}"
        )
    return key


def canonical_json(value: Any) -> str:
    """Serializa `value` em JSON canônico (mesma política do hashing de config)."""
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


# ---------------------------------------------------------------------------
# Buffers
# ---------------------------------------------------------------------------

def encrypt_bytes(key: KeyMaterial, plaintext: bytes) -> bytes:
    """
    Cifra `plaintext` e retorna o envelope `IV || ciphertext`.

    Raises:
        KeyNotSetError: se nenhuma chave for fornecida.
    """
    key = _require_key(key)

    iv = os.urandom(IV_SIZE)
    padder = padding.PKCS7(BLOCK_SIZE_BITS).padder()
    padded = padder.update(bytes(plaintext)) + padder.finalize()

    encryptor = Cipher(algorithms.AES(key.raw), modes.CBC(iv)).encryptor()
    return iv + encryptor.update(padded) + encryptor.finalize()


def decrypt_bytes(key: KeyMaterial, envelope: bytes) -> bytes:
    """
    Decifra um envelope `IV || ciphertext`.

    Raises:
        KeyNotSetError: se nenhuma chave for fornecida.
        DecryptionFailedError: envelope curto, ciphertext fora do bloco ou
            padding inválido.
    """
    key = _require_key(key)
    envelope = bytes(envelope)

    if len(envelope) < IV_SIZE:
        raise DecryptionFailedError(
            f"Envelope menor que o IV: {len(envelope)} < {IV_SIZE} bytes"
        )

    iv, ciphertext = envelope[:IV_SIZE], envelope[IV_SIZE:]

    # envelope só com IV não possui bloco de padding
    if not ciphertext or len(ciphertext) % _BLOCK_SIZE != 0:
        raise DecryptionFailedError(
            f"Ciphertext com tamanho inválido: {len(ciphertext)} bytes "
            f"(esperado múltiplo não nulo de {_BLOCK_SIZE})"
        )

    decryptor = Cipher(algorithms.AES(key.raw), modes.CBC(iv)).decryptor()
    padded = decryptor.update(ciphertext) + decryptor.finalize()

    unpadder = padding.PKCS7(BLOCK_SIZE_BITS).unpadder()
    try:
        return unpadder.update(padded) + unpadder.finalize()
    except ValueError as exc:
        raise DecryptionFailedError("Padding inválido: chave incorreta ou dado corrompido") from exc


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------

def encrypt_json(key: KeyMaterial, value: Any) -> str:
    """Cifra um valor serializável em JSON e retorna o envelope em base64."""
    key = _require_key(key)
    envelope = encrypt_bytes(key, encode_json_payload(value))
    return base64.b64encode(envelope).decode("ascii")


def encode_json_payload(value: Any) -> bytes:
    """
    Converte um valor em plaintext JSON canônico (UTF-8).

    Raises:
        MalformedPayloadError: se o valor não for serializável em JSON
            canônico (tipos não suportados, chaves de tipos mistos, ciclos).
    """
    try:
        return canonical_json(value).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise MalformedPayloadError(f"Valor não serializável em JSON canônico: {exc}") from exc


def decode_json_payload(plaintext: bytes) -> Any:
    """Converte plaintext decifrado em valor JSON."""
    try:
        return json.loads(plaintext.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as exc:
        raise MalformedPayloadError("Payload decifrado não é JSON UTF-8 válido") from exc


def decrypt_json(key: KeyMaterial, text: str) -> Any:
    """
    Decifra o texto base64 produzido por `encrypt_json`.

    Raises:
        KeyNotSetError: se nenhuma chave for fornecida.
        MalformedCiphertextError: se o texto não for base64 válido.
        DecryptionFailedError: se o envelope não puder ser decifrado.
        MalformedPayloadError: se o plaintext não for JSON válido.
    """
    key = _require_key(key)

    if isinstance(text, bytes):
        raw_text = text
    elif isinstance(text, str):
        try:
            raw_text = text.strip().encode("ascii")
        except UnicodeEncodeError as exc:
            raise MalformedCiphertextError("Texto cifrado contém caracteres não base64") from exc
    else:
        raise MalformedCiphertextError(
            f"Texto cifrado deve ser str, recebido: {type(text).__name__}"
        )

    try:
        envelope = base64.b64decode(raw_text, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise MalformedCiphertextError("Texto cifrado não é base64 válido") from exc

    return decode_json_payload(decrypt_bytes(key, envelope))

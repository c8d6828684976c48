# src/envault/core/crypto/keys.py
"""
Provedor canônico de material de chave do Envault.

Este módulo resolve a chave de 256 bits usada pela cifra simétrica a partir
de uma de três proveniências:
    - RANDOM   → gerada com aleatoriedade criptográfica
    - PASSWORD → derivada deterministicamente de uma senha (SHA-256)
    - EXPLICIT → fornecida externamente como string hexadecimal

Decisões arquiteturais:
    - `KeyMaterial` é um valor imutável; "trocar a chave" significa
      construir outro valor
    - A proveniência é explícita e mutuamente exclusiva por instância
    - A derivação por senha é um hash único (SHA-256), compatível com
      arquivos já cifrados; não é um KDF com sal

Invariantes:
    - `raw` possui exatamente 32 bytes
    - A mesma senha sempre produz a mesma chave
    - `repr()` nunca expõe os bytes da chave

Limites explícitos:
    - Não lê arquivos nem variáveis de ambiente (ver `env.key_resolver`)
    - Não cifra nem decifra dados
"""

from __future__ import annotations

import binascii
import hashlib
import secrets
from dataclasses import dataclass, field
from enum import Enum

from ..errors import InvalidKeyLengthError, InvalidPasswordError
from ..settings import KEY_HEX_LENGTH, KEY_SIZE


class KeySource(str, Enum):
    """Proveniência do material de chave."""

    RANDOM = "random"
    PASSWORD = "password"
    EXPLICIT = "explicit"


@dataclass(frozen=True)
class KeyMaterial:
    """
    Material de chave opaco de 32 bytes.

    Campos:
    - raw: bytes da chave (exatamente 32)
    - source: proveniência (RANDOM, PASSWORD ou EXPLICIT)
    """

    raw: bytes = field(repr=False)
    source: KeySource

    def __post_init__(self) -> None:
        if not isinstance(self.raw, (bytes, bytearray)) or len(self.raw) != KEY_SIZE:
            size = len(self.raw) if isinstance(self.raw, (bytes, bytearray)) else "?"
            raise InvalidKeyLengthError(
                f"Chave deve possuir {KEY_SIZE} bytes, recebido: {size}"
            )
        object.__setattr__(self, "raw", bytes(self.raw))

    @classmethod
    def generate(cls) -> "KeyMaterial":
        """Gera 32 bytes aleatórios com `secrets`."""
        return cls(raw=secrets.token_bytes(KEY_SIZE), source=KeySource.RANDOM)

    @classmethod
    def from_hex(cls, value: str) -> "KeyMaterial":
        """
        Constrói a chave a partir da forma hexadecimal exportável.

        Args:
            value: string de 64 caracteres hexadecimais (espaços nas bordas
                são removidos, como em arquivos de chave).

        Raises:
            InvalidKeyLengthError: se o valor não decodifica para 32 bytes.
        """
        if not isinstance(value, str):
            raise InvalidKeyLengthError(
                f"Chave hexadecimal deve ser str, recebido: {type(value).__name__}"
            )

        text = value.strip()
        if len(text) != KEY_HEX_LENGTH:
            raise InvalidKeyLengthError(
                f"Chave deve possuir {KEY_HEX_LENGTH} caracteres hexadecimais, recebido: {len(text)}"
            )

        try:
            raw = bytes.fromhex(text)
        except (ValueError, binascii.Error) as exc:
            raise InvalidKeyLengthError("Chave não é uma string hexadecimal válida") from exc

        return cls(raw=raw, source=KeySource.EXPLICIT)

    @classmethod
    def from_password(cls, password: str) -> "KeyMaterial":
        """
        Deriva a chave via SHA-256 dos bytes UTF-8 da senha.

        Raises:
            InvalidPasswordError: se a senha for vazia ou não for `str`.
        """
        if not isinstance(password, str) or len(password) == 0:
            raise InvalidPasswordError("Senha deve ser uma string não vazia")

        digest = hashlib.sha256(password.encode("utf-8")).digest()
        return cls(raw=digest, source=KeySource.PASSWORD)

    def to_hex(self) -> str:
        return self.raw.hex()


def generate_key_hex() -> str:
    """Gera uma chave aleatória e retorna sua forma exportável (64 hex)."""
    return KeyMaterial.generate().to_hex()

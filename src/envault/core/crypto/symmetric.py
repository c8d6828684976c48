# src/envault/core/crypto/symmetric.py
"""
SymmetricCipher: a cifra como valor imutável.

Guarda o material de chave (ou sua ausência) e expõe as operações de
`crypto.cipher` e `crypto.files` sem o argumento `key`. Para trocar de chave,
construa outra instância: a original nunca muda, então pode ser
compartilhada entre threads sem coordenação.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from . import cipher, files
from .keys import KeyMaterial


@dataclass(frozen=True)
class SymmetricCipher:
    """Cifra AES-256-CBC associada a um `KeyMaterial` (opcional)."""

    key: Optional[KeyMaterial] = None

    @classmethod
    def from_hex(cls, value: str) -> "SymmetricCipher":
        return cls(KeyMaterial.from_hex(value))

    @classmethod
    def from_password(cls, password: str) -> "SymmetricCipher":
        return cls(KeyMaterial.from_password(password))

    @classmethod
    def generate(cls) -> "SymmetricCipher":
        return cls(KeyMaterial.generate())

    def with_key_hex(self, value: str) -> "SymmetricCipher":
        return SymmetricCipher(KeyMaterial.from_hex(value))

    def with_password(self, password: str) -> "SymmetricCipher":
        return SymmetricCipher(KeyMaterial.from_password(password))

    def with_generated_key(self) -> "SymmetricCipher":
        return SymmetricCipher(KeyMaterial.generate())

    @property
    def has_key(self) -> bool:
        return self.key is not None

    @property
    def key_hex(self) -> str:
        return cipher._require_key(self.key).to_hex()

    # -----------------------------
    # Buffers e JSON
    # -----------------------------
    def encrypt_bytes(self, plaintext: bytes) -> bytes:
        return cipher.encrypt_bytes(self.key, plaintext)

    def decrypt_bytes(self, envelope: bytes) -> bytes:
        return cipher.decrypt_bytes(self.key, envelope)

    def encrypt_json(self, value: Any) -> str:
        return cipher.encrypt_json(self.key, value)

    def decrypt_json(self, text: str) -> Any:
        return cipher.decrypt_json(self.key, text)

    # -----------------------------
    # Arquivos
    # -----------------------------
    def encrypt_file(self, src, dst) -> None:
        files.encrypt_file(self.key, src, dst)

    def decrypt_file(self, src, dst) -> None:
        files.decrypt_file(self.key, src, dst)

    def encrypt_bytes_to_file(self, data: bytes, filename) -> None:
        files.encrypt_bytes_to_file(self.key, data, filename)

    def decrypt_bytes_from_file(self, filename) -> bytes:
        return files.decrypt_bytes_from_file(self.key, filename)

    def encrypt_json_to_file(self, value: Any, filename) -> None:
        files.encrypt_json_to_file(self.key, value, filename)

    def decrypt_json_from_file(self, filename) -> Any:
        return files.decrypt_json_from_file(self.key, filename)

    def save_json_to_file(self, value: Any, filename) -> None:
        files.save_json_to_file(self.key, value, filename)

    def load_json_from_file(self, filename) -> Any:
        return files.load_json_from_file(self.key, filename)

    def decrypt_env_from_file(self, filename, env=None) -> Dict[str, str]:
        return files.decrypt_env_from_file(self.key, filename, env)

# tests/core/crypto/test_keys.py
"""
Testes do provedor de material de chave.

Os testes asseguram que:
- chaves aleatórias possuem 32 bytes e forma exportável de 64 hex
- chaves hexadecimais com tamanho diferente de 64 caracteres são rejeitadas
- a derivação por senha é determinística e rejeita senha vazia
- a proveniência (RANDOM, PASSWORD, EXPLICIT) é registrada
"""

import hashlib

import pytest

from envault.core.crypto.keys import KeyMaterial, KeySource, generate_key_hex
from envault.core.errors import InvalidKeyLengthError, InvalidPasswordError


def test_generate_returns_32_random_bytes():
    a = KeyMaterial.generate()
    b = KeyMaterial.generate()

    assert len(a.raw) == 32
    assert a.source == KeySource.RANDOM
    assert a.raw != b.raw


def test_generate_key_hex_is_64_hex_chars():
    value = generate_key_hex()

    assert len(value) == 64
    assert bytes.fromhex(value)


def test_from_hex_accepts_64_chars():
    hex_key = "ab" * 32
    material = KeyMaterial.from_hex(hex_key)

    assert material.raw == bytes.fromhex(hex_key)
    assert material.source == KeySource.EXPLICIT
    assert material.to_hex() == hex_key


@pytest.mark.parametrize("length", [63, 65, 0, 32])
def test_from_hex_rejects_wrong_length(length):
    with pytest.raises(InvalidKeyLengthError):
        KeyMaterial.from_hex("a" * length)


def test_from_hex_rejects_non_hex():
    with pytest.raises(InvalidKeyLengthError):
        KeyMaterial.from_hex("zz" * 32)


def test_from_hex_strips_whitespace_like_key_files():
    hex_key = "0f" * 32
    assert KeyMaterial.from_hex(f"  {hex_key}\n").to_hex() == hex_key


def test_password_derivation_is_deterministic():
    """
    Verifica que a mesma senha produz a mesma chave em instâncias novas.

    Invariantes:
        - A chave é SHA-256 dos bytes UTF-8 da senha
        - Duas derivações independentes são idênticas
    """
    first = KeyMaterial.from_password("x")
    second = KeyMaterial.from_password("x")

    assert first.raw == second.raw
    assert first.raw == hashlib.sha256(b"x").digest()
    assert first.source == KeySource.PASSWORD


def test_password_derivation_is_utf8():
    material = KeyMaterial.from_password("sênha")
    assert material.raw == hashlib.sha256("sênha".encode("utf-8")).digest()


@pytest.mark.parametrize("password", ["", None, 123])
def test_invalid_password_rejected(password):
    with pytest.raises(InvalidPasswordError):
        KeyMaterial.from_password(password)


def test_key_material_is_immutable_and_hidden_from_repr():
    material = KeyMaterial.from_password("secret")

    with pytest.raises(AttributeError):
        material.raw = b"\x00" * 32  # type: ignore[misc]

    assert material.raw.hex() not in repr(material)


def test_direct_construction_validates_length():
    with pytest.raises(InvalidKeyLengthError):
        KeyMaterial(raw=b"short", source=KeySource.EXPLICIT)

# src/envault/core/config/coerce.py
"""Coerção de tokens literais em valores primitivos."""

from __future__ import annotations

import re
from typing import Any

_INT_RE = re.compile(r"^[+-]?\d+$")
_FLOAT_RE = re.compile(r"^[+-]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?$")

_BOOLEANS = {"true": True, "false": False}


def _has_leading_zero(token: str) -> bool:
    digits = token.lstrip("+-")
    return len(digits) > 1 and digits.startswith("0") and not digits.startswith("0.")


def coerce_primitive(token: str) -> Any:
    """
    Converte um token literal em bool, None, int, float ou str.

    Regras (v1):
        - "true"/"false" (sem diferenciar caixa) → bool
        - "null" (sem diferenciar caixa)          → None
        - inteiro decimal                         → int
        - decimal ou notação científica           → float
        - qualquer outro token, inclusive ""      → str inalterada

    Tokens numéricos com zero à esquerda (ex.: "007", "0123") permanecem
    strings: costumam ser códigos, não quantidades.
    """
    if not isinstance(token, str):
        return token

    text = token.strip()
    if not text:
        return token

    lowered = text.lower()
    if lowered in _BOOLEANS:
        return _BOOLEANS[lowered]
    if lowered == "null":
        return None

    if _INT_RE.match(text):
        if _has_leading_zero(text):
            return token
        return int(text)

    if _FLOAT_RE.match(text):
        if _has_leading_zero(text.split(".")[0].split("e")[0].split("E")[0]):
            return token
        return float(text)

    return token

# src/envault/core/config/parser.py
"""
Parser canônico de configuração linha a linha (`key=value`).

Este módulo transforma o texto (decifrado ou em claro) de um arquivo de
configuração no Raw Config Map: um dicionário ordenado de chaves para
valores já coagidos.

Algoritmo por linha:
    1. trim; linha vazia ou iniciada por `#` é ignorada
    2. divisão no primeiro `=`; sem nome a linha é ignorada
    3. o valor é tudo após o primeiro `=` (pode conter `=`), sem comentário
       inline (`espaço + #` até o fim) e trimado
    4. valores com aparência de JSON (`{...}` ou `[...]`) passam por
       `json.loads`; se falhar, o literal é mantido como string
    5. demais valores passam pelo coercer de primitivos

Decisões arquiteturais:
    - Os ramos best-effort (linha ignorada, fallback para string) são
      desfechos nomeados (`LineOutcome`), não `continue` silenciosos
    - Chaves repetidas: a última ocorrência vence
    - O coercer é injetável

Invariantes:
    - O parser nunca levanta exceção por conteúdo de linha
    - `ParseResult.lines` possui um registro por linha física da entrada

Limites explícitos:
    - Não suporta aspas, escapes nem continuação de linha
    - Não valida semântica (responsabilidade do schema)
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

from .coerce import coerce_primitive

Coercer = Callable[[str], Any]

_LINE_SPLIT_RE = re.compile(r"\r?\n")
_INLINE_COMMENT_RE = re.compile(r"\s+#.*$")


class LineOutcome(str, Enum):
    """Desfecho do processamento de uma linha."""

    PARSED = "parsed"
    SKIPPED = "skipped"
    FALLBACK_STRING = "fallback_string"


@dataclass(frozen=True)
class ParsedLine:
    """Registro inspecionável de uma linha processada."""

    lineno: int
    outcome: LineOutcome
    key: Optional[str] = None
    value: Any = None
    reason: Optional[str] = None


@dataclass
class ParseResult:
    """Resultado do parse: mapa bruto + desfecho por linha."""

    values: Dict[str, Any] = field(default_factory=dict)
    lines: List[ParsedLine] = field(default_factory=list)

    def outcomes(self, outcome: LineOutcome) -> List[ParsedLine]:
        return [line for line in self.lines if line.outcome == outcome]


def is_json_like(value: str) -> bool:
    """Indica se o valor parece um objeto ou array JSON."""
    trimmed = value.strip()
    return (trimmed.startswith("[") and trimmed.endswith("]")) or (
        trimmed.startswith("{") and trimmed.endswith("}")
    )


def _parse_line(lineno: int, line: str, coerce: Coercer) -> ParsedLine:
    trimmed = line.strip()

    if not trimmed:
        return ParsedLine(lineno, LineOutcome.SKIPPED, reason="blank")
    if trimmed.startswith("#"):
        return ParsedLine(lineno, LineOutcome.SKIPPED, reason="comment")

    name, _, rest = trimmed.partition("=")
    key = name.strip()
    if not key:
        return ParsedLine(lineno, LineOutcome.SKIPPED, reason="missing name")

    value = _INLINE_COMMENT_RE.sub("", rest).strip()

    if is_json_like(value):
        try:
            return ParsedLine(lineno, LineOutcome.PARSED, key=key, value=json.loads(value))
        except ValueError:
            return ParsedLine(
                lineno,
                LineOutcome.FALLBACK_STRING,
                key=key,
                value=value,
                reason="invalid json",
            )

    return ParsedLine(lineno, LineOutcome.PARSED, key=key, value=coerce(value))


def parse_config_text(
    content: Union[str, bytes],
    *,
    coerce: Optional[Coercer] = None,
) -> ParseResult:
    """
    Faz o parse completo de um conteúdo `key=value`.

    Args:
        content: texto ou bytes UTF-8.
        coerce: coercer de tokens literais; padrão `coerce_primitive`.

    Returns:
        ParseResult: mapa bruto e desfechos por linha.

    Raises:
        UnicodeDecodeError: se `content` for bytes que não são UTF-8.
    """
    if isinstance(content, (bytes, bytearray)):
        content = bytes(content).decode("utf-8")

    coerce = coerce or coerce_primitive
    result = ParseResult()

    for lineno, line in enumerate(_LINE_SPLIT_RE.split(content), start=1):
        parsed = _parse_line(lineno, line, coerce)
        result.lines.append(parsed)
        if parsed.outcome != LineOutcome.SKIPPED:
            result.values[parsed.key] = parsed.value

    return result


def parse_config(content: Union[str, bytes], *, coerce: Optional[Coercer] = None) -> Dict[str, Any]:
    """Atalho que retorna apenas o Raw Config Map."""
    return parse_config_text(content, coerce=coerce).values

# src/envault/core/config/schema.py
"""
Validação de schema do Envault.

O loader aceita qualquer colaborador que exponha `validate(raw_map)`. Este
módulo define esse protocolo, os tipos de resultado e uma implementação
declarativa carregável de YAML/JSON.

Formato declarativo (v1):

    allow_unknown: true
    fields:
      PORT:
        type: integer
        required: true
      LOG_LEVEL:
        type: string
        default: INFO
        choices: [DEBUG, INFO, WARNING, ERROR]
      DATABASE_URL:
        type: string
        pattern: "^postgres://"

Tipos aceitos: string, integer, number, boolean, json, any.

Decisões arquiteturais:
    - Todas as violações são coletadas; nunca apenas a primeira
    - O schema pode transformar o mapa (defaults, int → float, escalar → str)
    - Chaves desconhecidas são preservadas, salvo `allow_unknown: false`

Limites explícitos:
    - Não faz coerção de strings (isso já aconteceu no parser)
    - Não valida estruturas aninhadas além do tipo `json`
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, Union, runtime_checkable

import yaml

from ..errors import (
    IOFailureError,
    SchemaDefinitionError,
    SchemaFileNotFoundError,
    SchemaParseError,
    UnsupportedSchemaFormatError,
)


_ALLOWED_TYPES = {"string", "integer", "number", "boolean", "json", "any"}
_ALLOWED_FIELD_KEYS = {"type", "required", "default", "choices", "pattern"}


@dataclass(frozen=True)
class FieldError:
    """Violação de um campo: `(field, message)`."""

    field: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "message": self.message}


@dataclass
class ValidationResult:
    """Mapa possivelmente transformado + lista ordenada de violações."""

    validated: Dict[str, Any]
    errors: List[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


@runtime_checkable
class SchemaValidator(Protocol):
    """Qualquer componente com `validate(raw_map)`."""

    def validate(self, raw: Dict[str, Any]) -> Any:
        ...


def normalize_validation_result(result: Any, raw: Dict[str, Any]) -> ValidationResult:
    """
    Aceita o resultado de um validador em formatos equivalentes.

    Formatos aceitos:
        - `ValidationResult`
        - mapeamento `{"validated": ..., "errors": [...]}`
        - tupla `(validated, errors)`

    Cada erro pode ser `FieldError`, mapeamento com `field`/`message` ou
    par `(field, message)`. `validated` ausente ou None mantém `raw`.
    """
    if isinstance(result, ValidationResult):
        validated, errors = result.validated, result.errors
    elif isinstance(result, Mapping):
        validated, errors = result.get("validated"), result.get("errors")
    elif isinstance(result, tuple) and len(result) == 2:
        validated, errors = result
    else:
        raise TypeError(
            f"Resultado de validação não suportado: {type(result).__name__}"
        )

    normalized: List[FieldError] = []
    for err in errors or []:
        if isinstance(err, FieldError):
            normalized.append(err)
        elif isinstance(err, Mapping):
            normalized.append(FieldError(str(err.get("field")), str(err.get("message"))))
        elif isinstance(err, (tuple, list)) and len(err) == 2:
            normalized.append(FieldError(str(err[0]), str(err[1])))
        else:
            normalized.append(FieldError("?", str(err)))

    return ValidationResult(
        validated=dict(validated) if validated is not None else dict(raw),
        errors=normalized,
    )


# ---------------------------------------------------------------------------
# Schema declarativo
# ---------------------------------------------------------------------------

_MISSING = object()


@dataclass(frozen=True)
class FieldSpec:
    """Regra declarativa de um campo."""

    name: str
    type: str = "any"
    required: bool = False
    default: Any = _MISSING
    choices: Optional[Sequence[Any]] = None
    pattern: Optional[str] = None

    @property
    def has_default(self) -> bool:
        return self.default is not _MISSING


def _type_error(spec: FieldSpec, value: Any) -> str:
    return f"esperado {spec.type}, recebido {type(value).__name__}"


def _check_type(spec: FieldSpec, value: Any) -> tuple:
    """Retorna `(valor_convertido, mensagem_de_erro_ou_None)`."""
    t = spec.type

    if t == "any":
        return value, None

    if t == "boolean":
        return (value, None) if isinstance(value, bool) else (value, _type_error(spec, value))

    if t == "integer":
        if isinstance(value, int) and not isinstance(value, bool):
            return value, None
        return value, _type_error(spec, value)

    if t == "number":
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return value, _type_error(spec, value)
        return float(value), None

    if t == "string":
        if isinstance(value, str):
            return value, None
        if isinstance(value, bool):
            return ("true" if value else "false"), None
        if isinstance(value, (int, float)):
            return str(value), None
        return value, _type_error(spec, value)

    # json
    if isinstance(value, (dict, list)):
        return value, None
    return value, _type_error(spec, value)


class DeclarativeSchema:
    """
    Validador declarativo que coleta todas as violações.

    Implementa `SchemaValidator`.
    """

    def __init__(self, fields: Sequence[FieldSpec], *, allow_unknown: bool = True) -> None:
        self.fields = list(fields)
        self.allow_unknown = allow_unknown
        self._compiled = {
            f.name: re.compile(f.pattern) for f in self.fields if f.pattern is not None
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DeclarativeSchema":
        """Materializa e valida estruturalmente uma definição declarativa."""
        if not isinstance(data, Mapping):
            raise SchemaDefinitionError("schema root must be a mapping/dict")

        fields_def = data.get("fields")
        if not isinstance(fields_def, Mapping) or not fields_def:
            raise SchemaDefinitionError("schema.fields must be a non-empty mapping")

        allow_unknown = data.get("allow_unknown", True)
        if not isinstance(allow_unknown, bool):
            raise SchemaDefinitionError("schema.allow_unknown must be boolean")

        specs: List[FieldSpec] = []
        for name, spec in fields_def.items():
            if not isinstance(spec, Mapping):
                raise SchemaDefinitionError(f"fields.{name} must be a mapping")

            unknown = set(spec) - _ALLOWED_FIELD_KEYS
            if unknown:
                raise SchemaDefinitionError(f"fields.{name} has unknown keys: {sorted(unknown)}")

            ftype = spec.get("type", "any")
            if ftype not in _ALLOWED_TYPES:
                raise SchemaDefinitionError(f"fields.{name}.type must be one of {sorted(_ALLOWED_TYPES)}")

            required = spec.get("required", False)
            if not isinstance(required, bool):
                raise SchemaDefinitionError(f"fields.{name}.required must be boolean")

            choices = spec.get("choices")
            if choices is not None and not isinstance(choices, list):
                raise SchemaDefinitionError(f"fields.{name}.choices must be a list")

            pattern = spec.get("pattern")
            if pattern is not None:
                try:
                    re.compile(pattern)
                except (re.error, TypeError) as e:
                    raise SchemaDefinitionError(f"fields.{name}.pattern is invalid: {e}") from e

            specs.append(
                FieldSpec(
                    name=str(name),
                    type=ftype,
                    required=required,
                    default=spec["default"] if "default" in spec else _MISSING,
                    choices=choices,
                    pattern=pattern,
                )
            )

        return cls(specs, allow_unknown=allow_unknown)

    def validate(self, raw: Dict[str, Any]) -> ValidationResult:
        validated: Dict[str, Any] = dict(raw)
        errors: List[FieldError] = []
        known = {f.name for f in self.fields}

        for spec in self.fields:
            if spec.name not in raw:
                if spec.has_default:
                    validated[spec.name] = spec.default
                elif spec.required:
                    errors.append(FieldError(spec.name, "campo obrigatório ausente"))
                continue

            value, err = _check_type(spec, raw[spec.name])
            if err is not None:
                errors.append(FieldError(spec.name, err))
                continue

            if spec.choices is not None and value not in spec.choices:
                errors.append(FieldError(spec.name, f"valor deve ser um de {list(spec.choices)}"))
                continue

            regex = self._compiled.get(spec.name)
            if regex is not None and not (isinstance(value, str) and regex.search(value)):
                errors.append(FieldError(spec.name, f"valor não corresponde ao padrão {spec.pattern!r}"))
                continue

            validated[spec.name] = value

        if not self.allow_unknown:
            for name in raw:
                if name not in known:
                    errors.append(FieldError(name, "campo não declarado no schema"))

        return ValidationResult(validated=validated, errors=errors)


def load_schema(path: Union[str, Path]) -> DeclarativeSchema:
    """Carrega um schema declarativo de YAML/JSON.

    Raises:
        SchemaFileNotFoundError: se o arquivo não existir.
        IOFailureError: se o arquivo existir mas não puder ser lido.
        UnsupportedSchemaFormatError: se a extensão não for suportada.
        SchemaParseError: se o parsing falhar ou o arquivo estiver vazio.
        SchemaDefinitionError: se a definição for estruturalmente inválida.
    """
    p = Path(path)
    if not p.exists():
        raise SchemaFileNotFoundError(f"schema file not found: {p}", filename=str(p))

    suffix = p.suffix.lower()
    if suffix not in {".yml", ".yaml", ".json"}:
        raise UnsupportedSchemaFormatError(f"unsupported schema format: {suffix}", filename=str(p))

    try:
        raw = p.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise SchemaParseError(f"schema file is not valid utf-8: {p}", filename=str(p)) from e
    except OSError as e:
        raise IOFailureError(f"failed to read schema file: {p}", filename=str(p)) from e

    try:
        if suffix == ".json":
            data = json.loads(raw)
        else:
            data = yaml.safe_load(raw)
    except (yaml.YAMLError, ValueError) as e:
        raise SchemaParseError(str(e) or "failed to parse schema", filename=str(p)) from e

    if data is None:
        raise SchemaParseError("schema file is empty", filename=str(p))

    return DeclarativeSchema.from_dict(data)

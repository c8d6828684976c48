# tests/core/config/test_loader.py
"""
Testes do carregador de um único arquivo de configuração.

Este módulo valida o fluxo completo de `load_config_file`:

    existência → leitura (em claro ou decifrada) → parse → schema → snapshot

Os testes asseguram que:
- arquivos em claro e cifrados produzem o mesmo snapshot
- a chave pode ser `KeyMaterial` ou string hexadecimal
- arquivo ausente, chave errada e schema inválido são falhas tipadas
- erros carregam o nome do arquivo informado pelo chamador
- todas as violações de schema aparecem na mensagem
- o modo verbose registra uma linha por chave

Decisões arquiteturais:
    - Arquivos são sempre gravados em `tmp_path`
    - Caminhos relativos são resolvidos via `cwd` explícito

Invariantes:
    - Em caso de erro nenhum snapshot é retornado
    - O retorno é sempre um `ConfigSnapshot`

Limites explícitos:
    - Não valida padrões glob (ver test_multi_loader.py)
"""

import logging
from datetime import timedelta
from pathlib import Path

import pytest

from envault.core.config.loader import LoadOptions, load_config_file
from envault.core.config.schema import DeclarativeSchema, FieldError, ValidationResult
from envault.core.config.snapshot import ConfigSnapshot
from envault.core.errors import (
    ConfigFileNotFoundError,
    DecryptionFailedError,
    IOFailureError,
    InvalidKeyLengthError,
    ValidationFailedError,
)


EXPECTED = {
    "APP_NAME": "billing-api",
    "PORT": 8080,
    "DEBUG": False,
    "RATIO": 0.75,
    "FEATURES": ["export", "audit"],
    "DATABASE": {"host": "db.local", "port": 5432},
    "BROKEN": "{not json}",
    "TOKEN": "abc=def==",
}


class _OneErrorSchema:
    def validate(self, raw):
        return {"validated": raw, "errors": [("PORT", "deve ser menor que 1024")]}


class _UppercaseSchema:
    def validate(self, raw):
        return ValidationResult({k: str(v).upper() for k, v in raw.items()})


def test_load_plaintext_file(write_plain, project_like_env_text):
    path = write_plain("app.conf", project_like_env_text)

    snap = load_config_file(path)

    assert isinstance(snap, ConfigSnapshot)
    assert snap.to_dict() == EXPECTED
    assert snap.source == str(path.resolve())


def test_load_encrypted_file_matches_plaintext(write_encrypted, project_like_env_text, key):
    path = write_encrypted("app.conf.enc", project_like_env_text)

    snap = load_config_file(path, key)

    assert snap.to_dict() == EXPECTED


def test_hex_string_key_is_accepted(write_encrypted, project_like_env_text, key):
    path = write_encrypted("app.conf.enc", project_like_env_text)

    assert load_config_file(path, key.to_hex()).to_dict() == EXPECTED


def test_invalid_hex_key_is_rejected(write_plain):
    path = write_plain("app.conf", "A=1")

    with pytest.raises(InvalidKeyLengthError):
        load_config_file(path, "abc")


def test_empty_key_means_plaintext(write_plain):
    path = write_plain("app.conf", "A=1")

    assert load_config_file(path, "").to_dict() == {"A": 1}


def test_relative_path_resolved_against_cwd(write_plain, tmp_path: Path):
    write_plain("conf/app.conf", "A=1")

    snap = load_config_file("conf/app.conf", cwd=tmp_path)

    assert snap["A"] == 1
    assert snap.source == str((tmp_path / "conf" / "app.conf").resolve())


def test_missing_file(tmp_path: Path):
    with pytest.raises(ConfigFileNotFoundError) as exc_info:
        load_config_file("missing.conf", cwd=tmp_path)

    assert exc_info.value.filename == "missing.conf"


def test_wrong_key_fails_with_filename(write_encrypted, other_key):
    path = write_encrypted("secret.conf.enc", "A=1\nB=2\n")

    with pytest.raises(DecryptionFailedError) as exc_info:
        load_config_file(path, other_key)

    assert str(exc_info.value) == f"Falha ao decifrar arquivo. ({path})"
    assert exc_info.value.filename == str(path)


def test_encrypted_loader_on_plaintext_file_fails(write_plain, key):
    path = write_plain("plain.conf", "A=1\n")

    with pytest.raises(DecryptionFailedError):
        load_config_file(path, key)


def test_non_utf8_plaintext_is_io_failure(tmp_path: Path):
    path = tmp_path / "latin1.conf"
    path.write_bytes("NOME=José".encode("latin-1"))

    with pytest.raises(IOFailureError):
        load_config_file(path)


def test_schema_error_message_lists_each_violation(write_plain):
    """
    Verifica a mensagem exata de falha de validação.

    Invariantes:
        - cabeçalho menciona o arquivo informado
        - uma linha `- field: message` por violação
    """
    path = write_plain("app.conf", "PORT=8080\n")

    with pytest.raises(ValidationFailedError) as exc_info:
        load_config_file(path, schema=_OneErrorSchema())

    assert str(exc_info.value) == (
        f'Erro(s) fatal(is) de configuração em "{path}":\n'
        "- PORT: deve ser menor que 1024"
    )
    assert exc_info.value.errors == [FieldError("PORT", "deve ser menor que 1024")]


def test_declarative_schema_reports_all_errors(write_plain):
    path = write_plain("app.conf", "PORT=abc\nDEBUG=maybe\n")
    schema = DeclarativeSchema.from_dict(
        {
            "fields": {
                "PORT": {"type": "integer"},
                "DEBUG": {"type": "boolean"},
                "NAME": {"required": True},
            }
        }
    )

    with pytest.raises(ValidationFailedError) as exc_info:
        load_config_file(path, schema=schema)

    assert [e.field for e in exc_info.value.errors] == ["PORT", "DEBUG", "NAME"]


def test_schema_transformation_is_returned(write_plain):
    path = write_plain("app.conf", "A=abc\nB=1\n")

    snap = load_config_file(path, schema=_UppercaseSchema())

    assert snap.to_dict() == {"A": "ABC", "B": "1"}


def test_schema_without_validate_is_ignored(write_plain):
    path = write_plain("app.conf", "A=1\n")

    assert load_config_file(path, schema=object()).to_dict() == {"A": 1}


def test_verbose_logs_each_key(write_plain, caplog):
    path = write_plain("app.conf", 'NAME=api\nDB={"port": 1}\n')
    caplog.set_level(logging.INFO, logger="envault.core.config.loader")

    load_config_file(path, options=LoadOptions(verbose=True))

    messages = [r.getMessage() for r in caplog.records if r.levelno == logging.INFO]
    assert messages == [
        f'Configuração carregada de "{path}":',
        "  NAME = api",
        '  DB = {"port": 1}',
    ]


def test_non_verbose_logs_nothing_at_info(write_plain, caplog):
    path = write_plain("app.conf", "NAME=api\n")
    caplog.set_level(logging.INFO, logger="envault.core.config.loader")

    load_config_file(path)

    assert [r for r in caplog.records if r.levelno >= logging.INFO] == []


class _TimedeltaSchema:
    def validate(self, raw):
        timeout = timedelta(seconds=raw["TIMEOUT"])
        return ValidationResult({**raw, "TIMEOUT": timeout, "LIMITS": {"window": timeout * 2}})


def test_schema_may_return_non_json_values(write_plain, caplog):
    """
    Valores retornados pelo schema não precisam ser serializáveis em JSON.

    Invariantes:
        - o snapshot é produzido e mantém o objeto original
        - fingerprint e dump verbose não falham
    """
    path = write_plain("app.conf", "TIMEOUT=30\nLIMITS={\"a\": 1}\n")
    caplog.set_level(logging.INFO, logger="envault.core.config.loader")

    snap = load_config_file(path, schema=_TimedeltaSchema(), options=LoadOptions(verbose=True))

    assert snap["TIMEOUT"] == timedelta(seconds=30)
    assert len(snap.fingerprint) == 64
    messages = [r.getMessage() for r in caplog.records]
    assert "  TIMEOUT = 0:00:30" in messages
    assert '  LIMITS = {"window": "0:01:00"}' in messages

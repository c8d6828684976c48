# tests/core/config/test_multi_loader.py
"""
Testes do carregamento de múltiplos arquivos via padrão glob.

Os testes asseguram que:
- o padrão é expandido relativo a `cwd`, em ordem estável
- nenhum arquivo encontrado é `NoFilesMatchedError`
- a primeira falha aborta a chamada e identifica o arquivo
- arquivos posteriores à falha não são carregados
- `load_layered_config` sobrepõe os arquivos na ordem de expansão
"""

import logging
from pathlib import Path

import pytest

from envault.core.config.multi import expand_pattern, load_config_files, load_layered_config
from envault.core.config.schema import DeclarativeSchema
from envault.core.errors import (
    DecryptionFailedError,
    NoFilesMatchedError,
    ValidationFailedError,
)


class _CountingSchema:
    """Delegador que registra quais mapas passaram pela validação."""

    def __init__(self, inner):
        self.inner = inner
        self.seen = []

    def validate(self, raw):
        self.seen.append(dict(raw))
        return self.inner.validate(raw)


@pytest.fixture
def port_schema():
    return DeclarativeSchema.from_dict({"fields": {"PORT": {"type": "integer", "required": True}}})


def test_loads_files_in_sorted_order(write_plain, tmp_path: Path):
    write_plain("conf.d/20-local.conf", "PORT=2\n")
    write_plain("conf.d/10-base.conf", "PORT=1\nNAME=api\n")
    write_plain("conf.d/notes.txt", "ignored")

    configs = load_config_files("conf.d/*.conf", cwd=tmp_path)

    assert [c["PORT"] for c in configs] == [1, 2]
    assert configs[0].source.endswith("10-base.conf")


def test_recursive_pattern(write_plain, tmp_path: Path):
    write_plain("a/one.conf", "A=1\n")
    write_plain("a/b/two.conf", "B=2\n")

    paths = expand_pattern("**/*.conf", cwd=tmp_path)

    assert [Path(p).name for p in paths] == ["two.conf", "one.conf"]
    assert all(Path(p).is_absolute() for p in paths)


def test_zero_matches_is_error(tmp_path: Path):
    with pytest.raises(NoFilesMatchedError) as exc_info:
        load_config_files("*.conf", cwd=tmp_path)

    assert exc_info.value.pattern == "*.conf"


def test_failure_aborts_and_names_file(write_plain, tmp_path: Path, port_schema, caplog):
    """
    Verifica que o segundo arquivo inválido aborta a chamada.

    Invariantes:
        - o erro identifica o arquivo 2
        - o arquivo 3 nunca chega ao validador
        - a falha é registrada em log ERROR
    """
    write_plain("1.conf", "PORT=1\n")
    write_plain("2.conf", "PORT=not-a-number\n")
    write_plain("3.conf", "PORT=3\n")
    schema = _CountingSchema(port_schema)

    with pytest.raises(ValidationFailedError) as exc_info:
        load_config_files("*.conf", schema=schema, cwd=tmp_path)

    assert exc_info.value.filename.endswith("2.conf")
    assert "2.conf" in str(exc_info.value)
    assert schema.seen == [{"PORT": 1}, {"PORT": "not-a-number"}]
    assert any(
        r.levelno == logging.ERROR and "2.conf" in r.getMessage() for r in caplog.records
    )


def test_encrypted_files_with_one_wrong_key(write_encrypted, tmp_path: Path, other_key, key):
    write_encrypted("a.enc", "A=1\n")
    write_encrypted("b.enc", "B=2\n", material=other_key)

    with pytest.raises(DecryptionFailedError) as exc_info:
        load_config_files("*.enc", key, cwd=tmp_path)

    assert exc_info.value.filename.endswith("b.enc")


def test_encrypted_files_load(write_encrypted, tmp_path: Path, key):
    write_encrypted("a.enc", "A=1\n")
    write_encrypted("b.enc", "B=true\n")

    configs = load_config_files("*.enc", key.to_hex(), cwd=tmp_path)

    assert [c.to_dict() for c in configs] == [{"A": 1}, {"B": True}]


def test_layered_config_later_file_wins(write_plain, tmp_path: Path):
    write_plain("10-base.conf", "PORT=1\nNAME=api\nDB={\"host\": \"a\"}\n")
    write_plain("20-override.conf", "PORT=2\nDB={\"port\": 5}\n")

    snap = load_layered_config("*.conf", cwd=tmp_path)

    assert snap.to_dict() == {"PORT": 2, "NAME": "api", "DB": {"port": 5}}
    assert snap.source == "*.conf"

# tests/conftest.py
"""
Fixtures compartilhados para testes do Envault.

Este módulo define fixtures reutilizáveis que fornecem:
- material de chave determinístico (derivado de senha)
- tabela de ambiente em memória (nunca toca `os.environ`)
- conteúdo `key=value` semelhante ao uso real
- helpers para gravar arquivos em claro e cifrados em `tmp_path`

Decisões arquiteturais:
    - Chaves de teste são derivadas de senha para reprodutibilidade
    - O ambiente do processo é substituído por `InMemoryEnvironment`
    - Arquivos são sempre gravados em `tmp_path`

Invariantes:
    - Nenhuma fixture altera o ambiente global do processo
    - Dados retornados são determinísticos e isolados
"""

from pathlib import Path

import pytest

from envault.core.crypto.files import encrypt_bytes_to_file
from envault.core.crypto.keys import KeyMaterial
from envault.core.env.sink import InMemoryEnvironment


# =====================================================
# Chaves e ambiente
# =====================================================

@pytest.fixture
def key() -> KeyMaterial:
    """Chave determinística derivada da senha `test-password`."""
    return KeyMaterial.from_password("test-password")


@pytest.fixture
def other_key() -> KeyMaterial:
    """Chave diferente de `key`, para cenários de chave incorreta."""
    return KeyMaterial.from_password("another-password")


@pytest.fixture
def env() -> InMemoryEnvironment:
    return InMemoryEnvironment()


# =====================================================
# Conteúdo de configuração
# =====================================================

@pytest.fixture
def project_like_env_text() -> str:
    """
    Fixture que fornece um arquivo `key=value` semelhante ao uso real.

    Cobre os ramos do parser:
    - comentários de linha inteira e linhas em branco
    - comentário inline após o valor
    - booleanos, inteiros, decimais e strings
    - JSON válido e JSON malformado (fallback para string)
    - valor contendo `=`

    Returns:
        str: conteúdo do arquivo de configuração.
    """
    return """\
# configuração da aplicação
APP_NAME=billing-api
PORT=8080 # porta HTTP

DEBUG=false
RATIO=0.75
FEATURES=["export", "audit"]
DATABASE={"host": "db.local", "port": 5432}
BROKEN={not json}
TOKEN=abc=def==
"""


@pytest.fixture
def write_plain(tmp_path: Path):
    """Grava conteúdo em claro em `tmp_path/<name>` e retorna o caminho."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_encrypted(tmp_path: Path, key: KeyMaterial):
    """Grava conteúdo cifrado com `key` em `tmp_path/<name>`."""

    def _write(name: str, content: str, material: KeyMaterial = None) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        encrypt_bytes_to_file(material or key, content.encode("utf-8"), path)
        return path

    return _write

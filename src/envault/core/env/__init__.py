# src/envault/core/env/__init__.py
"""
Colaboradores de ambiente do Envault.

    - sink         → tabela de ambiente injetável e merge de mapas
    - key_resolver → resolução da chave via `ENCRYPT_KEY` ou arquivo de chave
"""

from .sink import (  # noqa: F401
    EnvironmentSink,
    InMemoryEnvironment,
    ProcessEnvironment,
    merge_into_environment,
)
from .key_resolver import resolve_external_key  # noqa: F401

# src/envault/__init__.py
"""
Envault: configuração (e segredos) cifrada em repouso, carregada com
segurança na inicialização.

Arquitetura em alto nível:
    - core.crypto → chave de 256 bits e cifra AES-256-CBC com IV prefixado
    - core.env    → ambiente injetável, `ENCRYPT_KEY` e arquivo `_secret.key`
    - core.config → parse `key=value`, schema, snapshot imutável, glob

Uso típico:

    key = resolve_external_key()
    config = load_config_file("app.env.enc", key, schema=load_schema("schema.yaml"))
    config["PORT"]
"""

from .core.errors import (
    ConfigError,
    ConfigFileNotFoundError,
    DecryptionFailedError,
    EnvaultError,
    EnvironmentConflictError,
    InvalidKeyLengthError,
    InvalidPasswordError,
    IOFailureError,
    KeyNotSetError,
    KeyUnavailableError,
    MalformedCiphertextError,
    MalformedPayloadError,
    NoFilesMatchedError,
    ValidationFailedError,
)
from .core.crypto import KeyMaterial, KeySource, SymmetricCipher, generate_key_hex
from .core.env import (
    EnvironmentSink,
    InMemoryEnvironment,
    ProcessEnvironment,
    merge_into_environment,
    resolve_external_key,
)
from .core.config import (
    ConfigSnapshot,
    DeclarativeSchema,
    FieldError,
    LoadOptions,
    ValidationResult,
    layer_snapshots,
    load_config_file,
    load_config_files,
    load_layered_config,
    load_schema,
    parse_config,
)

__all__ = [
    "ConfigError",
    "ConfigFileNotFoundError",
    "ConfigSnapshot",
    "DecryptionFailedError",
    "DeclarativeSchema",
    "EnvaultError",
    "EnvironmentConflictError",
    "EnvironmentSink",
    "FieldError",
    "InMemoryEnvironment",
    "InvalidKeyLengthError",
    "InvalidPasswordError",
    "IOFailureError",
    "KeyMaterial",
    "KeyNotSetError",
    "KeySource",
    "KeyUnavailableError",
    "LoadOptions",
    "MalformedCiphertextError",
    "MalformedPayloadError",
    "NoFilesMatchedError",
    "ProcessEnvironment",
    "SymmetricCipher",
    "ValidationFailedError",
    "ValidationResult",
    "generate_key_hex",
    "layer_snapshots",
    "load_config_file",
    "load_config_files",
    "load_layered_config",
    "load_schema",
    "merge_into_environment",
    "parse_config",
    "resolve_external_key",
]

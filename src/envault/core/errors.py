# src/envault/core/errors.py
"""
Exceções canônicas do Envault.

Este módulo define a hierarquia oficial de exceções utilizadas pela cifra
simétrica, pela resolução de chaves e pelo pipeline de carregamento de
configuração.

As exceções aqui definidas representam **falhas explícitas e tipadas**.
Nenhuma exceção de plataforma (OSError, ValueError do backend criptográfico,
erros de base64 ou de JSON) atravessa a API pública: elas são encadeadas
(`raise ... from exc`) em uma destas classes.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Falhas de chave, de cifra e de filesystem são distinguíveis
    - Mensagens de erro são claras e direcionadas ao usuário
    - Erros de configuração carregam o arquivo de origem

Invariantes:
    - Todas as exceções do pacote herdam de `EnvaultError`
    - `filename` é None apenas quando a falha não envolve arquivo
    - `ValidationFailedError.errors` nunca é truncado

Limites explícitos:
    - Não realiza retry, fallback ou recovery
    - Não registra logs (responsabilidade de quem levanta)
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence


class EnvaultError(Exception):
    """
    Exceção base do Envault.

    Carrega a mensagem humana e, quando aplicável, o arquivo envolvido na
    falha. Permite captura genérica de qualquer erro do pacote.
    """

    def __init__(self, message: str, *, filename: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.filename = filename

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Material de chave
# ---------------------------------------------------------------------------

class KeyMaterialError(EnvaultError):
    """Erro base para obtenção ou ausência de material de chave."""


class KeyNotSetError(KeyMaterialError):
    """Operação criptográfica solicitada sem material de chave."""


class InvalidKeyLengthError(KeyMaterialError):
    """
    Chave hexadecimal cujo tamanho decodificado não é exatamente 32 bytes.

    Strings que não são hexadecimais válidas também caem aqui: não possuem
    tamanho decodificável.
    """


class InvalidPasswordError(KeyMaterialError):
    """Senha vazia ou de tipo diferente de `str`."""


class KeyUnavailableError(KeyMaterialError):
    """Nem o ambiente nem o arquivo de chave forneceram 64 caracteres."""


# ---------------------------------------------------------------------------
# Cifra
# ---------------------------------------------------------------------------

class CipherError(EnvaultError):
    """Erro base para dados cifrados inválidos ou chave incorreta."""


class DecryptionFailedError(CipherError):
    """
    Envelope não pôde ser decifrado.

    Causas possíveis:
        - envelope menor que o IV (16 bytes)
        - ciphertext com tamanho não múltiplo do bloco
        - padding PKCS#7 inválido após a decifragem (chave errada ou dado
          adulterado, detectado apenas incidentalmente)
    """


class MalformedCiphertextError(CipherError):
    """Texto de transporte não é base64 válido."""


class MalformedPayloadError(CipherError):
    """Plaintext decifrado não é UTF-8 ou JSON válido."""


# ---------------------------------------------------------------------------
# Filesystem e ambiente
# ---------------------------------------------------------------------------

class IOFailureError(EnvaultError):
    """
    Falha de leitura ou escrita em disco.

    Sempre grosseira e distinta dos erros de cifra, para que o chamador
    diferencie "chave/dado ruim" de "filesystem ruim".
    """


class EnvironmentConflictError(EnvaultError):
    """Variável já existe no ambiente e o override está desabilitado."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f'Variável de ambiente "{name}" já existe e override está desabilitado'
        )
        self.name = name


# ---------------------------------------------------------------------------
# Configuração
# ---------------------------------------------------------------------------

class ConfigError(EnvaultError):
    """Erro base do pipeline de carregamento de configuração."""


class ConfigFileNotFoundError(ConfigError):
    """Arquivo de configuração não existe no caminho resolvido."""


class ValidationFailedError(ConfigError):
    """
    O validador de schema reportou uma ou mais violações.

    Carrega a lista completa e ordenada de violações `(field, message)`;
    o chamador sempre vê todas, nunca apenas a primeira.
    """

    def __init__(self, filename: str, errors: Sequence[Any]) -> None:
        self.errors: List[Any] = list(errors)
        lines = [f'Erro(s) fatal(is) de configuração em "{filename}":']
        lines.extend(f"- {e.field}: {e.message}" for e in self.errors)
        super().__init__("\n".join(lines), filename=filename)


class NoFilesMatchedError(ConfigError):
    """O padrão glob não encontrou nenhum arquivo."""

    def __init__(self, pattern: str) -> None:
        super().__init__(f"Nenhum arquivo de configuração corresponde ao padrão: {pattern}")
        self.pattern = pattern


# ---------------------------------------------------------------------------
# Schema declarativo
# ---------------------------------------------------------------------------

class SchemaError(EnvaultError):
    """Erro base do schema declarativo."""


class SchemaFileNotFoundError(SchemaError):
    """Arquivo de schema não existe no caminho informado."""


class UnsupportedSchemaFormatError(SchemaError):
    """Formato de schema não suportado (YAML/JSON)."""


class SchemaParseError(SchemaError):
    """Falha ao parsear YAML/JSON do schema."""


class SchemaDefinitionError(SchemaError):
    """Schema não é estruturalmente válido."""

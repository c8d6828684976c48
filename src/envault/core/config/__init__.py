# src/envault/core/config/__init__.py
"""
Camada de configuração do Envault.

Este pacote contém as estruturas e utilitários responsáveis por carregar,
decifrar, interpretar, validar e congelar arquivos de configuração
`key=value`.

Responsabilidades do pacote:
    - Parse linha a linha com coerção de tipos (parser, coerce)
    - Validação opcional por schema plugável (schema)
    - Snapshot imutável com fingerprint canônico (snapshot, hashing)
    - Carregamento de um arquivo ou de um padrão glob (loader, multi)
    - Sobreposição de camadas, última vence (merge)

Princípios fundamentais:
    - A mesma entrada sempre produz a mesma configuração final
    - Violações de schema são reportadas integralmente
    - Falhas são tipadas e carregam o arquivo de origem

Limites explícitos:
    - Não gerencia chaves (ver `core.crypto` e `core.env`)
    - Não escreve no ambiente do processo
"""

from .coerce import coerce_primitive  # noqa: F401
from .parser import (  # noqa: F401
    LineOutcome,
    ParsedLine,
    ParseResult,
    is_json_like,
    parse_config,
    parse_config_text,
)
from .schema import (  # noqa: F401
    DeclarativeSchema,
    FieldError,
    FieldSpec,
    SchemaValidator,
    ValidationResult,
    load_schema,
)
from .snapshot import ConfigSnapshot  # noqa: F401
from .hashing import compute_config_hash  # noqa: F401
from .merge import layer_configs, layer_snapshots  # noqa: F401
from .loader import LoadOptions, load_config_file  # noqa: F401
from .multi import load_config_files, load_layered_config  # noqa: F401

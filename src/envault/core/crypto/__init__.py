# src/envault/core/crypto/__init__.py
"""
Camada criptográfica do Envault.

Componentes:
    - keys      → material de chave (aleatório, por senha, explícito)
    - cipher    → AES-256-CBC sobre buffers e JSON (funções puras)
    - files     → variantes em arquivo e carga de arquivo de ambiente
    - symmetric → `SymmetricCipher`, valor imutável que agrega tudo

Formato de fio: `[IV 16 bytes][ciphertext múltiplo de 16]`, sem byte de
versão e sem tag de autenticação.
"""

from .keys import KeyMaterial, KeySource, generate_key_hex  # noqa: F401
from .cipher import (  # noqa: F401
    decrypt_bytes,
    decrypt_json,
    encrypt_bytes,
    encrypt_json,
)
from .files import (  # noqa: F401
    decrypt_bytes_from_file,
    decrypt_env_from_file,
    decrypt_file,
    decrypt_json_from_file,
    encrypt_bytes_to_file,
    encrypt_file,
    encrypt_json_to_file,
    load_json_from_file,
    save_json_to_file,
)
from .symmetric import SymmetricCipher  # noqa: F401

# src/envault/core/__init__.py
"""
Core do Envault.

Este pacote reúne a implementação canônica do Envault, sem dependência de
CLI ou de frameworks de aplicação.

Componentes principais:
    - crypto   → material de chave e cifra AES-256-CBC (buffers, JSON, arquivos)
    - env      → tabela de ambiente injetável e resolução externa da chave
    - config   → parse, validação, snapshot e carregamento de configuração
    - errors   → hierarquia tipada de exceções
    - settings → constantes e detecção de modo de execução

Princípios fundamentais:
    - Nenhuma decisão silenciosa: todo comportamento best-effort é nomeado
    - Estado global (ambiente do processo) só é tocado via colaborador
    - Chaves e snapshots são valores imutáveis

Limites explícitos:
    - Não é AEAD, não faz troca de chaves, não protege contra leitura de
      memória do processo
"""

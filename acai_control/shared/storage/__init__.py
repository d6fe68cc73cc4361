# acai_control/shared/storage/__init__.py
"""
Armazenamento do catálogo e do livro-caixa.

- base.py: contrato abstrato ``Storage``
- memory.py: implementação em memória (testes, demonstração)
- sql.py: implementação relacional via SQLAlchemy
- seed.py: catálogo padrão
"""

from acai_control.config.settings import Settings
from .base import Storage
from .memory import MemoryStorage
from .sql import SqlStorage
from .seed import seed_catalog


def build_storage(settings: Settings) -> Storage:
    """Escolher a implementação conforme a configuração"""
    if settings.storage_backend == "memory":
        return MemoryStorage()
    return SqlStorage.from_url(settings.database_url, echo=settings.debug)


__all__ = [
    "Storage",
    "MemoryStorage",
    "SqlStorage",
    "build_storage",
    "seed_catalog"
]

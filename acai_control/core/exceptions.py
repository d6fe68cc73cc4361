# acai_control/core/exceptions.py
from typing import Any, Dict, List, Optional


class AcaiControlError(Exception):
    """
    Erro genérico da aplicação.
    Base para erros específicos.
    """
    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message}


class ValidationError(AcaiControlError):
    """
    Dados de entrada inválidos (campo obrigatório ausente, quantidade
    não positiva, taxa de comissão fora de [0, 1], valor monetário malformado).
    """
    status_code = 400

    def __init__(self, message: str, errors: Optional[List[Dict[str, str]]] = None):
        super().__init__(message)
        self.errors = errors or []

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls(message, errors=[{"field": field, "message": message}])

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message, "errors": self.errors}


class NotFoundError(AcaiControlError):
    """
    Registro referenciado não existe.
    """
    status_code = 404

    def __init__(self, resource: str, resource_id: Any, message: Optional[str] = None):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(message or f"{resource} não encontrado")


class PersistenceError(AcaiControlError):
    """
    Falha inesperada ao gravar. Nenhum estado parcial é mantido.
    """
    status_code = 500

    def __init__(self, message: str = "Erro interno ao gravar dados"):
        super().__init__(message)

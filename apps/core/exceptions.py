"""
Domain errors for the points platform.

Every error carries a user-facing message, the HTTP status the API layer
should answer with and optional structured details.
"""
from typing import Any, Dict, Optional

from rest_framework import status


class PointsError(Exception):
    """Base class for all business errors raised by the services."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Operação inválida."

    def __init__(self, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)


class InvalidQuantity(PointsError, ValueError):
    """Requested quantity is not a positive integer."""
    default_message = "A quantidade deve ser um número inteiro positivo."


class InsufficientBalance(PointsError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_message = "Saldo de pontos insuficiente."


class ProductNotAvailable(PointsError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Produto indisponível."


class ConcurrentModification(PointsError):
    """Fresh state read at checkout disagrees with what the cart assumed."""
    status_code = status.HTTP_409_CONFLICT
    default_message = "Produto não está mais disponível na quantidade solicitada."


class AgencyActivationError(PointsError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_message = "Agência não pode ser ativada sem pontos disponíveis."


class RegistrationError(PointsError):
    default_message = "Não foi possível concluir o cadastro."


class DuplicateImport(PointsError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Arquivo já foi importado anteriormente (mesmo checksum)."


class LedgerWriteOutsideTransaction(PointsError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Lançamentos no extrato exigem uma unidade de trabalho ativa."


class AgencyInactive(PointsError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Agência inativa não pode realizar resgates."


class BannerNotFound(PointsError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Banner não encontrado."

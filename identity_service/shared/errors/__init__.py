from .base import (
    AppError,
    DomainError,
    InfrastructureError,
    MissingCredentialsError,
    StorageUnavailableError,
    ValidationError,
)
from .http import handle_app_error, register_error_handler

__all__ = [
    "AppError",
    "DomainError",
    "InfrastructureError",
    "MissingCredentialsError",
    "StorageUnavailableError",
    "ValidationError",
    "handle_app_error",
    "register_error_handler",
]

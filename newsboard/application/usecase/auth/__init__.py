"""Authentication and account use cases."""

from .authenticate import AuthenticateRequest, AuthenticateResponse, AuthenticateUseCase
from .create_account import (
    CreateAccountRequest,
    CreateAccountResponse,
    CreateAccountUseCase,
)
from .logout import LogoutRequest, LogoutUseCase
from .password_reset import (
    CompletePasswordResetRequest,
    CompletePasswordResetResponse,
    CompletePasswordResetUseCase,
    RequestPasswordResetRequest,
    RequestPasswordResetResponse,
    RequestPasswordResetUseCase,
)

__all__ = [
    "AuthenticateRequest",
    "AuthenticateResponse",
    "AuthenticateUseCase",
    "CompletePasswordResetRequest",
    "CompletePasswordResetResponse",
    "CompletePasswordResetUseCase",
    "CreateAccountRequest",
    "CreateAccountResponse",
    "CreateAccountUseCase",
    "LogoutRequest",
    "LogoutUseCase",
    "RequestPasswordResetRequest",
    "RequestPasswordResetResponse",
    "RequestPasswordResetUseCase",
]

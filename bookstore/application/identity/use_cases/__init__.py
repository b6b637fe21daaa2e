from .authentication_use_case import AuthenticationUseCase, LoginResult

__all__ = ["AuthenticationUseCase", "LoginResult"]

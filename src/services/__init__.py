from src.services import auth_service


__all__ = [
    "auth_service",
]

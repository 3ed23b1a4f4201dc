from .user_dto import EmailCheckResponse, SuccessEnvelope, UserResponse

__all__ = [
    "EmailCheckResponse",
    "SuccessEnvelope",
    "UserResponse",
]

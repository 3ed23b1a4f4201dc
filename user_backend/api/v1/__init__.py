from .user_controller import router as user_router
from .email_controller import router as email_router


__all__ = ["user_router", "email_router"]

from .router import router
from .dependencies import get_current_user_id

__all__ = ["router", "get_current_user_id"]

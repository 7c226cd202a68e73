# Authentication Feature

from app.features.auth.dependencies import get_current_identity
from app.features.auth.service import AccountService

__all__ = ["AccountService", "get_current_identity"]

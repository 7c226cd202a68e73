# Chat Feature

from app.features.chat.service import ChatService

__all__ = ["ChatService"]

# Chat Feature - Router

from fastapi import APIRouter, Depends

from app.dependencies import get_chat_service
from app.features.chat.schemas import ChatRequest, ChatResponse
from app.features.chat.service import ChatService


router = APIRouter(prefix="/api", tags=["Chat"])


@router.post("/chat", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    service: ChatService = Depends(get_chat_service),
):
    """
    Ask the medical-information assistant a general health question.

    - **message**: The question
    - **format**: Optional instruction on how to format the answer
    """
    answer = await service.reply(request.message, request.format)
    return ChatResponse(response=answer)

"""Chat, history and usage endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from chatwrapper.dependencies import (
    CurrentUser,
    get_chat_service,
    get_current_user,
    get_history_service,
)
from chatwrapper.schemas.chat_schema import ChatRequest, ChatResponse
from chatwrapper.schemas.history_schema import HistoryResponse, UsageSummaryResponse
from chatwrapper.schemas.response_schema import ErrorResponse
from chatwrapper.services.chat_service import ChatService
from chatwrapper.services.history_service import HistoryService

router = APIRouter(
    prefix="/api",
    tags=["chat"],
    dependencies=[Depends(get_current_user)],
)

ChatServiceDep = Annotated[ChatService, Depends(get_chat_service)]
HistoryServiceDep = Annotated[HistoryService, Depends(get_history_service)]


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={
        401: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def chat(
    body: ChatRequest,
    chat_service: ChatServiceDep,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ChatResponse:
    """Send a message and receive the assistant's reply."""
    return await chat_service.chat(
        user_id=current_user.id,
        display_name=current_user.display_name or current_user.login_name,
        message=body.message,
    )


@router.get("/history", response_model=HistoryResponse)
async def history(service: HistoryServiceDep) -> HistoryResponse:
    """Recent conversation window for the UI, oldest first."""
    return await service.recent_history()


@router.get("/usage", response_model=UsageSummaryResponse)
async def usage(service: HistoryServiceDep) -> UsageSummaryResponse:
    """Daily token and cost totals, newest day first."""
    return await service.usage_summary()

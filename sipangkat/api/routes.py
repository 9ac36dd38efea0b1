"""Chat session endpoints.

The browser client creates a session, selects an API key, uploads
attachments and submits messages. Each session owns one ChatController.
"""

import logging

from fastapi import APIRouter, HTTPException, Request, UploadFile, status

from sipangkat.conversation.controller import ChatController
from sipangkat.conversation.credentials import SessionCredentialSource
from sipangkat.conversation.sessions import SessionNotFound, SessionRegistry
from sipangkat.intake.file_intake import IncomingFile, accept_files
from sipangkat.models.schemas import (
    AttachmentUploadResponse,
    ChatRequest,
    ChatResponse,
    CredentialRequest,
    CredentialStatus,
    SessionState,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["chat"])


def _registry(request: Request) -> SessionRegistry:
    return request.app.state.sessions


def _get_controller(request: Request, session_id: str) -> ChatController:
    """Look up a session controller.

    Raises:
        HTTPException: 404 if the session does not exist.
    """
    try:
        return _registry(request).get(session_id)
    except SessionNotFound:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Session not found",
        ) from None


def _session_state(session_id: str, controller: ChatController) -> SessionState:
    return SessionState(
        session_id=session_id,
        messages=list(controller.store.snapshot()),
        busy=controller.busy,
        credential_selected=controller.credential_selected,
    )


@router.post("", response_model=SessionState, status_code=status.HTTP_201_CREATED)
async def create_session(request: Request) -> SessionState:
    """Start a new chat session with an empty history."""
    session_id, controller = _registry(request).create()
    return _session_state(session_id, controller)


@router.get("/{session_id}", response_model=SessionState)
async def get_session(request: Request, session_id: str) -> SessionState:
    """Return the history, busy flag and credential state of a session."""
    controller = _get_controller(request, session_id)
    return _session_state(session_id, controller)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(request: Request, session_id: str) -> None:
    """Close a session and discard its history.

    Raises:
        404: The session does not exist.
        409: A message in this session is still being answered.
    """
    controller = _get_controller(request, session_id)
    if controller.busy:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Previous message is still being answered",
        )
    _registry(request).remove(session_id)


@router.post("/{session_id}/credential", response_model=CredentialStatus)
async def select_credential(
    request: Request, session_id: str, payload: CredentialRequest
) -> CredentialStatus:
    """Select the API key used by this session.

    Raises:
        400: The session reads its key from the environment only.
    """
    controller = _get_controller(request, session_id)
    if not isinstance(controller.credentials, SessionCredentialSource):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="API key is configured by the server",
        )

    controller.credentials.provide(payload.api_key)
    await controller.select_credential()
    return CredentialStatus(session_id=session_id, credential_selected=controller.credential_selected)


@router.post("/{session_id}/attachments", response_model=AttachmentUploadResponse)
async def upload_attachments(
    request: Request, session_id: str, files: list[UploadFile]
) -> AttachmentUploadResponse:
    """Encode uploaded files as attachments for the next message.

    Oversized or unreadable files are reported in ``notices`` while the
    remaining files are still accepted.
    """
    _get_controller(request, session_id)

    incoming = [
        IncomingFile(
            name=file.filename or "lampiran",
            mime_type=file.content_type or "",
            content=await file.read(),
        )
        for file in files
    ]
    result = accept_files(incoming, max_size=request.app.state.max_upload_size)
    return AttachmentUploadResponse(attachments=result.attachments, notices=result.notices)


@router.post("/{session_id}/messages", response_model=ChatResponse)
async def submit_message(request: Request, session_id: str, payload: ChatRequest) -> ChatResponse:
    """Submit a user message and wait for the model's answer.

    Raises:
        409: A previous message in this session is still being answered.
        400: Neither text nor attachments were provided.
    """
    controller = _get_controller(request, session_id)

    if controller.busy:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Previous message is still being answered",
        )

    if not payload.text.strip() and not payload.attachments:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Message text or attachments required",
        )

    messages = await controller.submit(payload.text, payload.attachments)
    return ChatResponse(
        messages=messages,
        busy=controller.busy,
        credential_selected=controller.credential_selected,
    )

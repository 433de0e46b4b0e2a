"""
Message use cases.
Clients write to the admin inbox; admins triage and reply.
"""

import logging
from typing import Optional

from agency_api.application.use_cases.base_use_case import AuthorizedUseCase, normalize_page
from agency_api.application.dto.base_dto import PaginationDTO
from agency_api.application.dto.message_dto import (
    MessageListResponseDTO,
    MessageResponseDTO,
    ReplyMessageRequestDTO,
    SendMessageRequestDTO,
    UpdateMessageStatusRequestDTO,
)
from agency_api.domain.models.base import EntityNotFoundError, Priority, UserRole
from agency_api.domain.models.message import DEFAULT_CLIENT_SUBJECT, Message, MessageStatus
from agency_api.domain.models.user import User
from agency_api.domain.repositories.message_repository import MessageRepository


logger = logging.getLogger(__name__)


class _MessageUseCase(AuthorizedUseCase):

    def __init__(self, message_repository: MessageRepository):
        super().__init__()
        self.message_repository = message_repository

    def _get_message(self, message_id: str) -> Message:
        return self._require_found(self.message_repository.get_by_id(message_id), "Message", message_id)


class SendMessageUseCase(_MessageUseCase):

    async def execute(self, user: User, request: SendMessageRequestDTO) -> MessageResponseDTO:
        message = Message(
            from_id=user.id,
            from_role=user.role,
            to_role=UserRole.ADMIN,
            subject=request.subject or DEFAULT_CLIENT_SUBJECT,
            content=request.content,
            project_id=request.project_id,
            priority=Priority(request.priority),
        )
        message.validate()

        saved = self.message_repository.save(message)
        logger.info(f"Message {saved.id} sent by {user.id}")
        return MessageResponseDTO.from_domain(saved)


class ListMessagesUseCase(_MessageUseCase):
    """
    Admins read the admin inbox; other users see what they sent or received.
    """

    async def execute(
        self,
        user: User,
        page: int = 1,
        limit: int = 20,
        status: Optional[MessageStatus] = None,
    ) -> MessageListResponseDTO:
        page, limit, offset = normalize_page(page, limit)

        if user.is_admin:
            filters = {"to_role": UserRole.ADMIN, "status": status}
            unread = self.message_repository.count_unread(to_role=UserRole.ADMIN)
        else:
            filters = {"participant_id": user.id}
            unread = self.message_repository.count_unread(to_id=user.id)

        messages = self.message_repository.list(offset=offset, limit=limit, **filters)
        total = self.message_repository.count(**filters)

        return MessageListResponseDTO(
            messages=[MessageResponseDTO.from_domain(m) for m in messages],
            pagination=PaginationDTO.create(page, limit, total),
            unread_count=unread,
        )


class UpdateMessageStatusUseCase(_MessageUseCase):

    async def execute(
        self,
        user: User,
        message_id: str,
        request: UpdateMessageStatusRequestDTO,
    ) -> MessageResponseDTO:
        self._require_admin(user)
        message = self._get_message(message_id)
        message.change_status(MessageStatus(request.status))
        return MessageResponseDTO.from_domain(self.message_repository.save(message))


class ReplyToMessageUseCase(_MessageUseCase):

    async def execute(
        self,
        user: User,
        message_id: str,
        request: ReplyMessageRequestDTO,
    ) -> MessageResponseDTO:
        self._require_admin(user)
        original = self._get_message(message_id)

        reply = original.build_reply(user.id, request.content)
        saved = self.message_repository.save(reply)
        self.message_repository.save(original)

        logger.info(f"Message {original.id} replied by {user.id}")
        return MessageResponseDTO.from_domain(saved)


class DeleteMessageUseCase(_MessageUseCase):

    async def execute(self, user: User, message_id: str) -> None:
        self._require_admin(user)
        if not self.message_repository.delete(message_id):
            raise EntityNotFoundError("Message", message_id)

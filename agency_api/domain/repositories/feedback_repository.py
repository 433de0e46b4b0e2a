"""Feedback repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from agency_api.domain.models.feedback import Feedback, FeedbackStatus


class FeedbackRepository(ABC):

    @abstractmethod
    def save(self, feedback: Feedback) -> Feedback:
        pass

    @abstractmethod
    def get_by_id(self, feedback_id: str) -> Optional[Feedback]:
        pass

    @abstractmethod
    def list(
        self,
        client_id: Optional[str] = None,
        status: Optional[FeedbackStatus] = None,
        public_only: bool = False,
    ) -> List[Feedback]:
        pass

    @abstractmethod
    def delete(self, feedback_id: str) -> bool:
        pass

"""
Feedback mapper.
"""

from agency_api.domain.models.feedback import Feedback
from agency_api.infrastructure.db.models import FeedbackModel


class FeedbackMapper:

    def domain_to_model(self, feedback: Feedback) -> FeedbackModel:
        model = FeedbackModel(id=feedback.id)
        self.update_model(model, feedback)
        return model

    def update_model(self, model: FeedbackModel, feedback: Feedback) -> None:
        model.client_id = feedback.client_id
        model.project_id = feedback.project_id
        model.rating = feedback.rating
        model.title = feedback.title
        model.content = feedback.content
        model.service_category = feedback.service_category
        model.status = feedback.status
        model.is_public = feedback.is_public
        model.approved_by = feedback.approved_by
        model.approved_at = feedback.approved_at
        model.rejection_reason = feedback.rejection_reason
        model.display_name = feedback.display_name
        model.company_name = feedback.company_name
        model.created_at = feedback.created_at
        model.updated_at = feedback.updated_at

    def model_to_domain(self, model: FeedbackModel) -> Feedback:
        return Feedback(
            id=model.id,
            client_id=model.client_id,
            project_id=model.project_id,
            rating=model.rating,
            title=model.title,
            content=model.content,
            service_category=model.service_category,
            status=model.status,
            is_public=model.is_public,
            approved_by=model.approved_by,
            approved_at=model.approved_at,
            rejection_reason=model.rejection_reason,
            display_name=model.display_name,
            company_name=model.company_name,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

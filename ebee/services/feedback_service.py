from typing import List

from sqlalchemy.orm import Session, selectinload

from ebee.core.logging import log_business_event
from ebee.db import models
from ebee.schemas.feedback import FeedbackCreate, FeedbackUpdate
from ebee.utils.exceptions import NotFoundError, PermissionDeniedError


class FeedbackService:

    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(models.Feedback).options(
            selectinload(models.Feedback.user), selectinload(models.Feedback.product)
        )

    def get_all_feedbacks(self) -> List[models.Feedback]:
        return self._query().order_by(models.Feedback.id).all()

    def get_feedback(self, feedback_id: int) -> models.Feedback:
        feedback = self._query().filter(models.Feedback.id == feedback_id).first()
        if not feedback:
            raise NotFoundError("Feedback")
        return feedback

    def create_feedback(self, current_user: models.User, feedback_data: FeedbackCreate) -> models.Feedback:
        if not self.db.get(models.Product, feedback_data.product_id):
            raise NotFoundError("Product")

        feedback = models.Feedback(
            rating=feedback_data.rating,
            comment=feedback_data.comment,
            product_id=feedback_data.product_id,
            user_id=current_user.id,
        )
        self.db.add(feedback)
        self.db.commit()
        log_business_event("feedback_created", current_user.id, product_id=feedback.product_id, rating=feedback.rating)
        return self.get_feedback(feedback.id)

    def update_feedback(self, current_user: models.User, feedback_id: int, update_data: FeedbackUpdate) -> models.Feedback:
        feedback = self.get_feedback(feedback_id)
        self._check_owner(current_user, feedback)
        for key, value in update_data.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(feedback, key, value)
        self.db.commit()
        return self.get_feedback(feedback.id)

    def delete_feedback(self, current_user: models.User, feedback_id: int) -> None:
        feedback = self.db.get(models.Feedback, feedback_id)
        if not feedback:
            raise NotFoundError("Feedback")
        self._check_owner(current_user, feedback)
        self.db.delete(feedback)
        self.db.commit()

    @staticmethod
    def _check_owner(current_user: models.User, feedback: models.Feedback) -> None:
        if feedback.user_id != current_user.id and current_user.user_type != models.UserType.admin:
            raise PermissionDeniedError("You can only change your own feedback")

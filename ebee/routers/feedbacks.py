# ebee/routers/feedbacks.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ebee.db import database, models
from ebee.schemas.common import Envelope, ok
from ebee.schemas.feedback import FeedbackCreate, FeedbackOut, FeedbackUpdate
from ebee.services import FeedbackService
from ebee.utils.dependencies import get_current_user

router = APIRouter(prefix="/feedbacks", tags=["feedbacks"])


@router.post("/", response_model=Envelope[FeedbackOut], status_code=status.HTTP_201_CREATED)
def create_feedback(
    payload: FeedbackCreate,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(get_current_user),
):
    return ok(FeedbackService(db).create_feedback(current_user, payload), "Feedback created successfully")


@router.get("/", response_model=Envelope[List[FeedbackOut]])
def list_feedbacks(db: Session = Depends(database.get_db)):
    return ok(FeedbackService(db).get_all_feedbacks())


@router.get("/{feedback_id}", response_model=Envelope[FeedbackOut])
def get_feedback(feedback_id: int, db: Session = Depends(database.get_db)):
    return ok(FeedbackService(db).get_feedback(feedback_id))


@router.put("/{feedback_id}", response_model=Envelope[FeedbackOut])
def update_feedback(
    feedback_id: int,
    payload: FeedbackUpdate,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(get_current_user),
):
    feedback = FeedbackService(db).update_feedback(current_user, feedback_id, payload)
    return ok(feedback, "Feedback updated successfully")


@router.delete("/{feedback_id}", response_model=Envelope[None])
def delete_feedback(
    feedback_id: int,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(get_current_user),
):
    FeedbackService(db).delete_feedback(current_user, feedback_id)
    return ok(message="Feedback deleted successfully")

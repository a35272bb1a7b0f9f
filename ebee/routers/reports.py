# ebee/routers/reports.py
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ebee.db import database, models
from ebee.schemas.common import Envelope, ok
from ebee.schemas.report import ReportCreate, ReportGenerate, ReportOut
from ebee.services import ReportService
from ebee.utils.dependencies import require_admin, require_staff

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/", response_model=Envelope[List[ReportOut]])
def list_reports(
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(require_staff),
):
    return ok(ReportService(db).get_all_reports())


@router.get("/{report_id}", response_model=Envelope[ReportOut])
def get_report(
    report_id: int,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(require_staff),
):
    return ok(ReportService(db).get_report(report_id))


@router.post("/", response_model=Envelope[ReportOut], status_code=status.HTTP_201_CREATED)
def create_report(
    payload: ReportCreate,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(require_staff),
):
    return ok(ReportService(db).create_report(current_user, payload), "Report created")


@router.post("/generate/sales", response_model=Envelope[ReportOut], status_code=status.HTTP_201_CREATED)
def generate_sales_report(
    payload: Optional[ReportGenerate] = None,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(require_staff),
):
    report = ReportService(db).generate_sales_report(current_user, payload or ReportGenerate())
    return ok(report, "Sales report generated")


@router.post("/generate/inventory", response_model=Envelope[ReportOut], status_code=status.HTTP_201_CREATED)
def generate_inventory_report(
    payload: Optional[ReportGenerate] = None,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(require_staff),
):
    report = ReportService(db).generate_inventory_report(current_user, payload or ReportGenerate())
    return ok(report, "Inventory report generated")


@router.post("/generate/feedback", response_model=Envelope[ReportOut], status_code=status.HTTP_201_CREATED)
def generate_feedback_report(
    payload: Optional[ReportGenerate] = None,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(require_staff),
):
    report = ReportService(db).generate_feedback_report(current_user, payload or ReportGenerate())
    return ok(report, "Feedback report generated")


@router.delete("/{report_id}", response_model=Envelope[None])
def delete_report(
    report_id: int,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(require_admin),
):
    ReportService(db).delete_report(report_id)
    return ok(message="Report deleted")

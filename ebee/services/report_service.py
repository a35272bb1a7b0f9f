"""
Stored reports and the generated sales, inventory and feedback summaries.

Report `content` and `filters` live in TEXT columns as JSON; everything going
in passes through `stringify_json_field`, and `ReportOut` parses it back.
"""
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session, selectinload

from ebee.core.logging import get_logger, log_business_event
from ebee.db import models
from ebee.schemas.report import ReportCreate, ReportGenerate
from ebee.utils.exceptions import NotFoundError
from ebee.utils.json_fields import stringify_json_field

logger = get_logger(__name__)

PERIOD_LENGTHS = {
    models.ReportPeriod.daily: timedelta(days=1),
    models.ReportPeriod.weekly: timedelta(weeks=1),
    models.ReportPeriod.monthly: timedelta(days=30),
    models.ReportPeriod.quarterly: timedelta(days=90),
    models.ReportPeriod.yearly: timedelta(days=365),
}

LOW_STOCK_THRESHOLD = 5


class ReportService:
    """Service class for report-related business logic."""

    def __init__(self, db: Session):
        self.db = db

    def get_all_reports(self) -> List[models.Report]:
        return (
            self.db.query(models.Report)
            .options(selectinload(models.Report.user))
            .order_by(models.Report.created_at.desc(), models.Report.id.desc())
            .all()
        )

    def get_report(self, report_id: int) -> models.Report:
        report = (
            self.db.query(models.Report)
            .options(selectinload(models.Report.user))
            .filter(models.Report.id == report_id)
            .first()
        )
        if not report:
            raise NotFoundError("Report")
        return report

    def create_report(self, current_user: models.User, report_data: ReportCreate) -> models.Report:
        report = models.Report(
            user_id=current_user.id,
            title=report_data.title,
            type=report_data.type or models.ReportType.custom,
            # Missing content is stored as an empty object, not JSON null
            content=stringify_json_field(report_data.content) if report_data.content is not None else "{}",
            format=report_data.format or models.ReportFormat.pdf,
            filters=stringify_json_field(report_data.filters) if report_data.filters is not None else None,
            period=report_data.period or models.ReportPeriod.monthly,
            start_date=report_data.start_date,
            end_date=report_data.end_date,
        )
        self.db.add(report)
        self.db.commit()
        return self.get_report(report.id)

    def delete_report(self, report_id: int) -> None:
        report = self.db.get(models.Report, report_id)
        if not report:
            raise NotFoundError("Report")
        self.db.delete(report)
        self.db.commit()

    def generate_sales_report(self, current_user: models.User, params: ReportGenerate) -> models.Report:
        start, end = self._window(params)
        query = self.db.query(models.Order)
        query = self._within(query, models.Order.created_at, start, end)
        orders = query.all()

        paid = [o for o in orders if o.payment_status == models.PaymentStatus.paid]
        revenue = round(sum(o.total_price for o in paid), 2)
        content = {
            "totalOrders": len(orders),
            "paidOrders": len(paid),
            "totalRevenue": revenue,
            "averageOrderValue": round(revenue / len(paid), 2) if paid else 0,
            "ordersByStatus": dict(Counter(o.order_status.value for o in orders)),
            "paymentsByStatus": dict(Counter(o.payment_status.value for o in orders)),
        }
        return self._save_generated(
            current_user, params, models.ReportType.sales_summary, "Sales Report", content, start, end
        )

    def generate_inventory_report(self, current_user: models.User, params: ReportGenerate) -> models.Report:
        start, end = self._window(params)
        products = self.db.query(models.Product).order_by(models.Product.id).all()

        movements = self._within(
            self.db.query(models.Inventory), models.Inventory.created_at, start, end
        ).all()
        content = {
            "totalProducts": len(products),
            "totalStock": sum(p.stock_quantity for p in products),
            "stockValue": round(sum(p.price * p.stock_quantity for p in products), 2),
            "outOfStock": [{"id": p.id, "name": p.name} for p in products if p.stock_quantity == 0],
            "lowStock": [
                {"id": p.id, "name": p.name, "stockQuantity": p.stock_quantity}
                for p in products if 0 < p.stock_quantity <= LOW_STOCK_THRESHOLD
            ],
            "productsByCategory": dict(Counter(p.category.value for p in products)),
            "movementsByType": dict(Counter(m.change_type.value for m in movements)),
        }
        return self._save_generated(
            current_user, params, models.ReportType.inventory_status, "Inventory Report", content, start, end
        )

    def generate_feedback_report(self, current_user: models.User, params: ReportGenerate) -> models.Report:
        start, end = self._window(params)
        query = self.db.query(models.Feedback).options(selectinload(models.Feedback.product))
        feedbacks = self._within(query, models.Feedback.created_at, start, end).all()

        per_product = {}
        for feedback in feedbacks:
            entry = per_product.setdefault(
                feedback.product_id,
                {"productId": feedback.product_id, "name": feedback.product.name, "count": 0, "total": 0},
            )
            entry["count"] += 1
            entry["total"] += feedback.rating
        by_product = [
            {"productId": e["productId"], "name": e["name"], "count": e["count"],
             "averageRating": round(e["total"] / e["count"], 2)}
            for e in per_product.values()
        ]

        distribution = Counter(f.rating for f in feedbacks)
        content = {
            "totalFeedbacks": len(feedbacks),
            "averageRating": round(sum(f.rating for f in feedbacks) / len(feedbacks), 2) if feedbacks else 0,
            "ratingDistribution": {str(r): distribution.get(r, 0) for r in range(1, 6)},
            "byProduct": by_product,
        }
        return self._save_generated(
            current_user, params, models.ReportType.feedback_analysis, "Feedback Report", content, start, end
        )

    def _save_generated(
        self,
        current_user: models.User,
        params: ReportGenerate,
        report_type: models.ReportType,
        default_title: str,
        content: dict,
        start: Optional[datetime],
        end: Optional[datetime],
    ) -> models.Report:
        report = models.Report(
            user_id=current_user.id,
            title=params.title or default_title,
            type=report_type,
            content=stringify_json_field(content),
            format=params.format or models.ReportFormat.pdf,
            period=params.period or models.ReportPeriod.monthly,
            start_date=start,
            end_date=end,
            is_generated=True,
        )
        self.db.add(report)
        self.db.commit()
        log_business_event("report_generated", current_user.id, report_id=report.id, report_type=report_type.value)
        return self.get_report(report.id)

    @staticmethod
    def _window(params: ReportGenerate) -> Tuple[Optional[datetime], Optional[datetime]]:
        """Explicit dates win; otherwise the period counts back from now. Custom with no dates is unbounded."""
        if params.start_date or params.end_date:
            return params.start_date, params.end_date
        length = PERIOD_LENGTHS.get(params.period or models.ReportPeriod.monthly)
        if length is None:
            return None, None
        end = datetime.now(timezone.utc)
        return end - length, end

    @staticmethod
    def _within(query, column, start, end):
        if start is not None:
            query = query.filter(column >= start)
        if end is not None:
            query = query.filter(column <= end)
        return query

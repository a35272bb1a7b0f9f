from datetime import datetime
from typing import Any, Optional

from pydantic import Field, field_validator

from ebee.db.models import ReportFormat, ReportPeriod, ReportType
from ebee.schemas.common import CamelModel, UserBrief
from ebee.utils.json_fields import parse_json_field


class ReportCreate(CamelModel):
    title: str = Field(..., min_length=1)
    type: Optional[ReportType] = None
    content: Any = None
    format: Optional[ReportFormat] = None
    filters: Any = None
    period: Optional[ReportPeriod] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class ReportGenerate(CamelModel):
    title: Optional[str] = None
    format: Optional[ReportFormat] = None
    period: Optional[ReportPeriod] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class ReportOut(CamelModel):
    id: int
    user_id: int
    title: str
    type: ReportType
    content: Any = None
    format: ReportFormat
    filters: Any = None
    period: Optional[ReportPeriod] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    file_url: Optional[str] = None
    is_generated: bool
    download_count: int
    created_at: Optional[datetime] = None
    user: Optional[UserBrief] = None

    @field_validator("content", mode="before")
    @classmethod
    def parse_content(cls, v):
        return parse_json_field(v)

    @field_validator("filters", mode="before")
    @classmethod
    def parse_filters(cls, v):
        return parse_json_field(v) if v else v

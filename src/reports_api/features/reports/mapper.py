"""Translation between the ``Report`` entity and the ``ReportDTO`` wire shape."""
from typing import Iterable, Optional

from .models import Report
from .schemas import ReportDTO

REPORT_FIELDS = (
    "id",
    "name",
    "logo",
    "logo_content_type",
    "created_time",
    "updated_time",
)


def to_dto(report: Optional[Report]) -> Optional[ReportDTO]:
    if report is None:
        return None
    return ReportDTO(**{field: getattr(report, field) for field in REPORT_FIELDS})


def to_entity(dto: Optional[ReportDTO]) -> Optional[Report]:
    if dto is None:
        return None
    values = {field: getattr(dto, field) for field in REPORT_FIELDS}
    if values["id"] is None:
        # Leave the key unset so the store generates one on insert
        del values["id"]
    return Report(**values)


def to_dtos(reports: Iterable[Report]) -> list[ReportDTO]:
    return [to_dto(report) for report in reports]


def to_entities(dtos: Iterable[ReportDTO]) -> list[Report]:
    return [to_entity(dto) for dto in dtos]


def from_id(report_id: Optional[int]) -> Optional[Report]:
    """Builds a reference-only Report carrying just the identifier."""
    if report_id is None:
        return None
    return Report(id=report_id)

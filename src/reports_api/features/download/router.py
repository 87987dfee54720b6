"""JSON export of every report as a downloadable file."""
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from ...common.errors import SerializationError
from ..reports.models import Report
from ..reports.schemas import report_record_model, report_records_adapter
from ..reports.service import ReportService, get_report_service

logger = logging.getLogger(__name__)

EXPORT_FILE_NAME = "reports.json"

router = APIRouter(tags=["Download"])


async def serialize_reports(reports: list[Report]) -> bytes:
    """
    Encodes report entities as a JSON array using their persisted attributes.

    Raises:
        SerializationError: If any entity cannot be encoded.
    """
    record_model = report_record_model()
    records = [await record_model.from_tortoise_orm(report) for report in reports]
    try:
        return report_records_adapter().dump_json(records)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Could not serialize {len(records)} report(s): {e}") from e


@router.get(
    "/download",
    summary="Download every report as a JSON file",
    response_class=Response,
    responses={200: {"content": {"text/json": {}}}},
)
async def download_reports(
    service: Annotated[ReportService, Depends(get_report_service)],
):
    reports = await service.get_all()
    body = await serialize_reports(reports)
    logger.info(f"Exporting {len(reports)} report(s) as {EXPORT_FILE_NAME} ({len(body)} bytes)")
    return Response(
        content=body,
        status_code=status.HTTP_200_OK,
        headers={
            "Content-Type": "text/json",
            "Content-Length": str(len(body)),
            "Cache-Control": "must-revalidate, post-check=0, pre-check=0",
            "Content-Disposition": f"attachment; filename={EXPORT_FILE_NAME}",
        },
    )

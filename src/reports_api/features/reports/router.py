"""REST endpoints for managing Report records."""
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request, Response, status

from ...common.errors import BadRequestAlertError
from ...common.headers import (
    create_entity_creation_alert,
    create_entity_deletion_alert,
    create_entity_update_alert,
)
from ...common.pagination import Pageable, generate_pagination_headers, pageable_params
from ...core.config import get_application_name
from .models import BIGINT_MAX, BIGINT_MIN
from .schemas import ReportDTO
from .service import ReportService, get_report_service

logger = logging.getLogger(__name__)

ENTITY_NAME = "report"

# Accepted ``sort`` names mapped to entity fields
SORTABLE_FIELDS = {
    "id": "id",
    "name": "name",
    "logoContentType": "logo_content_type",
    "logo_content_type": "logo_content_type",
    "createdTime": "created_time",
    "created_time": "created_time",
    "updatedTime": "updated_time",
    "updated_time": "updated_time",
}

router = APIRouter(
    prefix="/reports",
    tags=["Reports"],
    responses={404: {"description": "Not found"}},
)

ServiceDep = Annotated[ReportService, Depends(get_report_service)]
ApplicationName = Annotated[str, Depends(get_application_name)]
ReportId = Annotated[int, Path(ge=BIGINT_MIN, le=BIGINT_MAX, description="Report identifier")]


@router.post(
    "",
    response_model=ReportDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new report",
)
async def create_report(
    report_dto: ReportDTO,
    response: Response,
    service: ServiceDep,
    application_name: ApplicationName,
):
    logger.debug(f"REST request to save Report : {report_dto}")
    if report_dto.id is not None:
        raise BadRequestAlertError("A new report cannot already have an ID", ENTITY_NAME, "idexists")
    result = await service.save(report_dto)
    response.headers["Location"] = f"/api/reports/{result.id}"
    response.headers.update(
        create_entity_creation_alert(application_name, True, ENTITY_NAME, str(result.id))
    )
    return result


@router.put(
    "",
    response_model=ReportDTO,
    summary="Replace an existing report",
)
async def update_report(
    report_dto: ReportDTO,
    response: Response,
    service: ServiceDep,
    application_name: ApplicationName,
):
    logger.debug(f"REST request to update Report : {report_dto}")
    if report_dto.id is None:
        raise BadRequestAlertError("Invalid id", ENTITY_NAME, "idnull")
    result = await service.save(report_dto)
    response.headers.update(
        create_entity_update_alert(application_name, True, ENTITY_NAME, str(report_dto.id))
    )
    return result


@router.get(
    "",
    response_model=list[ReportDTO],
    summary="List one page of reports",
)
async def get_all_reports(
    request: Request,
    response: Response,
    service: ServiceDep,
    pageable: Annotated[Pageable, Depends(pageable_params(SORTABLE_FIELDS, ENTITY_NAME))],
):
    logger.debug("REST request to get a page of Reports")
    page = await service.find_all(pageable)
    response.headers.update(generate_pagination_headers(request.url, page))
    return page.content


@router.get(
    "/{report_id}",
    response_model=ReportDTO,
    summary="Get a specific report",
)
async def get_report(report_id: ReportId, service: ServiceDep):
    logger.debug(f"REST request to get Report : {report_id}")
    report_dto = await service.find_one(report_id)
    if report_dto is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return report_dto


@router.delete(
    "/{report_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a report",
)
async def delete_report(report_id: ReportId, service: ServiceDep, application_name: ApplicationName):
    logger.debug(f"REST request to delete Report : {report_id}")
    await service.delete(report_id)
    return Response(
        status_code=status.HTTP_204_NO_CONTENT,
        headers=create_entity_deletion_alert(application_name, True, ENTITY_NAME, str(report_id)),
    )

import datetime
import logging
from typing import Callable, Optional

from ...common.pagination import Page, Pageable
from . import mapper
from .models import Report
from .schemas import ReportDTO
from .store import ReportStore, TortoiseReportStore

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime.datetime]


def utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def _epoch_millis(moment: datetime.datetime) -> int:
    return int(moment.timestamp() * 1000)


class ReportService:
    """Use cases for Report records.

    Every operation runs inside one store transaction, reads included, so a
    page count and its content come from the same snapshot. Failures
    from the store surface as ``StoreError`` and are never retried here.
    """

    def __init__(self, store: ReportStore, clock: Clock = utc_now):
        self.store = store
        self.clock = clock

    async def save(self, report_dto: ReportDTO) -> ReportDTO:
        """
        Saves a report.

        Args:
            report_dto: The report to save. Without an id a new record is
                created; with an id the stored record is replaced.

        Returns:
            The persisted report, with its id populated.
        """
        logger.debug(f"Request to save Report : {report_dto}")
        now = _epoch_millis(self.clock())
        stamps = {}
        if report_dto.id is None and report_dto.created_time is None:
            stamps["created_time"] = now
        if report_dto.updated_time is None:
            stamps["updated_time"] = now
        report = mapper.to_entity(report_dto.model_copy(update=stamps))
        async with self.store.transaction() as conn:
            report = await self.store.save(report, using_db=conn)
        return mapper.to_dto(report)

    async def find_all(self, pageable: Pageable) -> Page:
        """
        Gets one page of reports.

        Args:
            pageable: The pagination information.

        Returns:
            The page of reports as DTOs, with totals.
        """
        logger.debug(f"Request to get all Reports, page {pageable.page} size {pageable.size}")
        async with self.store.transaction() as conn:
            page = await self.store.find_page(pageable, using_db=conn)
        return page.map(mapper.to_dto)

    async def find_one(self, report_id: int) -> Optional[ReportDTO]:
        logger.debug(f"Request to get Report : {report_id}")
        async with self.store.transaction() as conn:
            report = await self.store.find_by_id(report_id, using_db=conn)
        return mapper.to_dto(report)

    async def delete(self, report_id: int) -> None:
        """Deletes the report; a missing id is not an error."""
        logger.debug(f"Request to delete Report : {report_id}")
        async with self.store.transaction() as conn:
            await self.store.delete_by_id(report_id, using_db=conn)

    async def get_all(self) -> list[Report]:
        """Every report entity, unpaged, for the export."""
        logger.debug("Request to get every Report for export")
        async with self.store.transaction() as conn:
            return await self.store.find_all(using_db=conn)


def get_report_service() -> ReportService:
    """FastAPI dependency providing the service over the Tortoise store."""
    return ReportService(TortoiseReportStore())

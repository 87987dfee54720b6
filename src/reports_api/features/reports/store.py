"""Persistence for Report entities.

``ReportStore`` is the capability the service depends on; ``TortoiseReportStore``
satisfies it with Tortoise ORM. Every ORM failure is re-raised as
``StoreError`` so the HTTP layer never sees driver-specific exceptions.
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Optional, Protocol

from tortoise.backends.base.client import BaseDBAsyncClient
from tortoise.exceptions import BaseORMException
from tortoise.transactions import in_transaction

from ...common.errors import StoreError
from ...common.pagination import Page, Pageable
from .models import Report

logger = logging.getLogger(__name__)


class ReportStore(Protocol):
    def transaction(self) -> AsyncContextManager[BaseDBAsyncClient]: ...

    async def save(self, report: Report, using_db: Optional[BaseDBAsyncClient] = None) -> Report: ...

    async def find_page(self, pageable: Pageable, using_db: Optional[BaseDBAsyncClient] = None) -> Page: ...

    async def find_by_id(self, report_id: int, using_db: Optional[BaseDBAsyncClient] = None) -> Optional[Report]: ...

    async def delete_by_id(self, report_id: int, using_db: Optional[BaseDBAsyncClient] = None) -> None: ...

    async def find_all(self, using_db: Optional[BaseDBAsyncClient] = None) -> list[Report]: ...

    async def count(self) -> int: ...


class TortoiseReportStore:
    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[BaseDBAsyncClient]:
        """
        Transaction shared by every query of one service operation.

        Rolled back if the block raises.
        """
        try:
            async with in_transaction() as conn:
                yield conn
        except BaseORMException as e:
            raise StoreError(f"Transaction failed: {e}") from e

    async def save(self, report: Report, using_db: Optional[BaseDBAsyncClient] = None) -> Report:
        """
        Inserts or overwrites a report.

        A report without an id is inserted and receives a generated id. A
        report with an id replaces the stored row with that id, or is
        inserted under that id when no such row exists.
        """
        try:
            if report.id is not None and await Report.filter(id=report.id).using_db(using_db).exists():
                await report.save(using_db=using_db, force_update=True)
            else:
                await report.save(using_db=using_db, force_create=True)
        except BaseORMException as e:
            logger.error(f"Error saving report {report.id}: {e}", exc_info=True)
            raise StoreError(f"Failed to save report: {e}") from e
        return report

    async def find_page(self, pageable: Pageable, using_db: Optional[BaseDBAsyncClient] = None) -> Page:
        """Counts and slices in the same connection so totals match the content."""
        orderings = [order.expression for order in pageable.sort]
        if not any(order.field == "id" for order in pageable.sort):
            # id breaks ties so pages never overlap
            orderings.append("id")
        try:
            total = await Report.all().using_db(using_db).count()
            reports = (
                await Report.all()
                .using_db(using_db)
                .order_by(*orderings)
                .offset(pageable.offset)
                .limit(pageable.size)
            )
        except BaseORMException as e:
            logger.error(f"Error listing reports: {e}", exc_info=True)
            raise StoreError(f"Failed to list reports: {e}") from e
        return Page(
            content=list(reports),
            total_elements=total,
            number=pageable.page,
            size=pageable.size,
        )

    async def find_by_id(self, report_id: int, using_db: Optional[BaseDBAsyncClient] = None) -> Optional[Report]:
        try:
            return await Report.get_or_none(id=report_id, using_db=using_db)
        except BaseORMException as e:
            raise StoreError(f"Failed to load report {report_id}: {e}") from e

    async def delete_by_id(self, report_id: int, using_db: Optional[BaseDBAsyncClient] = None) -> None:
        try:
            deleted = await Report.filter(id=report_id).using_db(using_db).delete()
        except BaseORMException as e:
            raise StoreError(f"Failed to delete report {report_id}: {e}") from e
        logger.debug(f"Deleted {deleted} row(s) for report {report_id}")

    async def find_all(self, using_db: Optional[BaseDBAsyncClient] = None) -> list[Report]:
        try:
            return list(await Report.all().using_db(using_db).order_by("id"))
        except BaseORMException as e:
            raise StoreError(f"Failed to load reports: {e}") from e

    async def count(self) -> int:
        try:
            return await Report.all().count()
        except BaseORMException as e:
            raise StoreError(f"Failed to count reports: {e}") from e

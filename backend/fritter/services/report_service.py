"""
Fritter Backend: Report Service
================================

What:  Reports on freets and replies, and removal of heavily reported items.

Auto-removal:
    After a report is stored, the reports on the target are counted inside
    the same transaction. Once the count reaches the threshold for that kind
    of item (settings.freet_report_threshold / settings.reply_report_threshold)
    the item is soft-deleted exactly as if its author had deleted it.
"""

import logging
from typing import List, Optional, Tuple, Union

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from fritter.config import settings
from fritter.exceptions import ConflictError
from fritter.models.freet import Freet
from fritter.models.reply import Reply
from fritter.models.report import Report
from fritter.models.user import User
from fritter.schemas.like import ReportResponse
from fritter.services.freet_service import freet_service
from fritter.services.reply_service import reply_service

logger = logging.getLogger(__name__)

Target = Union[Freet, Reply]


def _target_filter(target: Target):
    if isinstance(target, Freet):
        return Report.freet_id == target.id
    return Report.reply_id == target.id


class ReportService:

    @staticmethod
    def to_response(report: Report) -> ReportResponse:
        return ReportResponse(
            id=report.id,
            reporter=report.reporter.username,
            freet_id=report.freet_id,
            reply_id=report.reply_id,
            date_created=report.date_created,
        )

    @staticmethod
    def threshold_for(target: Target) -> int:
        if isinstance(target, Freet):
            return settings.freet_report_threshold
        return settings.reply_report_threshold

    async def _find(self, db: AsyncSession, target: Target, user: User) -> Optional[Report]:
        result = await db.execute(
            select(Report).where(_target_filter(target), Report.reporter_id == user.id)
        )
        return result.scalar_one_or_none()

    async def list_reports(self, db: AsyncSession, target: Target) -> List[Report]:
        result = await db.execute(
            select(Report).where(_target_filter(target)).order_by(Report.date_created)
        )
        return list(result.scalars().all())

    async def count_reports(self, db: AsyncSession, target: Target) -> int:
        result = await db.execute(
            select(func.count()).select_from(Report).where(_target_filter(target))
        )
        return result.scalar_one()

    async def add_report(self, db: AsyncSession, target: Target, user: User) -> Tuple[Report, bool]:
        """
        Stores a report and removes the target once it reaches its threshold.

        Returns:
            (report, removed) where `removed` tells whether this report
            caused the target to be deleted.

        Raises:
            ConflictError: the user already reported this item (→ 409)
        """
        noun = "freet" if isinstance(target, Freet) else "reply"
        if await self._find(db, target, user) is not None:
            raise ConflictError(message=f"You have already reported this {noun}.")

        report = Report(reporter=user)
        if isinstance(target, Freet):
            report.freet_id = target.id
        else:
            report.reply_id = target.id
        db.add(report)
        try:
            await db.flush()
        except IntegrityError:
            raise ConflictError(message=f"You have already reported this {noun}.")

        count = await self.count_reports(db, target)
        removed = count >= self.threshold_for(target)
        if removed:
            if isinstance(target, Freet):
                freet_service.mark_deleted(target)
            else:
                reply_service.mark_deleted(target)
            await db.flush()
            logger.warning("%s %s removed after %d reports", noun.capitalize(), target.id, count)

        return report, removed


report_service = ReportService()

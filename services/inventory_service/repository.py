from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import InventoryLog


class InventoryLogRepository:
    @staticmethod
    async def create_log(db: AsyncSession, log: InventoryLog):
        log.created_at = datetime.now(timezone.utc)
        db.add(log)
        await db.commit()
        await db.refresh(log)
        return log

    @staticmethod
    async def get_logs_for_order(db: AsyncSession, order_id: int):
        result = await db.execute(
            select(InventoryLog).where(InventoryLog.order_id == order_id).order_by(InventoryLog.id)
        )
        return result.scalars().all()

from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Order, OrderStatus


class OrderRepository:
    @staticmethod
    async def create_order(db: AsyncSession, order: Order):
        now = datetime.now(timezone.utc)
        order.status = OrderStatus.PENDING.value
        order.created_at = now
        order.updated_at = now
        db.add(order)
        await db.commit()
        await db.refresh(order)
        return order

    @staticmethod
    async def get_order(db: AsyncSession, order_id: int):
        result = await db.execute(select(Order).where(Order.id == order_id))
        return result.scalars().first()

    @staticmethod
    async def list_orders(db: AsyncSession, page: int, per_page: int):
        """Newest first. Returns the requested page and the total row count."""
        total = await db.scalar(select(func.count()).select_from(Order))
        result = await db.execute(
            select(Order)
            .order_by(Order.created_at.desc(), Order.id.desc())
            .offset((page - 1) * per_page)
            .limit(per_page)
        )
        return result.scalars().all(), total or 0

    @staticmethod
    async def update_status(db: AsyncSession, order_id: int, status: OrderStatus):
        result = await db.execute(select(Order).where(Order.id == order_id))
        order = result.scalars().first()

        if not order:
            return None

        order.status = status.value
        order.updated_at = datetime.now(timezone.utc)

        await db.commit()
        await db.refresh(order)
        return order

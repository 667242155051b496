from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from shared.config.database import Base


class InventoryLog(Base):
    """Append-only audit trail of stock deductions, one row per order."""
    __tablename__ = "inventory_logs"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    item = Column(String(255), nullable=False)
    quantity_deducted = Column(Integer, nullable=False)
    processed_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)

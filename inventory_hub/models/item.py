"""Item model."""
from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    DateTime,
    ForeignKey,
    JSON,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from inventory_hub.database import Base


class Item(Base):
    """Item model - a row of custom field values inside an inventory."""
    __tablename__ = "items"
    __table_args__ = (
        UniqueConstraint("inventory_id", "custom_id", name="uq_items_inventory_custom_id"),
    )

    id = Column(Integer, primary_key=True, index=True)
    inventory_id = Column(
        Integer,
        ForeignKey("inventories.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    custom_id = Column(String(255), nullable=True)

    # Field values keyed by slot key, e.g. {"custom_string1": "Drill"}
    data = Column(JSON, nullable=False, default=dict)

    # Lowercased concatenation of data values, rebuilt on every write
    search_text = Column(Text, nullable=False, default="")

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    inventory = relationship("Inventory", back_populates="items")

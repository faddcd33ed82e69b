"""Inventory model - a user's collection with a custom field schema."""
from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from inventory_hub.database import Base
from inventory_hub.services.field_schema import columns_to_schema


class Inventory(Base):
    """
    Inventory owned by a single user.

    Custom fields are stored in fixed slots: three per field type, each slot
    being a nullable label (``custom_<type><n>_name``) and an enabled flag
    (``custom_<type><n>_state``). The enabled slots form the inventory's
    field schema, see ``inventory_hub.services.field_schema``.
    """
    __tablename__ = "inventories"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        String(128),
        ForeignKey("users.uid", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    is_public = Column(Boolean, default=False, nullable=False)

    # Single-line text fields
    custom_string1_name = Column(String(255), nullable=True)
    custom_string1_state = Column(Boolean, default=False, nullable=False)
    custom_string2_name = Column(String(255), nullable=True)
    custom_string2_state = Column(Boolean, default=False, nullable=False)
    custom_string3_name = Column(String(255), nullable=True)
    custom_string3_state = Column(Boolean, default=False, nullable=False)

    # Multi-line text fields
    custom_text1_name = Column(String(255), nullable=True)
    custom_text1_state = Column(Boolean, default=False, nullable=False)
    custom_text2_name = Column(String(255), nullable=True)
    custom_text2_state = Column(Boolean, default=False, nullable=False)
    custom_text3_name = Column(String(255), nullable=True)
    custom_text3_state = Column(Boolean, default=False, nullable=False)

    # Numeric fields
    custom_number1_name = Column(String(255), nullable=True)
    custom_number1_state = Column(Boolean, default=False, nullable=False)
    custom_number2_name = Column(String(255), nullable=True)
    custom_number2_state = Column(Boolean, default=False, nullable=False)
    custom_number3_name = Column(String(255), nullable=True)
    custom_number3_state = Column(Boolean, default=False, nullable=False)

    # Checkbox fields
    custom_boolean1_name = Column(String(255), nullable=True)
    custom_boolean1_state = Column(Boolean, default=False, nullable=False)
    custom_boolean2_name = Column(String(255), nullable=True)
    custom_boolean2_state = Column(Boolean, default=False, nullable=False)
    custom_boolean3_name = Column(String(255), nullable=True)
    custom_boolean3_state = Column(Boolean, default=False, nullable=False)

    # Link fields
    custom_link1_name = Column(String(255), nullable=True)
    custom_link1_state = Column(Boolean, default=False, nullable=False)
    custom_link2_name = Column(String(255), nullable=True)
    custom_link2_state = Column(Boolean, default=False, nullable=False)
    custom_link3_name = Column(String(255), nullable=True)
    custom_link3_state = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    owner = relationship("User", back_populates="inventories")
    items = relationship(
        "Item",
        back_populates="inventory",
        cascade="all, delete-orphan",
    )

    @property
    def fields_schema(self):
        """Enabled custom fields in slot order."""
        return columns_to_schema(self)

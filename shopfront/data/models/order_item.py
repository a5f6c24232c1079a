from sqlalchemy import Column, Integer, ForeignKey, String, Text, CheckConstraint
from sqlalchemy.orm import relationship

from shopfront.data.database import Base


class OrderItemModel(Base):
    """Kopia pol produktu z momentu zakupu - bez FK do items."""

    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)

    title = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    image = Column(String, nullable=True)
    large_image = Column(String, nullable=True)
    price = Column(Integer, nullable=False)
    quantity = Column(Integer, nullable=False)

    order = relationship("OrderModel", back_populates="items")

    __table_args__ = (CheckConstraint("quantity >= 1", name="ck_order_item_quantity_positive"),)

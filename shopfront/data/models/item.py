from sqlalchemy import Column, Integer, ForeignKey, String, Text, CheckConstraint
from sqlalchemy.orm import relationship

from shopfront.data.database import Base


class ItemModel(Base):
    __tablename__ = "items"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    image = Column(String, nullable=True)
    large_image = Column(String, nullable=True)

    # w groszach/centach
    price = Column(Integer, nullable=False)

    # tylko informacyjnie, nie blokuje edycji
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)

    cart_items = relationship(
        "CartItemModel",
        back_populates="item",
        cascade="all, delete-orphan",
    )

    __table_args__ = (CheckConstraint("price >= 0", name="ck_item_price_nonnegative"),)

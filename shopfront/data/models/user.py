from sqlalchemy import Column, Integer, String, DateTime, JSON
from sqlalchemy.orm import relationship

from shopfront.data.database import Base
from shopfront.domain.permissions import Permission


class UserModel(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True, index=True)
    password = Column(String, nullable=False)

    #lista wartosci Permission, kolejnosc zachowana
    permissions = Column(JSON, nullable=False, default=list)

    #oba ustawione albo oba null
    reset_token = Column(String, nullable=True, index=True)
    reset_token_expiry = Column(DateTime(timezone=True), nullable=True)

    cart = relationship(
        "CartItemModel",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="CartItemModel.id",
    )

    @property
    def permission_set(self) -> frozenset[Permission]:
        return frozenset(Permission(p) for p in (self.permissions or []))

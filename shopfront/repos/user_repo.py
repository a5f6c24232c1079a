from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.orm import Session, selectinload

from shopfront.data.models.cart_item import CartItemModel
from shopfront.data.models.user import UserModel


class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def get_user_by_email(self, email: str) -> UserModel | None:
        return self.db.execute(
            select(UserModel).where(UserModel.email == email)
        ).scalar_one_or_none()

    def get_user_with_cart(self, user_id: int) -> UserModel | None:
        #snapshot: user + linie koszyka + produkty w jednym odczycie
        return self.db.execute(
            select(UserModel)
            .where(UserModel.id == user_id)
            .options(selectinload(UserModel.cart).selectinload(CartItemModel.item))
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    def get_user_by_reset_token(self, token: str, not_before: datetime) -> UserModel | None:
        return self.db.execute(
            select(UserModel).where(
                UserModel.reset_token == token,
                UserModel.reset_token_expiry >= not_before,
            )
        ).scalars().first()

    def list_users(self) -> list[UserModel]:
        return list(self.db.execute(select(UserModel).order_by(UserModel.id)).scalars().all())

    def create_user(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def save(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def clear_expired_reset_tokens(self, older_than: datetime) -> int:
        result = self.db.execute(
            update(UserModel)
            .where(UserModel.reset_token_expiry < older_than)
            .values(reset_token=None, reset_token_expiry=None)
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        return result.rowcount

    def rollback(self):
        self.db.rollback()

# shopfront/repos/cart_repo.py
from sqlalchemy import select, update, delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from shopfront.data.models.cart_item import CartItemModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_cart_items(self, user_id: int) -> list[CartItemModel]:
        return list(
            self.db.execute(
                select(CartItemModel)
                .where(CartItemModel.user_id == user_id)
                .options(joinedload(CartItemModel.item))
                .order_by(CartItemModel.id)
            ).scalars().all()
        )

    def get_cart_item(self, user_id: int, item_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.user_id == user_id,
                CartItemModel.item_id == item_id,
            )
        ).scalar_one_or_none()

    def get_cart_item_by_id(self, cart_item_id: int) -> CartItemModel | None:
        return self.db.get(CartItemModel, cart_item_id)

    def insert_cart_item(self, user_id: int, item_id: int) -> CartItemModel | None:
        """
        Insert w savepoincie. Jesli rownolegly request juz wstawil linie dla tej pary
        (naruszenie u_cart_user_item) zwraca None i transakcja zewnetrzna zostaje nietknieta.
        """
        line = CartItemModel(user_id=user_id, item_id=item_id, quantity=1)
        try:
            with self.db.begin_nested():
                self.db.add(line)
                self.db.flush()
        except IntegrityError:
            return None
        return line

    def increment_quantity(self, cart_item_id: int, by: int = 1) -> int:
        # UPDATE ... SET quantity = quantity + 1, atomowo po stronie bazy
        result = self.db.execute(
            update(CartItemModel)
            .where(CartItemModel.id == cart_item_id)
            .values(quantity=CartItemModel.quantity + by)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def delete_cart_item(self, line: CartItemModel) -> None:
        self.db.delete(line)

    def delete_cart_items(self, ids: list[int]) -> int:
        if not ids:
            return 0
        result = self.db.execute(
            delete(CartItemModel)
            .where(CartItemModel.id.in_(ids))
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount

    def forget(self, line: CartItemModel) -> None:
        # nieaktualny obiekt poza identity map, nowy insert moze dostac to samo id
        self.db.expunge(line)

    def refresh(self, line: CartItemModel) -> CartItemModel:
        self.db.refresh(line)
        return line

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()

from sqlalchemy import select
from sqlalchemy.orm import Session

from shopfront.data.models.item import ItemModel


class ItemRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_item(self, item_id: int) -> ItemModel | None:
        return self.db.get(ItemModel, item_id)

    def list_items(self) -> list[ItemModel]:
        return list(self.db.execute(select(ItemModel).order_by(ItemModel.id.desc())).scalars().all())

    def save(self, item: ItemModel) -> ItemModel:
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)
        return item

    def delete(self, item: ItemModel) -> None:
        self.db.delete(item)
        self.db.commit()

from sqlalchemy.orm import Session

from shopfront.data.models.item import ItemModel
from shopfront.domain.errors import Forbidden, NotFound
from shopfront.domain.permissions import Permission
from shopfront.domain.session import SessionContext
from shopfront.repos.item_repo import ItemRepo
from shopfront.services.auth_guard import has_permission, require_authenticated
from shopfront.utils.logging import get_logger

logger = get_logger(__name__)

ITEM_DELETERS = (Permission.ADMIN, Permission.ITEMDELETE)


class ItemService:
    """Katalog - przekazywanie do repo, bez dodatkowych niezmiennikow."""

    def __init__(self, db: Session):
        self.repo = ItemRepo(db)

    def list_items(self) -> list[ItemModel]:
        return self.repo.list_items()

    def get_item(self, item_id: int) -> ItemModel:
        item = self.repo.get_item(item_id)
        if not item:
            raise NotFound(f"No item found for id {item_id}")
        return item

    def create_item(self, ctx: SessionContext, data: dict) -> ItemModel:
        require_authenticated(ctx)
        item = self.repo.save(ItemModel(user_id=ctx.caller_id, **data))
        logger.info(f"Uzytkownik {ctx.caller_id} dodal produkt {item.id}")
        return item

    def update_item(self, ctx: SessionContext, item_id: int, changes: dict) -> ItemModel:
        require_authenticated(ctx)
        item = self.get_item(item_id)
        changes.pop("id", None)
        for field, value in changes.items():
            setattr(item, field, value)
        return self.repo.save(item)

    def delete_item(self, ctx: SessionContext, item_id: int) -> dict:
        require_authenticated(ctx)
        item = self.get_item(item_id)

        owns_item = item.user_id == ctx.caller_id
        if not owns_item and not has_permission(ctx, ITEM_DELETERS):
            raise Forbidden("You don't have permission to do that!")

        removed = {"id": item.id, "title": item.title}
        self.repo.delete(item)
        logger.info(f"Uzytkownik {ctx.caller_id} usunal produkt {item_id}")
        return removed

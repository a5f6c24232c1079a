import pytest

from shopfront.data.models import OrderItemModel, OrderModel
from shopfront.data.seed import CATALOG, seed
from shopfront.domain.errors import Forbidden, NotFound, Unauthenticated
from shopfront.domain.permissions import Permission
from shopfront.domain.session import SessionContext
from shopfront.services.cart_service import CartService
from shopfront.services.item_service import ItemService
from shopfront.services.order_service import OrderService


class TestItemService:
    def test_create_sets_owner(self, db, make_user, ctx_for):
        user = make_user()
        item = ItemService(db).create_item(ctx_for(user), {"title": "Mug", "price": 900, "description": "A mug"})
        assert item.user_id == user.id
        assert item.price == 900

    def test_create_requires_login(self, db):
        with pytest.raises(Unauthenticated):
            ItemService(db).create_item(SessionContext.anonymous(), {"title": "Mug", "price": 900})

    def test_update_ignores_id(self, db, make_user, make_item, ctx_for):
        item = make_item("Mug", 900)
        updated = ItemService(db).update_item(ctx_for(make_user()), item.id, {"id": 42, "price": 1200})
        assert updated.id == item.id
        assert updated.price == 1200

    def test_owner_can_delete(self, db, make_user, make_item, ctx_for):
        owner = make_user()
        item = make_item(owner=owner)
        ItemService(db).delete_item(ctx_for(owner), item.id)
        with pytest.raises(NotFound):
            ItemService(db).get_item(item.id)

    def test_itemdelete_holder_can_delete_others_item(self, db, make_user, make_item, ctx_for):
        item = make_item(owner=make_user())
        moderator = make_user(permissions=(Permission.ITEMDELETE,))
        assert ItemService(db).delete_item(ctx_for(moderator), item.id)["id"] == item.id

    def test_stranger_cannot_delete(self, db, make_user, make_item, ctx_for):
        item = make_item(owner=make_user())
        with pytest.raises(Forbidden):
            ItemService(db).delete_item(ctx_for(make_user()), item.id)

    def test_deleting_item_drops_its_cart_lines(self, db, make_user, make_item, ctx_for):
        owner, shopper = make_user(), make_user()
        item = make_item(owner=owner)
        CartService(db).add_to_cart(ctx_for(shopper), item.id)

        ItemService(db).delete_item(ctx_for(owner), item.id)

        assert CartService(db).get_cart(ctx_for(shopper))["items"] == []


def _order(db, user, charge="ch_1"):
    order = OrderModel(
        user_id=user.id,
        total=4000,
        charge=charge,
        items=[OrderItemModel(user_id=user.id, title="Shirt", description="", price=2000, quantity=2)],
    )
    db.add(order)
    db.commit()
    return order


class TestOrderService:
    def test_owner_sees_order(self, db, make_user, ctx_for):
        user = make_user()
        order = _order(db, user)
        assert OrderService(db).get_order(ctx_for(user), order.id).total == 4000

    def test_admin_sees_any_order(self, db, make_user, ctx_for):
        order = _order(db, make_user())
        admin = make_user(permissions=(Permission.ADMIN,))
        assert OrderService(db).get_order(ctx_for(admin), order.id).id == order.id

    def test_other_user_is_forbidden(self, db, make_user, ctx_for):
        order = _order(db, make_user())
        with pytest.raises(Forbidden):
            OrderService(db).get_order(ctx_for(make_user()), order.id)

    def test_missing_order(self, db, make_user, ctx_for):
        with pytest.raises(NotFound):
            OrderService(db).get_order(ctx_for(make_user()), 404)

    def test_list_only_callers_orders(self, db, make_user, ctx_for):
        user, other = make_user(), make_user()
        _order(db, user, "ch_a")
        _order(db, user, "ch_b")
        _order(db, other, "ch_c")

        charges = {o.charge for o in OrderService(db).list_orders(ctx_for(user))}

        assert charges == {"ch_a", "ch_b"}


def test_seed_only_fills_an_empty_catalog(db):
    assert seed(db) == len(CATALOG)
    assert seed(db) == 0
    assert len(ItemService(db).list_items()) == len(CATALOG)

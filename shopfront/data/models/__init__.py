#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from shopfront.data.models.user import UserModel
from shopfront.data.models.item import ItemModel
from shopfront.data.models.cart_item import CartItemModel
from shopfront.data.models.order import OrderModel
from shopfront.data.models.order_item import OrderItemModel

__all__ = ["UserModel", "ItemModel", "CartItemModel", "OrderModel", "OrderItemModel"]

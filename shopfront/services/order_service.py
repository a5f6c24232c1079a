# shopfront/services/order_service.py
from sqlalchemy.orm import Session

from shopfront.data.models.order import OrderModel
from shopfront.domain.errors import Forbidden, NotFound
from shopfront.domain.permissions import Permission
from shopfront.domain.session import SessionContext
from shopfront.repos.order_repo import OrderRepo
from shopfront.services.auth_guard import has_permission, require_authenticated


class OrderService:
    """
    Odczyt zamówień. Zamówienia powstają tylko w CheckoutService
    i nie są później modyfikowane.
    """

    def __init__(self, db: Session):
        self.repo = OrderRepo(db)

    def get_order(self, ctx: SessionContext, order_id: int) -> OrderModel:
        require_authenticated(ctx, "You must be signed in to do this!")

        order = self.repo.get_order(order_id)
        if not order:
            raise NotFound("Order not found")

        if order.user_id != ctx.caller_id and not has_permission(ctx, (Permission.ADMIN,)):
            raise Forbidden("You can't see this order")

        return order

    def list_orders(self, ctx: SessionContext) -> list[OrderModel]:
        require_authenticated(ctx, "You must be signed in to do that!")
        return self.repo.list_orders_for_user(ctx.caller_id)

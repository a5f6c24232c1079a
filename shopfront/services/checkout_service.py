# shopfront/services/checkout_service.py
from uuid import uuid4

from redis.exceptions import RedisError

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shopfront.data.models.order import OrderModel
from shopfront.data.models.order_item import OrderItemModel
from shopfront.domain.errors import (
    CheckoutInProgress,
    GatewayFailure,
    InvalidOperation,
    NotFound,
    PartialCommit,
)
from shopfront.domain.session import SessionContext
from shopfront.payments import PaymentDeclined, PaymentGateway, PaymentOutcomeUnknown
from shopfront.repos.cart_repo import CartRepo
from shopfront.repos.order_repo import OrderRepo
from shopfront.repos.user_repo import UserRepo
from shopfront.services.auth_guard import require_authenticated
from shopfront.services.lock_service import LockService
from shopfront.utils.settings import PAYMENT_CURRENCY, CHECKOUT_LOCK_TTL_SECONDS
from shopfront.utils.logging import get_logger

logger = get_logger(__name__)


class CheckoutService:
    """
    Checkout jako saga, kroki w scisle okreslonej kolejnosci:

    1. autoryzacja + lock per user
    2. snapshot koszyka (user + linie + produkty)
    3. wyliczenie kwoty; pusty koszyk -> InvalidOperation, bez kontaktu z bramka
    4. obciazenie w bramce - punkt bez odwrotu
    5. zamowienie + kopie produktow
    6. usuniecie linii ze snapshotu (po id, nie nowym zapytaniem)
    7. zwrot zamowienia

    Blad po kroku 4 to PartialCommit: logujemy charge id i nigdy nie ponawiamy.
    """

    def __init__(self, db: Session, gateway: PaymentGateway, lock_service: LockService):
        self.db = db
        self.users = UserRepo(db)
        self.carts = CartRepo(db)
        self.orders = OrderRepo(db)
        self.gateway = gateway
        self.lock_service = lock_service

    def checkout(self, ctx: SessionContext, payment_token: str) -> OrderModel:
        require_authenticated(ctx, "You must be signed in to complete this order")
        user_id = ctx.caller_id

        lock_token = uuid4().hex
        if not self.lock_service.acquire_checkout_lock(user_id, lock_token, CHECKOUT_LOCK_TTL_SECONDS):
            logger.info(f"Checkout dla uzytkownika {user_id} juz trwa")
            raise CheckoutInProgress("A checkout is already in progress for this account")

        try:
            return self._run(user_id, payment_token)
        finally:
            try:
                self.lock_service.release_checkout_lock(user_id, lock_token)
            except RedisError as e:
                # lock i tak wygasnie po TTL; nie przykrywamy wyniku checkoutu
                logger.warning(f"Failed to release checkout lock for user {user_id}: {e}")

    def _run(self, user_id: int, payment_token: str) -> OrderModel:
        user = self.users.get_user_with_cart(user_id)
        if not user:
            raise NotFound("No such user")

        snapshot = [
            {
                "cart_item_id": line.id,
                "title": line.item.title,
                "description": line.item.description,
                "image": line.item.image,
                "large_image": line.item.large_image,
                "price": line.item.price,
                "quantity": line.quantity,
            }
            for line in user.cart
        ]

        if not snapshot:
            raise InvalidOperation("Your cart is empty")

        amount = sum(line["price"] * line["quantity"] for line in snapshot)
        logger.info(f"Going to charge user {user_id} for the total of {amount} {PAYMENT_CURRENCY}")

        # zamknij transakcje odczytu przed wywolaniem sieciowym
        self.db.rollback()

        try:
            charge = self.gateway.charge(amount, PAYMENT_CURRENCY, payment_token)
        except PaymentDeclined as e:
            logger.warning(f"Payment declined for user {user_id}: {e}")
            raise GatewayFailure(f"Payment failed: {e}") from e
        except PaymentOutcomeUnknown as e:
            logger.error(
                "Payment outcome unknown, manual reconciliation required",
                user_id=user_id,
                amount=amount,
                charge_id=None,
            )
            raise PartialCommit(
                "We could not confirm your payment. Do not retry; contact support.",
                amount=amount,
            ) from e

        try:
            order = OrderModel(
                user_id=user_id,
                # kwota zwrocona przez bramke, nie wyliczona lokalnie
                total=charge.amount,
                charge=charge.id,
                items=[
                    OrderItemModel(
                        user_id=user_id,
                        title=line["title"],
                        description=line["description"],
                        image=line["image"],
                        large_image=line["large_image"],
                        price=line["price"],
                        quantity=line["quantity"],
                    )
                    for line in snapshot
                ],
            )
            self.orders.add_order(order)
            self.carts.delete_cart_items([line["cart_item_id"] for line in snapshot])
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(
                "Charge captured but order was not saved, manual reconciliation required",
                user_id=user_id,
                amount=charge.amount,
                charge_id=charge.id,
                error=str(e),
            )
            raise PartialCommit(
                "Your payment was taken but the order could not be saved. "
                f"Do not retry; contact support with reference {charge.id}.",
                charge_id=charge.id,
                amount=charge.amount,
            ) from e

        logger.info(f"Order {order.id} created for user {user_id}, charge {charge.id}")
        return order

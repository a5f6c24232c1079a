from typing import Dict, Any
from sqlalchemy.orm import Session

from shopfront.data.models.cart_item import CartItemModel
from shopfront.domain.errors import NotFound, Forbidden, InvalidOperation
from shopfront.domain.session import SessionContext
from shopfront.repos.cart_repo import CartRepo
from shopfront.repos.item_repo import ItemRepo
from shopfront.services.auth_guard import require_authenticated
from shopfront.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Koszyk = linie CartItem, jedna na pare (user, item).
    commands (add, remove) modyfikuja stan
    query (get) tylko odczyt
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.items = ItemRepo(db)

    #query - odczyt
    def get_cart(self, ctx: SessionContext) -> Dict[str, Any]:
        require_authenticated(ctx)
        lines = self.repo.get_cart_items(ctx.caller_id)
        total = sum(line.item.price * line.quantity for line in lines)
        return {
            "user_id": ctx.caller_id,
            "items": lines,
            "total": total,
        }

    #commands
    def add_to_cart(self, ctx: SessionContext, item_id: int) -> CartItemModel:
        require_authenticated(ctx, "You must be signed in to add to cart")
        user_id = ctx.caller_id

        if not self.items.get_item(item_id):
            raise NotFound(f"No item found for id {item_id}")

        # sprawdz czy produkt juz jest w koszyku
        line = self.repo.get_cart_item(user_id, item_id)

        if line is None:
            line = self.repo.insert_cart_item(user_id, item_id)
            if line is not None:
                self.repo.commit()
                logger.info(f"Dodano produkt {item_id} do koszyka uzytkownika {user_id}")
                return self.repo.refresh(line)

            # rownolegly request wstawil linie miedzy odczytem a insertem - doliczamy do niej
            logger.info(f"Linia dla ({user_id}, {item_id}) powstala rownolegle, zwiekszam ilosc")
            line = self.repo.get_cart_item(user_id, item_id)
            if line is None:
                raise InvalidOperation("Your cart changed while adding the item, please try again")

        if not self.repo.increment_quantity(line.id):
            # linia usunieta rownolegle miedzy odczytem a UPDATE - wstawiamy ja od nowa
            logger.info(f"Linia {line.id} zniknela przed zwiekszeniem ilosci, wstawiam ponownie")
            self.repo.forget(line)
            line = self.repo.insert_cart_item(user_id, item_id)
            if line is None:
                raise InvalidOperation("Your cart changed while adding the item, please try again")
            self.repo.commit()
            return self.repo.refresh(line)

        self.repo.commit()
        line = self.repo.refresh(line)

        logger.info(f"Produkt {item_id} juz w koszyku uzytkownika {user_id}, ilosc {line.quantity}")
        return line

    def remove_from_cart(self, ctx: SessionContext, cart_item_id: int) -> Dict[str, Any]:
        require_authenticated(ctx, "You must be signed in to remove from cart")

        line = self.repo.get_cart_item_by_id(cart_item_id)
        if not line:
            raise NotFound("No cart item found!")

        # wlasnosc bezwzgledna, admin tez nie usunie cudzej linii
        if line.user_id != ctx.caller_id:
            logger.info(f"Uzytkownik {ctx.caller_id} probowal usunac cudza linie {cart_item_id}")
            raise Forbidden("You do not own this cart item")

        removed = {"id": line.id, "item_id": line.item_id}
        self.repo.delete_cart_item(line)
        self.repo.commit()

        logger.info(f"Linia {cart_item_id} usunieta z koszyka uzytkownika {ctx.caller_id}")
        return removed

#shopfront/api/routers/carts.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shopfront.api.deps import get_session_context
from shopfront.data.database import get_db
from shopfront.domain.schemas import CartItemOut, CartOut, RemovedCartItemOut
from shopfront.domain.session import SessionContext
from shopfront.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


@router.get("/", response_model=CartOut)
def get_cart(ctx: SessionContext = Depends(get_session_context), db: Session = Depends(get_db)):
    return CartService(db).get_cart(ctx)


@router.post("/items/{item_id}", response_model=CartItemOut)
def add_to_cart(
    item_id: int,
    ctx: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
):
    return CartService(db).add_to_cart(ctx, item_id)


@router.delete("/lines/{cart_item_id}", response_model=RemovedCartItemOut)
def remove_from_cart(
    cart_item_id: int,
    ctx: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
):
    return CartService(db).remove_from_cart(ctx, cart_item_id)

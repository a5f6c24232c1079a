# shopfront/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shopfront.api.deps import get_lock_service, get_payment_gateway, get_session_context
from shopfront.data.database import get_db
from shopfront.domain.schemas import CheckoutIn, OrderOut
from shopfront.domain.session import SessionContext
from shopfront.payments import PaymentGateway
from shopfront.services.checkout_service import CheckoutService
from shopfront.services.lock_service import LockService
from shopfront.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("/", response_model=OrderOut, status_code=201)
def create_order(
    payload: CheckoutIn,
    ctx: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
    gateway: PaymentGateway = Depends(get_payment_gateway),
    lock_service: LockService = Depends(get_lock_service),
):
    """
    Checkout: obciąża kartę za zawartość koszyka i tworzy zamówienie.
    """
    svc = CheckoutService(db, gateway=gateway, lock_service=lock_service)
    return svc.checkout(ctx, payload.token)


@router.get("/", response_model=List[OrderOut])
def list_orders(ctx: SessionContext = Depends(get_session_context), db: Session = Depends(get_db)):
    return OrderService(db).list_orders(ctx)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: int,
    ctx: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
):
    """
    Pobiera szczegóły zamówienia.
    """
    return OrderService(db).get_order(ctx, order_id)

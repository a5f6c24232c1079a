from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shopfront.api.deps import get_session_context
from shopfront.data.database import get_db
from shopfront.domain.schemas import ItemCreate, ItemOut, ItemUpdate
from shopfront.domain.session import SessionContext
from shopfront.services.item_service import ItemService

router = APIRouter(prefix="/items", tags=["items"])


@router.get("/", response_model=List[ItemOut])
def list_items(db: Session = Depends(get_db)):
    return ItemService(db).list_items()


@router.get("/{item_id}", response_model=ItemOut)
def get_item(item_id: int, db: Session = Depends(get_db)):
    return ItemService(db).get_item(item_id)


@router.post("/", response_model=ItemOut, status_code=201)
def create_item(
    payload: ItemCreate,
    ctx: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
):
    return ItemService(db).create_item(ctx, payload.model_dump())


@router.patch("/{item_id}", response_model=ItemOut)
def update_item(
    item_id: int,
    payload: ItemUpdate,
    ctx: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
):
    return ItemService(db).update_item(ctx, item_id, payload.model_dump(exclude_unset=True, exclude_none=True))


@router.delete("/{item_id}")
def delete_item(
    item_id: int,
    ctx: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
):
    return ItemService(db).delete_item(ctx, item_id)

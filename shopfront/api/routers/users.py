from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from shopfront.api.deps import (
    clear_session_cookie,
    get_notifier,
    get_session_context,
    set_session_cookie,
)
from shopfront.data.database import get_db
from shopfront.domain.schemas import (
    MeOut,
    MessageOut,
    RequestResetIn,
    ResetPasswordIn,
    SigninIn,
    SignupIn,
    UpdatePermissionsIn,
    UserRead,
)
from shopfront.domain.session import SessionContext
from shopfront.services.credential_service import CredentialService
from shopfront.services.notification_service import NotificationService

router = APIRouter(prefix="/users", tags=["users"])


def get_service(db: Session, notifier: NotificationService | None = None):
    return CredentialService(db, notifier=notifier)


@router.post("/signup", response_model=UserRead, status_code=201)
def signup(payload: SignupIn, response: Response, db: Session = Depends(get_db)):
    user, token = get_service(db).signup(payload.name, payload.email, payload.password)
    set_session_cookie(response, token)
    return user


@router.post("/signin", response_model=UserRead)
def signin(payload: SigninIn, response: Response, db: Session = Depends(get_db)):
    user, token = get_service(db).signin(payload.email, payload.password)
    set_session_cookie(response, token)
    return user


@router.post("/signout", response_model=MessageOut)
def signout(response: Response, db: Session = Depends(get_db)):
    clear_session_cookie(response)
    return get_service(db).signout()


@router.post("/request-reset", response_model=MessageOut)
def request_reset(
    payload: RequestResetIn,
    db: Session = Depends(get_db),
    notifier: NotificationService = Depends(get_notifier),
):
    return get_service(db, notifier).request_reset(payload.email)


@router.post("/reset-password", response_model=UserRead)
def reset_password(payload: ResetPasswordIn, response: Response, db: Session = Depends(get_db)):
    user, token = get_service(db).reset_password(
        payload.reset_token, payload.password, payload.confirm_password
    )
    set_session_cookie(response, token)
    return user


@router.get("/me", response_model=MeOut | None)
def me(ctx: SessionContext = Depends(get_session_context), db: Session = Depends(get_db)):
    return get_service(db).me(ctx)


@router.get("/", response_model=List[UserRead])
def list_users(ctx: SessionContext = Depends(get_session_context), db: Session = Depends(get_db)):
    return get_service(db).list_users(ctx)


@router.put("/{user_id}/permissions", response_model=UserRead)
def update_permissions(
    user_id: int,
    payload: UpdatePermissionsIn,
    ctx: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
):
    return get_service(db).update_permissions(ctx, user_id, payload.permissions)

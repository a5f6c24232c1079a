# shopfront/services/security.py
import secrets
from datetime import datetime, timezone

from jose import jwt, JWTError
from passlib.context import CryptContext

from shopfront.utils.settings import APP_SECRET

JWT_ALG = "HS256"

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

#hash do weryfikacji "na pusto" gdy user nie istnieje - signin ma ten sam koszt w obu przypadkach
_DUMMY_HASH = pwd_context.hash("dummy-password-for-timing")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str | None) -> bool:
    if password_hash is None:
        pwd_context.verify(password, _DUMMY_HASH)
        return False
    return pwd_context.verify(password, password_hash)


def issue_token(claims: dict) -> str:
    to_encode = dict(claims)
    to_encode.setdefault("iat", int(datetime.now(timezone.utc).timestamp()))
    return jwt.encode(to_encode, APP_SECRET, algorithm=JWT_ALG)


def verify_token(token: str | None) -> dict | None:
    if not token:
        return None
    try:
        return jwt.decode(token, APP_SECRET, algorithms=[JWT_ALG])
    except JWTError:
        return None


def generate_reset_token() -> str:
    # 20 losowych bajtow -> 40 znakow hex
    return secrets.token_hex(20)

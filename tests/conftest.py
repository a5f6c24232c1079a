import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["PAYMENT_GATEWAY"] = "fake"
os.environ["APP_SECRET"] = "test-secret"

import fakeredis
import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import shopfront.data.models  # noqa: F401
from shopfront.data.database import Base
from shopfront.data.models import ItemModel, UserModel
from shopfront.domain.permissions import Permission
from shopfront.domain.session import SessionContext
from shopfront.payments.fake_adapter import FakeGateway
from shopfront.services.lock_service import LockService
from shopfront.services.security import hash_password


def _sqlite_engine(url: str, **kwargs):
    engine = create_engine(url, connect_args={"check_same_thread": False}, **kwargs)

    # pysqlite sam zarzadza BEGIN i psuje SAVEPOINT - przejmujemy to (przepis z dokumentacji SQLAlchemy)
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")

    return engine


class RecordingNotifier:
    def __init__(self, fail: bool = False):
        self.sent: list[tuple[str, str]] = []
        self.fail = fail

    def send_reset_token(self, email: str, reset_token: str):
        if self.fail:
            raise ConnectionError("broker unavailable")
        self.sent.append((email, reset_token))


@pytest.fixture()
def engine():
    engine = _sqlite_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture()
def db(engine):
    session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)()
    yield session
    session.close()


@pytest.fixture()
def make_user(db):
    counter = {"n": 0}

    def _make(email=None, password="secret", permissions=(Permission.USER,), name="Test User"):
        counter["n"] += 1
        user = UserModel(
            name=name,
            email=email or f"user{counter['n']}@example.com",
            password=hash_password(password),
            permissions=[p.value for p in permissions],
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture()
def make_item(db):
    def _make(title="Shirt", price=2000, owner=None, **extra):
        item = ItemModel(
            title=title,
            price=price,
            description=extra.pop("description", f"A {title.lower()}"),
            image=extra.pop("image", f"{title.lower()}.jpg"),
            large_image=extra.pop("large_image", f"{title.lower()}-large.jpg"),
            user_id=owner.id if owner else None,
        )
        db.add(item)
        db.commit()
        db.refresh(item)
        return item

    return _make


@pytest.fixture()
def ctx_for():
    return SessionContext.for_user


@pytest.fixture()
def redis_client():
    return fakeredis.FakeRedis(decode_responses=True)


@pytest.fixture()
def lock_service(redis_client):
    return LockService(client=redis_client)


@pytest.fixture()
def gateway():
    return FakeGateway()


@pytest.fixture()
def notifier():
    return RecordingNotifier()


@pytest.fixture()
def failing_notifier():
    return RecordingNotifier(fail=True)


@pytest.fixture()
def sqlite_engine():
    return _sqlite_engine

import os

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("RUN_MIGRATIONS_ON_STARTUP", "false")
os.environ.setdefault("JWT_SECRET", "test-secret")

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional
import itertools

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.auth.jwt_tokens import token_manager
from storefront.auth.passwords import hash_password
from storefront.auth.rate_limiter import login_rate_limiter
from storefront.db.database import Base, get_db
from storefront.main import app
from storefront.models import (
    AdminUser, Category, SubCategory, SuperSubCategory, Product,
)
from storefront.services import get_storage_provider
from storefront.services.storage_providers.base import StorageProvider

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)
_tick = itertools.count(1)


def next_timestamp() -> datetime:
    """Strictly increasing created_at values so newest-first ordering is deterministic"""
    return BASE_TIME + timedelta(minutes=next(_tick))


class InMemoryStorageProvider(StorageProvider):
    def __init__(self):
        self.bucket = "images"
        self.objects: Dict[str, Dict[str, Any]] = {}
        self.connected = True
        self.fail_uploads = False

    def upload(self, data: bytes, path: str, content_type: str) -> Optional[str]:
        if self.fail_uploads:
            return None
        self.objects[path] = {
            "data": data,
            "content_type": content_type,
            "created_at": next_timestamp().isoformat(),
        }
        return self.get_public_url(path)

    def delete(self, path: str) -> bool:
        return self.objects.pop(path, None) is not None

    def get_public_url(self, path: str) -> str:
        return f"https://cdn.test/{self.bucket}/{path}"

    def list_files(self) -> List[Dict[str, Any]]:
        files = [
            {
                "name": path,
                "size": len(obj["data"]),
                "created_at": obj["created_at"],
                "id": path,
                "metadata": {"size": len(obj["data"]), "mimetype": obj["content_type"]},
            }
            for path, obj in self.objects.items()
        ]
        return sorted(files, key=lambda f: f["created_at"], reverse=True)

    def check_connection(self) -> bool:
        return self.connected


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def storage():
    return InMemoryStorageProvider()


@pytest.fixture
def client(db, storage):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage_provider] = lambda: storage
    login_rate_limiter.clear()

    # No context manager: the lifespan (migrations) is not run
    yield TestClient(app)

    app.dependency_overrides.clear()
    login_rate_limiter.clear()


@pytest.fixture
def admin_client(client):
    token = token_manager.sign_token("00000000-0000-0000-0000-000000000001", "admin", "Site Admin")
    client.cookies.set("admin_token", token)
    return client


@pytest.fixture
def admin_user(db):
    user = AdminUser(username="admin", password_hash=hash_password("s3cret-pass", rounds=4), name="Site Admin")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


# Row factories

def make_category(db, name: str, slug: Optional[str] = None, status: str = "active", **kwargs) -> Category:
    row = Category(name=name, slug=slug or name.lower().replace(" ", "-"), status=status,
                   created_at=next_timestamp(), **kwargs)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def make_sub_category(db, category: Category, name: str, slug: Optional[str] = None,
                      status: str = "active", **kwargs) -> SubCategory:
    row = SubCategory(name=name, slug=slug or name.lower().replace(" ", "-"), category_id=category.id,
                      status=status, created_at=next_timestamp(), **kwargs)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def make_super_sub_category(db, sub_category: SubCategory, name: str, slug: Optional[str] = None,
                            status: str = "active", **kwargs) -> SuperSubCategory:
    row = SuperSubCategory(name=name, slug=slug or name.lower().replace(" ", "-"), sub_category_id=sub_category.id,
                           status=status, created_at=next_timestamp(), **kwargs)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def make_product(db, name: str, slug: Optional[str] = None, category=None, sub_category=None,
                 super_sub_category=None, status: str = "active", **kwargs) -> Product:
    row = Product(
        name=name,
        slug=slug or name.lower().replace(" ", "-"),
        category_id=category.id if category else None,
        sub_category_id=sub_category.id if sub_category else None,
        super_sub_category_id=super_sub_category.id if super_sub_category else None,
        status=status,
        created_at=next_timestamp(),
        **kwargs,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


@pytest.fixture
def catalog(db):
    """Lab -> Glassware -> Beakers, with products hung at every level"""
    lab = make_category(db, "Lab Equipment", slug="lab")
    glassware = make_sub_category(db, lab, "Glassware")
    beakers = make_super_sub_category(db, glassware, "Beakers")

    products = {
        "centrifuge": make_product(db, "Centrifuge", category=lab),
        "flask": make_product(db, "Flask", category=lab, sub_category=glassware),
        "beaker-250": make_product(db, "Beaker 250", category=lab, sub_category=glassware,
                                   super_sub_category=beakers),
        "beaker-500": make_product(db, "Beaker 500", category=lab, sub_category=glassware,
                                   super_sub_category=beakers),
    }
    return {"category": lab, "sub_category": glassware, "super_sub_category": beakers, "products": products}

# tests/conftest.py
from decimal import Decimal
from uuid import uuid4

from django.conf import settings
from django.contrib.auth import get_user_model

import pytest
from rest_framework.test import APIClient

from domains.catalog import images
from domains.catalog.models import Category, Product

User = get_user_model()

PNG_BYTES = (
    b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01"
    b"\x08\x06\x00\x00\x00\x1f\x15\xc4\x89\x00\x00\x00\rIDATx\x9cc\xf8\x0f\x00"
    b"\x00\x01\x01\x00\x05\x18\xd8N\x00\x00\x00\x00IEND\xaeB`\x82"
)


# ─────────────────────────────────────────────────────────────
# 전역 테스트 환경 최적화(해싱)
# ─────────────────────────────────────────────────────────────
@pytest.fixture(autouse=True, scope="session")
def _fast_password_hasher(django_db_setup, django_db_blocker):
    """
    해시 느린 기본 해셔 대신 MD5 해셔 사용
    """
    with django_db_blocker.unblock():
        settings.PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]


@pytest.fixture(autouse=True)
def media_root(settings, tmp_path):
    """
    업로드 파일은 테스트마다 임시 디렉터리로, 저장 전략은 로컬로 고정
    """
    settings.MEDIA_ROOT = str(tmp_path / "uploads")
    images.install_image_storage(images.LocalImageStorage())
    yield tmp_path / "uploads"
    images.install_image_storage(images.LocalImageStorage())


# ─────────────────────────────────────────────────────────────
# 클라이언트 & 인증
# ─────────────────────────────────────────────────────────────
@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def user_factory(db):
    def _make(**kw):
        email = kw.pop("email", f"user{uuid4().hex[:6]}@example.com")
        password = kw.pop("password", "Test1234!A")
        kw.setdefault("username", f"{email.split('@')[0]}_{uuid4().hex[:6]}")
        kw.setdefault("role", "user")

        u = User.objects.create_user(email=email, password=password, **kw)
        # ✅ 로그인 테스트용 원문 비밀번호 보관
        u.raw_password = password
        return u

    return _make


@pytest.fixture
def user(user_factory):
    """기본 로그인 사용자"""
    return user_factory(email="user@example.com", username="shopper")


@pytest.fixture
def admin(user_factory):
    """관리자 사용자 (role=admin → 저장 시 is_staff 동기화)"""
    return user_factory(email="admin@example.com", username="boss", role="admin")


@pytest.fixture
def auth_client(user):
    """
    SimpleJWT 토큰을 받아 Authorization 헤더 세팅된 APIClient 반환
    """
    c = APIClient()
    resp = c.post(
        "/api/v1/auth/token/",
        {"email": user.email, "password": user.raw_password},
        format="json",
    )
    assert resp.status_code == 200, getattr(resp, "data", resp.content)
    c.credentials(HTTP_AUTHORIZATION=f"Bearer {resp.data['access']}")
    return c


@pytest.fixture
def admin_client(admin):
    c = APIClient()
    c.force_authenticate(user=admin)
    return c


# ─────────────────────────────────────────────────────────────
# 카탈로그 기본 리소스
# ─────────────────────────────────────────────────────────────
@pytest.fixture
def category(db):
    return Category.objects.create(name="Stationery")


@pytest.fixture
def product_factory(db):
    def _make(**kw):
        kw.setdefault("name", f"Pen {uuid4().hex[:4]}")
        kw.setdefault("brand", "Bic")
        kw.setdefault("description", "blue ink")
        kw.setdefault("price", Decimal("2.50"))
        kw.setdefault("quantity", 3)
        kw.setdefault("image", "https://cdn.example.com/pen.png")
        return Product.objects.create(**kw)

    return _make


@pytest.fixture
def product(product_factory, category):
    return product_factory(category=category, name="Pen")


@pytest.fixture
def png_bytes():
    return PNG_BYTES

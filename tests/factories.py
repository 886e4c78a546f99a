import itertools
from decimal import Decimal
from uuid import uuid4

from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile

from domains.catalog.models import Category, Product

_email_seq = itertools.count(1)
User = get_user_model()


def unique_email(prefix="user", domain="example.com"):
    return f"{prefix}{next(_email_seq)}@{domain}"


def create_user(email=None, password="Test1234!A", role="user", **extra):
    """
    username 은 이메일 앞부분 + 중복 방지 suffix
    """
    if email is None:
        email = unique_email()
    extra.setdefault("username", f"{email.split('@')[0]}_{uuid4().hex[:6]}")
    return User.objects.create_user(email=email, password=password, role=role, **extra)


def create_product(name="Pen", price="2.50", category=None, image="https://cdn.example.com/pen.png", **extra):
    if category is None:
        category, _ = Category.objects.get_or_create(name="Stationery")
    extra.setdefault("brand", "Bic")
    extra.setdefault("description", "blue ink")
    extra.setdefault("quantity", 3)
    return Product.objects.create(
        name=name,
        price=Decimal(price),
        category=category,
        image=image,
        **extra,
    )


def image_file(name="a.png", content=b"\x89PNG\r\n\x1a\n", content_type="image/png"):
    return SimpleUploadedFile(name, content, content_type=content_type)


def product_form(category, /, **overrides):
    """관리자 생성 요청 본문 (multipart 문자열 값)"""
    body = {
        "name": "Pen",
        "brand": "Bic",
        "description": "blue",
        "price": "2.5",
        "category": str(category.pk),
        "quantity": "3",
    }
    body.update(overrides)
    return body

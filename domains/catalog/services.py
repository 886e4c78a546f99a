from __future__ import annotations

import logging
import math
import uuid
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from rest_framework import status

from shared.exceptions import DomainError

from .filters import ProductFilter
from .images import ImageStorage, ImageUpload, ensure_image_file, get_image_storage, resolve_image
from .models import Category, Product

logger = logging.getLogger(__name__)

PAGE_SIZE = 6
ADMIN_LIST_LIMIT = 12
TOP_LIMIT = 4
NEW_LIMIT = 5

PRICE_LIMIT = Decimal("1e10")
COUNT_LIMIT = 2147483647

# 요청 필드명 → 모델 속성
PRODUCT_FIELDS: Dict[str, str] = {
    "name": "name",
    "description": "description",
    "brand": "brand",
    "price": "price",
    "category": "category_id",
    "quantity": "quantity",
    "countInStock": "count_in_stock",
}
REQUIRED_FIELDS = ("name", "brand", "description", "price", "category", "quantity")
TEXT_FIELDS = ("name", "description", "brand")


class ProductValidationError(DomainError):
    """필수 필드 누락 / 숫자 변환 실패"""

    default_message = "All fields are required"


class InvalidCategory(DomainError):
    """category 값이 UUID 형식이 아닐 때 (존재 여부는 보지 않음)"""

    default_message = "Invalid category ID"


class MissingImage(DomainError):
    default_message = "Product image is required"


class EmptyUpdate(DomainError):
    default_message = "No update fields provided"


class ProductNotFound(DomainError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Product not found"


class CategoryNotFound(DomainError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Category not found"


@dataclass
class ProductPage:
    products: List[Product]
    page: int
    pages: int
    has_more: bool


# -----------------------------
# 입력 정규화 유틸
# -----------------------------
def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def extract_product_fields(data: Mapping[str, Any]) -> Dict[str, Any]:
    """요청 payload 에서 상품 필드만 뽑는다 (파일/이미지는 제외)."""
    return {key: data.get(key) for key in PRODUCT_FIELDS if key in data}


def parse_uuid(value: Any) -> Optional[uuid.UUID]:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value).strip())
    except (TypeError, ValueError, AttributeError):
        return None


def _parse_category(value: Any) -> uuid.UUID:
    category_id = parse_uuid(value)
    if category_id is None:
        raise InvalidCategory()
    return category_id


def _to_decimal(field: str, value: Any) -> Decimal:
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ProductValidationError(f"{field} must be a number")
    if not number.is_finite():
        raise ProductValidationError(f"{field} must be a number")
    if number < 0:
        raise ProductValidationError(f"{field} must not be negative")
    return number


def _to_price(value: Any) -> Decimal:
    number = _to_decimal("price", value)
    try:
        price = number.quantize(Decimal("0.01"))
    except InvalidOperation:
        raise ProductValidationError("price is too large")
    # DecimalField(max_digits=12, decimal_places=2) → 정수부 10자리까지
    if price >= PRICE_LIMIT:
        raise ProductValidationError("price is too large")
    return price


def _to_count(field: str, value: Any) -> int:
    number = _to_decimal(field, value)
    if number != number.to_integral_value():
        raise ProductValidationError(f"{field} must be an integer")
    # PositiveIntegerField 범위
    if number > COUNT_LIMIT:
        raise ProductValidationError(f"{field} is too large")
    return int(number)


def _build_values(fields: Mapping[str, Any], *, partial: bool) -> Dict[str, Any]:
    """
    요청 필드 → 모델 값 (숫자 변환 + category 형식 검증)
    - partial=False: 생성, 필수 필드가 모두 있다고 가정
    - partial=True : 수정, 들어온 필드만 변환
    """
    values: Dict[str, Any] = {}
    for key, attr in PRODUCT_FIELDS.items():
        if key not in fields:
            continue
        raw = fields[key]

        if key == "countInStock":
            # 선택 필드: 빈 값이면 비워 둔다
            values[attr] = None if _is_blank(raw) else _to_count(key, raw)
            continue

        if _is_blank(raw):
            if partial:
                raise ProductValidationError(f"{key} cannot be blank")
            continue

        if key == "category":
            values[attr] = _parse_category(raw)
        elif key == "price":
            values[attr] = _to_price(raw)
        elif key == "quantity":
            values[attr] = _to_count(key, raw)
        else:
            values[attr] = str(raw).strip() if key != "description" else str(raw)
    return values


# -----------------------------
# 상품 쓰기
# -----------------------------
def create_product(
    fields: Mapping[str, Any],
    image: Optional[ImageUpload] = None,
    storage: Optional[ImageStorage] = None,
) -> Product:
    """
    검증 순서: 필수 필드 → category 형식 → 이미지 유무 → 숫자 변환 → 이미지 저장
    이미지 저장은 모든 검증 뒤에 한다 (거절된 요청이 파일을 남기지 않게).
    """
    if any(_is_blank(fields.get(key)) for key in REQUIRED_FIELDS):
        raise ProductValidationError()
    _parse_category(fields["category"])
    if image is None:
        raise MissingImage()

    values = _build_values(fields, partial=False)
    ensure_image_file(image)
    values["image"] = resolve_image(image, storage or get_image_storage())

    product = Product.objects.create(**values)
    logger.info("Product created: %s (%s)", product.pk, product.name)
    return product


def update_product(
    product_id: Any,
    fields: Mapping[str, Any],
    image: Optional[ImageUpload] = None,
    storage: Optional[ImageStorage] = None,
) -> Product:
    """부분 수정. 이미지가 없으면 기존 값을 유지한다."""
    values = _build_values(fields, partial=True)
    if not values and image is None:
        raise EmptyUpdate()

    product = get_product(product_id)

    if image is not None:
        ensure_image_file(image)
        values["image"] = resolve_image(image, storage or get_image_storage())

    for attr, value in values.items():
        setattr(product, attr, value)
    product.save()
    logger.info("Product updated: %s fields=%s", product.pk, sorted(values))
    return product


def delete_product(product_id: Any) -> Product:
    """영구 삭제 후, 응답용으로 삭제된 레코드를 돌려준다."""
    product = get_product(product_id)
    pk = product.pk
    product.delete()
    # delete() 는 인스턴스 pk 를 None 으로 바꾼다 → 응답에 id 를 남긴다
    product.pk = pk
    logger.info("Product deleted: %s", pk)
    return product


# -----------------------------
# 상품 조회
# -----------------------------
def _base_queryset():
    return Product.objects.prefetch_related("reviews")


def get_product(product_id: Any) -> Product:
    pk = parse_uuid(product_id)
    product = _base_queryset().filter(pk=pk).first() if pk else None
    if product is None:
        raise ProductNotFound()
    return product


def parse_page_number(raw: Any) -> int:
    """없거나 숫자가 아니거나 1보다 작으면 1."""
    try:
        page = int(str(raw).strip())
    except (TypeError, ValueError):
        return 1
    return page if page >= 1 else 1


def list_products(page_number: Any = None, keyword: Optional[str] = None) -> ProductPage:
    """이름 부분 일치(대소문자 무시) + 6개 단위 페이지."""
    page = parse_page_number(page_number)
    filterset = ProductFilter(
        data={"keyword": keyword or ""},
        queryset=_base_queryset().order_by("created_at"),
    )
    qs = filterset.qs

    total = qs.count()
    start = PAGE_SIZE * (page - 1)
    # 범위를 넘는 페이지는 쿼리 없이 빈 목록 (거대한 OFFSET 방지)
    products = list(qs[start:start + PAGE_SIZE]) if start < total else []
    return ProductPage(
        products=products,
        page=page,
        pages=math.ceil(total / PAGE_SIZE),
        has_more=page * PAGE_SIZE < total,
    )


def list_products_for_admin(limit: int = ADMIN_LIST_LIMIT) -> List[Product]:
    return list(
        _base_queryset().select_related("category").order_by("-created_at")[:limit]
    )


def list_top_products(limit: int = TOP_LIMIT) -> List[Product]:
    return list(_base_queryset().order_by("-rating", "-created_at")[:limit])


def list_new_products(limit: int = NEW_LIMIT) -> List[Product]:
    # UUID 는 순서가 없으므로 생성 시각으로 최신순
    return list(_base_queryset().order_by("-created_at")[:limit])


def filter_products(
    category_ids: Optional[Iterable[Any]] = None,
    price_range: Optional[Sequence[Any]] = None,
) -> List[Product]:
    """
    category ∈ category_ids (비어 있으면 미적용)
    AND low <= price <= high (정확히 2개일 때만 적용)
    """
    data: Dict[str, str] = {}
    ids = [str(c).strip() for c in (category_ids or []) if not _is_blank(c)]
    if ids:
        data["category"] = ",".join(ids)
    if price_range is not None and len(price_range) == 2:
        low, high = price_range
        data["min_price"] = str(low).strip()
        data["max_price"] = str(high).strip()

    filterset = ProductFilter(data=data, queryset=_base_queryset().order_by("created_at"))
    if not filterset.is_valid():
        if "category" in filterset.errors:
            raise InvalidCategory()
        raise ProductValidationError("Invalid price range")
    return list(filterset.qs)


# -----------------------------
# 카테고리
# -----------------------------
def list_categories():
    return Category.objects.all().order_by("name")


def get_category(category_id: Any) -> Category:
    pk = parse_uuid(category_id)
    category = Category.objects.filter(pk=pk).first() if pk else None
    if category is None:
        raise CategoryNotFound()
    return category


def create_category(name: str) -> Category:
    category = Category.objects.create(name=name)
    logger.info("Category created: %s (%s)", category.pk, category.name)
    return category


def update_category(category_id: Any, name: str) -> Category:
    category = get_category(category_id)
    category.name = name
    category.save(update_fields=["name", "updated_at"])
    logger.info("Category updated: %s (%s)", category.pk, category.name)
    return category


def delete_category(category_id: Any) -> Category:
    """상품 쪽 참조는 건드리지 않는다 (category_id 가 그대로 남음)."""
    category = get_category(category_id)
    pk = category.pk
    category.delete()
    category.pk = pk
    logger.info("Category deleted: %s", pk)
    return category

from __future__ import annotations

import logging
from typing import Any

from django.db import IntegrityError, transaction
from django.db.models import Avg, Count

from domains.catalog.models import Product
from domains.catalog.services import ProductNotFound, parse_uuid
from shared.exceptions import DomainError

from .models import Review

logger = logging.getLogger(__name__)


class DuplicateReview(DomainError):
    """같은 사용자가 이미 리뷰를 남긴 상품"""

    default_message = "Product already reviewed"


def recompute_rating(product: Product) -> Product:
    """
    저장된 리뷰 기준으로 num_reviews / rating 재계산 후 저장.
    리뷰가 없으면 0 / 0.
    """
    agg = Review.objects.filter(product=product).aggregate(
        avg=Avg("rating"),
        count=Count("review_id"),
    )
    product.num_reviews = agg["count"]
    product.rating = float(agg["avg"] or 0)
    product.save(update_fields=["num_reviews", "rating", "updated_at"])
    return product


@transaction.atomic
def add_review(product_id: Any, user, rating: int, comment: str = "") -> Review:
    """
    리뷰 추가 + 집계 재계산.
    상품 행을 잠근 상태(select_for_update)에서 읽고-쓰므로
    동시에 들어온 리뷰끼리 집계를 덮어쓰지 않는다.
    """
    pk = parse_uuid(product_id)
    product = Product.objects.select_for_update().filter(pk=pk).first() if pk else None
    if product is None:
        raise ProductNotFound()

    if Review.objects.filter(product=product, user=user).exists():
        raise DuplicateReview()

    try:
        with transaction.atomic():
            review = Review.objects.create(
                product=product,
                user=user,
                name=user.display_name if hasattr(user, "display_name") else str(user),
                rating=int(rating),
                comment=comment or "",
            )
    except IntegrityError:
        # 유니크 제약(user, product) 충돌 (동시 요청이 먼저 저장됨)
        raise DuplicateReview()

    recompute_rating(product)
    logger.info(
        "Review added: product=%s user=%s rating=%s (avg=%.2f, n=%s)",
        product.pk,
        user.pk,
        review.rating,
        product.rating,
        product.num_reviews,
    )
    return review

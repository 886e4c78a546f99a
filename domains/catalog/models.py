from __future__ import annotations

import uuid
from django.core.validators import MinValueValidator
from django.db import models


# ------------------------
# Category
# ------------------------
class Category(models.Model):
    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        db_column="category_id",
    )
    # 이름 중복은 허용 (관리자 화면에서만 관리)
    name = models.CharField(max_length=255)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "categories"
        verbose_name = "Category"
        verbose_name_plural = "Categories"
        indexes = [
            models.Index(fields=["name"], name="categories_name_5a1d3e_idx"),
        ]

    def __str__(self) -> str:
        return self.name or f"Category {self.pk}"


# ------------------------
# Products
# ------------------------
class Product(models.Model):
    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        db_column="product_id",
    )

    name = models.CharField(max_length=255)
    description = models.TextField()
    brand = models.CharField(max_length=255)
    price = models.DecimalField(
        max_digits=12, decimal_places=2, validators=[MinValueValidator(0)]
    )

    # 카테고리 존재 여부는 검증하지 않는다.
    # DB 제약 없이 id만 참조 → 카테고리 삭제 후에도 상품의 category_id는 그대로 남음
    category = models.ForeignKey(
        Category,
        null=True,
        blank=True,
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        db_column="category_id",
        related_name="products",
    )

    quantity = models.PositiveIntegerField(default=0)
    count_in_stock = models.PositiveIntegerField(null=True, blank=True)

    # 원격 호스팅 URL 또는 /uploads/<파일명>
    image = models.CharField(max_length=1024)

    # 리뷰 집계값: reviews 기준으로만 재계산 (domains.reviews.services)
    rating = models.FloatField(default=0)
    num_reviews = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "products"
        indexes = [
            models.Index(fields=["name"], name="products_name_8c2e4b_idx"),
            models.Index(fields=["category", "price"], name="products_categor_3b7f90_idx"),
            models.Index(fields=["rating"], name="products_rating_d41e6a_idx"),
        ]

    def __str__(self) -> str:
        return self.name or f"Product {self.pk}"

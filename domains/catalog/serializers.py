# domains/catalog/serializers.py
from __future__ import annotations

from typing import Optional

from drf_spectacular.utils import extend_schema_field
from rest_framework import serializers

from domains.reviews.serializers import ReviewReadSerializer

from .models import Category, Product


# =========================
# Categories
# =========================
class CategorySerializer(serializers.ModelSerializer):
    # API에서 컬럼명을 category_id로 노출
    category_id = serializers.UUIDField(source="id", read_only=True)

    class Meta:
        model = Category
        fields = ("category_id", "name")


class CategoryWriteSerializer(serializers.ModelSerializer):
    name = serializers.CharField(max_length=255, trim_whitespace=True)

    class Meta:
        model = Category
        fields = ("name",)


# =========================
# Products
# =========================
class ProductReadSerializer(serializers.ModelSerializer):
    product_id = serializers.UUIDField(source="id", read_only=True)

    # 참조만: category 는 UUID 그대로 (존재하지 않는 카테고리일 수도 있음)
    category = serializers.UUIDField(source="category_id", read_only=True, allow_null=True)

    price = serializers.DecimalField(max_digits=12, decimal_places=2, coerce_to_string=False)
    countInStock = serializers.IntegerField(source="count_in_stock", allow_null=True, read_only=True)
    numReviews = serializers.IntegerField(source="num_reviews", read_only=True)
    reviews = ReviewReadSerializer(many=True, read_only=True)

    class Meta:
        model = Product
        fields = (
            "product_id",
            "name",
            "description",
            "brand",
            "price",
            "category",
            "quantity",
            "countInStock",
            "image",
            "rating",
            "numReviews",
            "reviews",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields


class ProductAdminSerializer(ProductReadSerializer):
    """관리자 목록용: category 를 레코드로 펼친다 (끊긴 참조면 null)."""

    category = serializers.SerializerMethodField()

    @extend_schema_field(CategorySerializer(allow_null=True))
    def get_category(self, obj: Product) -> Optional[dict]:
        if obj.category_id is None:
            return None
        try:
            category = obj.category
        except Category.DoesNotExist:
            return None
        return CategorySerializer(category).data if category else None


# =========================
# Request bodies
# =========================
class ProductWriteSerializer(serializers.Serializer):
    """
    문서용 입력 스키마 (multipart).
    실제 검증/변환은 services.create_product / update_product 가 한다.
    """

    name = serializers.CharField(required=False)
    brand = serializers.CharField(required=False)
    description = serializers.CharField(required=False)
    price = serializers.CharField(required=False, help_text="숫자 문자열 허용")
    category = serializers.CharField(required=False, help_text="카테고리 UUID")
    quantity = serializers.CharField(required=False)
    countInStock = serializers.CharField(required=False)
    image = serializers.FileField(required=False, help_text="업로드 파일 또는 이미지 URL 문자열")


class ProductFilterRequestSerializer(serializers.Serializer):
    # {"checked": [category_id...], "radio": [low, high]}
    checked = serializers.ListField(child=serializers.CharField(), required=False, default=list)
    radio = serializers.ListField(child=serializers.CharField(), required=False, default=list)


class ProductPageSerializer(serializers.Serializer):
    products = ProductReadSerializer(many=True)
    page = serializers.IntegerField()
    pages = serializers.IntegerField()
    hasMore = serializers.BooleanField()


class ProductDeleteResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    product = ProductReadSerializer()


class CategoryDeleteResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    category = CategorySerializer()

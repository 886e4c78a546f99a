# domains/reviews/serializers.py
from __future__ import annotations

from rest_framework import serializers
from domains.reviews.models import Review


class ReviewReadSerializer(serializers.ModelSerializer):
    # 프로젝트 전역 UUID PK 정책에 맞춰 UUIDField 사용
    review_id = serializers.UUIDField(read_only=True)
    user_id = serializers.UUIDField(read_only=True, allow_null=True)

    class Meta:
        model = Review
        fields = ["review_id", "name", "rating", "comment", "user_id", "created_at"]


class ReviewWriteSerializer(serializers.Serializer):
    """
    입력 필드는 rating, comment 만 받는다.
    작성자/상품은 뷰에서 request.user 와 URL 로 넘긴다.
    """
    rating = serializers.IntegerField(min_value=1, max_value=5)
    comment = serializers.CharField(required=False, allow_blank=True, default="")

# domains/reviews/views.py
from drf_spectacular.utils import OpenApiParameter, OpenApiTypes, extend_schema
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from domains.reviews.serializers import ReviewWriteSerializer
from domains.reviews.services import add_review
from shared.api_markers import ErrorResponseSerializer, MessageResponseSerializer


class ProductReviewCreateAPI(APIView):
    """
    POST /api/v1/products/{product_id}/reviews/  (로그인 사용자, 상품당 1회)
    """

    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        operation_id="CreateProductReview",
        parameters=[
            OpenApiParameter(
                "product_id",
                OpenApiTypes.UUID,
                OpenApiParameter.PATH,
                description="상품 ID (UUID)",
                required=True,
            ),
        ],
        request=ReviewWriteSerializer,
        responses={
            201: MessageResponseSerializer,
            400: ErrorResponseSerializer,
            404: ErrorResponseSerializer,
        },
        tags=["products"],
    )
    def post(self, request, product_id):
        s = ReviewWriteSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        add_review(
            product_id,
            request.user,
            s.validated_data["rating"],
            s.validated_data.get("comment", ""),
        )
        return Response({"message": "Review added"}, status=status.HTTP_201_CREATED)

from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, OpenApiTypes, extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from shared.api_markers import ErrorResponseSerializer
from shared.permissions import ReadOnlyOrAdmin

from . import services
from .serializers import CategoryDeleteResponseSerializer, CategorySerializer, CategoryWriteSerializer

CATEGORY_ID_PARAM = OpenApiParameter("category_id", OpenApiTypes.UUID, OpenApiParameter.PATH)


# /api/v1/categories
class CategoryListCreateAPI(APIView):
    """
    GET  /api/v1/categories         (전체 목록)
    POST /api/v1/categories         (관리자 전용, name만 생성)
    """

    permission_classes = [ReadOnlyOrAdmin]

    @extend_schema(
        operation_id="ListCategories",
        responses={200: CategorySerializer(many=True)},
    )
    def get(self, request):
        return Response(CategorySerializer(services.list_categories(), many=True).data)

    @extend_schema(
        operation_id="CreateCategory",
        request=CategoryWriteSerializer,
        responses={201: CategorySerializer, 400: ErrorResponseSerializer},
    )
    def post(self, request):
        s = CategoryWriteSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        category = services.create_category(s.validated_data["name"])
        return Response(CategorySerializer(category).data, status=status.HTTP_201_CREATED)


# /api/v1/categories/{category_id}
class CategoryDetailAPI(APIView):
    """
    GET    /api/v1/categories/{category_id}
    PUT    /api/v1/categories/{category_id}   (관리자)
    PATCH  /api/v1/categories/{category_id}   (관리자)
    DELETE /api/v1/categories/{category_id}   (관리자, 상품 쪽 참조는 그대로 남음)
    """

    permission_classes = [ReadOnlyOrAdmin]

    @extend_schema(
        operation_id="RetrieveCategory",
        parameters=[CATEGORY_ID_PARAM],
        responses={200: CategorySerializer, 404: ErrorResponseSerializer},
    )
    def get(self, request, category_id):
        return Response(CategorySerializer(services.get_category(category_id)).data)

    def _rename(self, request, category_id):
        s = CategoryWriteSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        category = services.update_category(category_id, s.validated_data["name"])
        return Response(CategorySerializer(category).data)

    @extend_schema(
        operation_id="UpdateCategory",
        parameters=[CATEGORY_ID_PARAM],
        request=CategoryWriteSerializer,
        responses={200: CategorySerializer, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer},
    )
    def put(self, request, category_id):
        return self._rename(request, category_id)

    @extend_schema(
        operation_id="PartialUpdateCategory",
        parameters=[CATEGORY_ID_PARAM],
        request=CategoryWriteSerializer,
        responses={200: CategorySerializer, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer},
    )
    def patch(self, request, category_id):
        return self._rename(request, category_id)

    @extend_schema(
        operation_id="DeleteCategory",
        parameters=[CATEGORY_ID_PARAM],
        responses={200: CategoryDeleteResponseSerializer, 404: ErrorResponseSerializer},
    )
    def delete(self, request, category_id):
        category = services.delete_category(category_id)
        return Response({"message": "Category deleted", "category": CategorySerializer(category).data})

# domains/catalog/views_products.py
from drf_spectacular.utils import (
    extend_schema, OpenApiParameter, OpenApiTypes
)
from rest_framework import permissions, status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from . import services
from .images import get_image_storage, image_upload_from_request
from .serializers import (
    ProductAdminSerializer,
    ProductDeleteResponseSerializer,
    ProductFilterRequestSerializer,
    ProductPageSerializer,
    ProductReadSerializer,
    ProductWriteSerializer,
)
from shared.api_markers import ErrorResponseSerializer
from shared.permissions import IsAdminRole

PRODUCT_ID_PARAM = OpenApiParameter(
    "product_id", OpenApiTypes.UUID, OpenApiParameter.PATH, description="상품 ID (UUID)", required=True
)

ERRORS = {400: ErrorResponseSerializer, 404: ErrorResponseSerializer}


# ─────────────────────────────────────────────────────────────────────────────
# List & Create
# ─────────────────────────────────────────────────────────────────────────────
class ProductListCreateAPI(APIView):
    """
    GET  /api/v1/products/?keyword=&pageNumber=   (공개, 6개 단위 페이지)
    POST /api/v1/products/                        (관리자, multipart)
    """
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def get_permissions(self):
        # 목록은 공개, 생성은 관리자
        return [IsAdminRole()] if self.request.method == "POST" else [permissions.AllowAny()]

    @extend_schema(
        operation_id="ListProducts",
        parameters=[
            OpenApiParameter("keyword", OpenApiTypes.STR, OpenApiParameter.QUERY, required=False, description="이름 검색"),
            OpenApiParameter("pageNumber", OpenApiTypes.INT, OpenApiParameter.QUERY, required=False, description="페이지 번호 (기본 1)"),
        ],
        responses={200: ProductPageSerializer},
    )
    def get(self, request):
        result = services.list_products(
            page_number=request.query_params.get("pageNumber"),
            keyword=request.query_params.get("keyword"),
        )
        return Response(
            {
                "products": ProductReadSerializer(result.products, many=True).data,
                "page": result.page,
                "pages": result.pages,
                "hasMore": result.has_more,
            }
        )

    @extend_schema(
        operation_id="CreateProduct",
        request={"multipart/form-data": ProductWriteSerializer},
        responses={201: ProductReadSerializer, **ERRORS},
    )
    def post(self, request):
        product = services.create_product(
            services.extract_product_fields(request.data),
            image=image_upload_from_request(request),
            storage=get_image_storage(),
        )
        return Response(ProductReadSerializer(product).data, status=status.HTTP_201_CREATED)


# ─────────────────────────────────────────────────────────────────────────────
# 고정 목록: 관리자 / 인기 / 신상품
# ─────────────────────────────────────────────────────────────────────────────
class ProductAdminListAPI(APIView):
    """GET /api/v1/products/all/ : 최신순 12개, category 는 레코드로 펼침"""
    permission_classes = [IsAdminRole]

    @extend_schema(operation_id="ListProductsForAdmin", responses={200: ProductAdminSerializer(many=True)})
    def get(self, request):
        products = services.list_products_for_admin()
        return Response(ProductAdminSerializer(products, many=True).data)


class ProductTopListAPI(APIView):
    permission_classes = [permissions.AllowAny]

    @extend_schema(operation_id="ListTopProducts", responses={200: ProductReadSerializer(many=True)})
    def get(self, request):
        return Response(ProductReadSerializer(services.list_top_products(), many=True).data)


class ProductNewListAPI(APIView):
    permission_classes = [permissions.AllowAny]

    @extend_schema(operation_id="ListNewProducts", responses={200: ProductReadSerializer(many=True)})
    def get(self, request):
        return Response(ProductReadSerializer(services.list_new_products(), many=True).data)


class ProductFilterAPI(APIView):
    """
    POST /api/v1/products/filter/
    body: {"checked": [category_id...], "radio": [low, high]}
    """
    permission_classes = [permissions.AllowAny]

    @extend_schema(
        operation_id="FilterProducts",
        request=ProductFilterRequestSerializer,
        responses={200: ProductReadSerializer(many=True), 400: ErrorResponseSerializer},
    )
    def post(self, request):
        s = ProductFilterRequestSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        products = services.filter_products(
            category_ids=s.validated_data.get("checked"),
            price_range=s.validated_data.get("radio"),
        )
        return Response(ProductReadSerializer(products, many=True).data)


# ─────────────────────────────────────────────────────────────────────────────
# Retrieve / Update / Delete
# ─────────────────────────────────────────────────────────────────────────────
class ProductDetailAPI(APIView):
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def get_permissions(self):
        # 열람은 모두 허용, 수정/삭제는 관리자만
        return [permissions.AllowAny()] if self.request.method in permissions.SAFE_METHODS else [IsAdminRole()]

    @extend_schema(operation_id="RetrieveProduct", parameters=[PRODUCT_ID_PARAM],
                   responses={200: ProductReadSerializer, 404: ErrorResponseSerializer})
    def get(self, request, product_id):
        return Response(ProductReadSerializer(services.get_product(product_id)).data)

    def _update(self, request, product_id):
        product = services.update_product(
            product_id,
            services.extract_product_fields(request.data),
            image=image_upload_from_request(request),
            storage=get_image_storage(),
        )
        return Response(ProductReadSerializer(product).data)

    @extend_schema(
        operation_id="UpdateProduct",
        parameters=[PRODUCT_ID_PARAM],
        request={"multipart/form-data": ProductWriteSerializer},
        responses={200: ProductReadSerializer, **ERRORS},
    )
    def put(self, request, product_id):
        return self._update(request, product_id)

    @extend_schema(
        operation_id="PartialUpdateProduct",
        parameters=[PRODUCT_ID_PARAM],
        request={"multipart/form-data": ProductWriteSerializer},
        responses={200: ProductReadSerializer, **ERRORS},
    )
    def patch(self, request, product_id):
        return self._update(request, product_id)

    @extend_schema(operation_id="DeleteProduct", parameters=[PRODUCT_ID_PARAM],
                   responses={200: ProductDeleteResponseSerializer, 404: ErrorResponseSerializer})
    def delete(self, request, product_id):
        product = services.delete_product(product_id)
        return Response({"message": "Product deleted", "product": ProductReadSerializer(product).data})

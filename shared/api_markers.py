# shared/api_markers.py
"""
API 문서화용 마커 시리얼라이저

@extend_schema 의 request/responses 에만 쓰이는 응답 모양 정의.
실제 응답은 뷰에서 dict 로 직접 만든다.
"""
from rest_framework import serializers


class MessageResponseSerializer(serializers.Serializer):
    """{"message": "..."} 형태의 단순 확인 응답"""

    message = serializers.CharField()


class ErrorResponseSerializer(serializers.Serializer):
    """
    실패 응답 (shared.exceptions.api_exception_handler 가 만든다)

    details 는 필드 검증 실패일 때만 포함된다.
    """

    error = serializers.CharField()
    details = serializers.JSONField(required=False)

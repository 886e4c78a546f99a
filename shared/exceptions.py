# shared/exceptions.py
from __future__ import annotations

import logging
from typing import Any

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class DomainError(Exception):
    """
    도메인 규칙 위반의 공통 부모.
    - status_code: HTTP 응답 코드
    - default_message: 메시지를 생략했을 때 사용
    """

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


def _first_message(data: Any) -> str:
    """DRF 에러 payload(dict/list/str)에서 사람이 읽을 첫 메시지를 뽑는다."""
    if isinstance(data, dict):
        for key, value in data.items():
            msg = _first_message(value)
            if key in ("detail", "non_field_errors"):
                return msg
            return f"{key}: {msg}"
        return "Invalid request"
    if isinstance(data, (list, tuple)):
        return _first_message(data[0]) if data else "Invalid request"
    return str(data)


def api_exception_handler(exc, context):
    """
    응답 포맷을 {"error": "..."} 로 통일한다.
    - DomainError: status_code 그대로
    - DRF 예외(ValidationError/NotFound/401/403 …): 기본 핸들러 결과를 감싸서 변환
    - 그 외: None 반환 → Django 500 처리
    """
    if isinstance(exc, DomainError):
        view = context.get("view")
        logger.info(
            "%s rejected: %s (%s)",
            view.__class__.__name__ if view else "request",
            exc.message,
            exc.__class__.__name__,
        )
        return Response({"error": exc.message}, status=exc.status_code)

    response = exception_handler(exc, context)
    if response is None:
        return None

    data = response.data
    body = {"error": _first_message(data)}
    # 필드 단위 검증 에러는 상세 내용도 함께 내려준다
    if isinstance(data, dict) and set(data) - {"detail"}:
        body["details"] = data
    elif isinstance(data, list):
        body["details"] = data
    response.data = body
    return response

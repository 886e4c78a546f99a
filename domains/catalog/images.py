# domains/catalog/images.py
"""
상품 이미지 → 저장된 URL 하나로 정리

- 요청 경계(뷰)에서 ImageUpload 를 한 번만 만든다 (URL 문자열 or 업로드 파일)
- 저장 전략(ImageStorage)은 프로세스 시작 시 설정으로 한 번 고른다
  · Cloudinary 자격 증명 3개가 모두 있으면 원격 업로드
  · 아니면 MEDIA_ROOT(public/uploads)로 임시 파일을 옮기고 /uploads/<이름> 반환
"""
from __future__ import annotations

import enum
import hashlib
import logging
import os
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from django.core.files.storage import FileSystemStorage
from rest_framework import status

from shared.exceptions import DomainError

logger = logging.getLogger(__name__)


class InvalidImage(DomainError):
    """이미지가 아닌 파일이 올라왔을 때"""

    default_message = "Only image files are allowed"


class ImageHostError(DomainError):
    """원격 호스팅 응답에 URL이 없을 때"""

    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "Image host returned no URL"


# ─────────────────────────────────────────────────────────────────────────────
# 입력: 태그드 유니온
# ─────────────────────────────────────────────────────────────────────────────
class ImageSource(str, enum.Enum):
    RESOLVED_URL = "resolved_url"
    LOCAL_TEMP_FILE = "local_temp_file"


@dataclass(frozen=True)
class ImageUpload:
    kind: ImageSource
    value: Any  # RESOLVED_URL → str, LOCAL_TEMP_FILE → UploadedFile

    @classmethod
    def resolved(cls, url: str) -> "ImageUpload":
        return cls(ImageSource.RESOLVED_URL, url)

    @classmethod
    def temp_file(cls, upload) -> "ImageUpload":
        return cls(ImageSource.LOCAL_TEMP_FILE, upload)


def image_upload_from_request(request) -> Optional[ImageUpload]:
    """
    요청에서 이미지 입력을 한 번만 판별한다.
    우선순위: image 필드 파일(단일/다중의 첫 번째) → image 텍스트(URL) → 다른 필드의 첫 파일
    """
    files = getattr(request, "FILES", None) or {}
    if files:
        candidates = files.getlist("image")
        if candidates:
            return ImageUpload.temp_file(candidates[0])

    data = getattr(request, "data", None)
    raw = data.get("image") if hasattr(data, "get") else None
    if isinstance(raw, str) and raw.strip():
        return ImageUpload.resolved(raw.strip())

    for key in files:
        candidates = files.getlist(key)
        if candidates:
            return ImageUpload.temp_file(candidates[0])
    return None


# ─────────────────────────────────────────────────────────────────────────────
# 저장 전략
# ─────────────────────────────────────────────────────────────────────────────
class ImageStorage:
    """저장 전략 최소 공통 인터페이스"""

    name = "base"

    def store(self, upload) -> str:
        raise NotImplementedError


class LocalImageStorage(ImageStorage):
    """
    MEDIA_ROOT 로 임시 파일을 이동시킨다.
    FileSystemStorage 가 TemporaryUploadedFile 을 file_move_safe 로 옮기므로
    디바이스가 달라 rename 이 실패하면 복사 후 삭제로 처리된다.
    """

    name = "local"

    def __init__(self, storage: Optional[FileSystemStorage] = None):
        # location/base_url 을 비워 두면 MEDIA_ROOT/MEDIA_URL 을 따라간다
        self.storage = storage or FileSystemStorage()

    @staticmethod
    def generate_name(upload) -> str:
        ext = os.path.splitext(getattr(upload, "name", "") or "")[1].lower()
        return f"image-{int(time.time() * 1000)}{ext}"

    def store(self, upload) -> str:
        saved = self.storage.save(self.generate_name(upload), upload)
        url = self.storage.url(saved)
        logger.info("Stored product image locally: %s", url)
        return url


class CloudinaryImageStorage(ImageStorage):
    """
    Cloudinary 서명 업로드 (REST API 직접 호출)
    성공하면 임시 업로드 파일을 정리하고 secure_url 을 반환한다.
    """

    name = "cloudinary"
    API_BASE = "https://api.cloudinary.com/v1_1"

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        folder: str = "products",
        timeout: int = 30,
    ):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.folder = folder
        self.timeout = timeout

    @property
    def upload_url(self) -> str:
        return f"{self.API_BASE}/{self.cloud_name}/image/upload"

    def sign(self, params: Dict[str, Any]) -> str:
        # 파라미터를 키 순으로 정렬해 a=b&c=d 로 이은 뒤 api_secret 을 붙여 SHA-1
        to_sign = "&".join(f"{k}={v}" for k, v in sorted(params.items()))
        return hashlib.sha1(f"{to_sign}{self.api_secret}".encode("utf-8")).hexdigest()

    def store(self, upload) -> str:
        params = {"folder": self.folder, "timestamp": int(time.time())}
        body = {**params, "api_key": self.api_key, "signature": self.sign(params)}

        upload.seek(0)
        try:
            res = requests.post(
                self.upload_url,
                data=body,
                files={"file": (upload.name, upload, getattr(upload, "content_type", None))},
                timeout=self.timeout,
            )
            res.raise_for_status()
            payload = res.json()
        except requests.exceptions.RequestException:
            logger.exception("Image host upload failed: %s", upload.name)
            raise

        url = payload.get("secure_url") or payload.get("url")
        if not url:
            logger.error("Image host response without url: %s", payload)
            raise ImageHostError()

        # TemporaryUploadedFile 은 close 시 임시 파일이 삭제된다
        upload.close()
        logger.info("Uploaded product image to %s: %s", self.name, url)
        return url


def build_image_storage(hosting: Optional[Dict[str, Any]]) -> ImageStorage:
    """자격 증명 3개가 모두 있을 때만 원격, 나머지는 로컬."""
    hosting = hosting or {}
    creds = [hosting.get(k) for k in ("cloud_name", "api_key", "api_secret")]
    if all(creds):
        return CloudinaryImageStorage(
            cloud_name=hosting["cloud_name"],
            api_key=hosting["api_key"],
            api_secret=hosting["api_secret"],
            folder=hosting.get("folder") or "products",
            timeout=int(hosting.get("timeout") or 30),
        )
    return LocalImageStorage()


_storage: Optional[ImageStorage] = None


def install_image_storage(storage: ImageStorage) -> None:
    global _storage
    _storage = storage
    logger.info("Product image storage: %s", storage.name)


def get_image_storage() -> ImageStorage:
    global _storage
    if _storage is None:
        _storage = LocalImageStorage()
    return _storage


# ─────────────────────────────────────────────────────────────────────────────
# 해석
# ─────────────────────────────────────────────────────────────────────────────
def ensure_image_file(upload: Optional[ImageUpload]) -> None:
    """업로드 파일이면 content-type 이 image/* 인지 확인 (저장 전에 호출)."""
    if upload is None or upload.kind is not ImageSource.LOCAL_TEMP_FILE:
        return
    content_type = getattr(upload.value, "content_type", "") or ""
    if not content_type.startswith("image/"):
        raise InvalidImage()


def resolve_image(upload: Optional[ImageUpload], storage: ImageStorage) -> Optional[str]:
    """
    ImageUpload → 저장된 URL
    - None: 이미지 없음 (생성은 호출부에서 MissingImage, 수정은 기존 값 유지)
    - RESOLVED_URL: 그대로 사용
    - LOCAL_TEMP_FILE: 저장 전략에 맡긴다
    """
    if upload is None:
        return None
    if upload.kind is ImageSource.RESOLVED_URL:
        return upload.value
    ensure_image_file(upload)
    return storage.store(upload.value)

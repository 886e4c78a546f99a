from django.apps import AppConfig


class CatalogConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "domains.catalog"
    label = "catalog"

    def ready(self):
        # 이미지 저장 전략은 프로세스 시작 시 한 번만 결정한다
        from django.conf import settings

        from . import images

        images.install_image_storage(
            images.build_image_storage(getattr(settings, "IMAGE_HOSTING", None))
        )

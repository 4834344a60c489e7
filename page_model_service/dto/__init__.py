"""Page Model Service DTOs."""

from page_model_service.dto.page_model_v1 import (
    ApiUrlConfigV1,
    ApiUrlsV1,
    PageModel,
    PageModelResponseV1,
)

__all__ = ["ApiUrlConfigV1", "ApiUrlsV1", "PageModel", "PageModelResponseV1"]

"""API schema exports."""

from .documents import NextNumberRequest, RenderRequest, TotalsRequest
from .images import ImageEditRequest, ImageGenerateRequest, ImageResponse
from .pricing import PriceConvertRequest, PriceConvertResponse
from .settings import ColumnMoveRequest, SettingsResponse, SettingsSaveRequest

__all__ = [
    "NextNumberRequest",
    "RenderRequest",
    "TotalsRequest",
    "ImageEditRequest",
    "ImageGenerateRequest",
    "ImageResponse",
    "PriceConvertRequest",
    "PriceConvertResponse",
    "ColumnMoveRequest",
    "SettingsResponse",
    "SettingsSaveRequest",
]

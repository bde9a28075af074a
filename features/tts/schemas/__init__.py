"""Schemas exposed by the TTS feature."""

from .requests import NarrationRequest
from .responses import ErrorResponse, NarrationResponse, VoicesResponse

__all__ = ["ErrorResponse", "NarrationRequest", "NarrationResponse", "VoicesResponse"]

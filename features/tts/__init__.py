"""Package initialisation for the story narration feature."""

from .routes import router
from .service import TTSService

__all__ = ["router", "TTSService"]

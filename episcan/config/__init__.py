"""설정 모듈"""

from .settings import Settings, settings

__all__ = ["Settings", "settings"]

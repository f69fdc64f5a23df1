# Internationalization Module
from .translations import SUPPORTED_LANGUAGES, detect_language, get_text, is_rtl

__all__ = ["SUPPORTED_LANGUAGES", "detect_language", "get_text", "is_rtl"]

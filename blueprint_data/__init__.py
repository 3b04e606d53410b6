from .apihub_core import PROJECT_FILES, PROJECT_SUBTITLE, PROJECT_VERSION, SIDEBAR_NOTES, bundled_forest

__all__ = ["PROJECT_FILES", "PROJECT_SUBTITLE", "PROJECT_VERSION", "SIDEBAR_NOTES", "bundled_forest"]

import os
from enum import Enum
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

DEFAULT_FILE = "protocol.md"


class HighlightMode(str, Enum):
    # the very node object that was selected
    IDENTITY = "identity"
    # (name, content) equality, two identical files light up together
    CONTENT = "content"


class ViewerConfig(BaseModel):
    default_file: str = Field(default=DEFAULT_FILE, min_length=1, description="Name selected on startup")
    highlight: HighlightMode = Field(default=HighlightMode.IDENTITY, description="How the tree matches the selection")
    theme: str = Field(default="monokai", description="TextArea theme of the code view")
    project_name: str = Field(default="apihub-core", description="First breadcrumb segment")
    log_level: str = Field(default="ERROR")
    log_file: Optional[str] = Field(default=None, description="Write logs here instead of the textual console")


def load_config(**overrides) -> ViewerConfig:
    """Read BLUEPRINT_* environment variables (and .env), then apply non-None overrides."""
    values = {
        "default_file": os.getenv("BLUEPRINT_DEFAULT_FILE"),
        "highlight": os.getenv("BLUEPRINT_HIGHLIGHT"),
        "theme": os.getenv("BLUEPRINT_THEME"),
        "project_name": os.getenv("BLUEPRINT_PROJECT_NAME"),
        "log_level": os.getenv("BLUEPRINT_LOG_LEVEL"),
        "log_file": os.getenv("BLUEPRINT_LOG_FILE"),
    }
    values.update(overrides)
    return ViewerConfig(**{key: value for key, value in values.items() if value is not None})

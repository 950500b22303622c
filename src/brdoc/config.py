from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional
import yaml
from pydantic import BaseModel, Field

# ---- Validation behaviour ----
class ValidationConfig(BaseModel):
    strict_format: bool = False  # raw input must use the canonical punctuation, if any


# ---- CLI output ----
class OutputConfig(BaseModel):
    format: Literal["text", "json"] = "text"


# ---- Root config ----
class BrdocConfig(BaseModel):
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

# ---- Loader ----
def load_config(path: Optional[Path]) -> BrdocConfig:
    if not path:
        return BrdocConfig()
    data = yaml.safe_load(Path(path).read_text()) or {}
    return BrdocConfig(**data)

from __future__ import annotations

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel

from .criteria import FilterCriteria
from .models import TransformError

CONFIG_NAMES = ("track-transforms.yaml", "track-transforms.yml")


class CollationSettings(BaseModel):
    use_locale: bool = True


class Settings(BaseModel):
    collation: CollationSettings = CollationSettings()
    filter: FilterCriteria = FilterCriteria()

    @classmethod
    def load(cls, path: Path) -> "Settings":
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
        if raw is None:
            return cls()
        if not isinstance(raw, dict):
            raise TransformError(f"{path}: expected a mapping at the top level")
        return cls.model_validate(raw)


def find_config(explicit_path: Optional[Path]) -> Optional[Path]:
    if explicit_path:
        return explicit_path
    cwd = Path.cwd()
    for name in CONFIG_NAMES:
        candidate = cwd / name
        if candidate.exists():
            return candidate
    return None

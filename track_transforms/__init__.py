"Grouping and filtering transforms over music-track records."

from importlib import metadata

from .filtering import decade_label, filter_and_transform_tracks
from .grouping import group_titles_by_year

__all__ = [
    "__version__",
    "decade_label",
    "filter_and_transform_tracks",
    "group_titles_by_year",
]


def __getattr__(name: str) -> str:
    if name == "__version__":
        try:
            return metadata.version("track-transforms")
        except metadata.PackageNotFoundError:  # pragma: no cover - during editable dev installs
            return "0.0.0"
    raise AttributeError(name)

"""Typed partial-update operations for points of interest."""
from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class ReplaceName:
    """Set the point of interest name."""
    value: Optional[str]


@dataclass(frozen=True)
class ReplaceDescription:
    """Set (or clear, with ``None``) the point of interest description."""
    value: Optional[str]


PatchOperation = Union[ReplaceName, ReplaceDescription]

"""shapex - Event dispatch with automatic state-change notifications."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("shapex")
except PackageNotFoundError:
    __version__ = "0+local"
from shapex.config import ShapeXConfig
from shapex.container import ShapeX, create
from shapex.exceptions import (
    ShapeXConfigError,
    ShapeXError,
    ShapeXResponseError,
    ShapeXStateError,
)
from shapex.models import Dispatch, SubscriptionResponse
from shapex.state.changes import Change, ChangeKind
from shapex.state.diff import diff, diff_changes
from shapex.state.paths import is_state_listener, parse_state_listener, state_listener

__all__ = [
    "__version__",
    "Change",
    "ChangeKind",
    "Dispatch",
    "ShapeX",
    "ShapeXConfig",
    "ShapeXConfigError",
    "ShapeXError",
    "ShapeXResponseError",
    "ShapeXStateError",
    "SubscriptionResponse",
    "create",
    "diff",
    "diff_changes",
    "is_state_listener",
    "parse_state_listener",
    "state_listener",
]

"""Utility functions and helpers."""

from src.utils.dates import (
    days_between,
    format_date,
    parse_date,
    parse_datetime,
    parse_local_date,
)
from src.utils.errors import (
    InvalidPatternError,
    InvalidStageError,
    MissingParamError,
    ProjectNotFoundError,
    ProjectValidationError,
)
from src.utils.events import EventChannel
from src.utils.protocols import (
    HistoryProtocol,
    PageSurfaceProtocol,
    ProjectStoreProtocol,
    RendererProtocol,
    RouteHandlersProtocol,
)
from src.utils.slugs import generate_slug, generate_unique_slug

__all__ = [
    "days_between",
    "format_date",
    "parse_date",
    "parse_datetime",
    "parse_local_date",
    "InvalidPatternError",
    "InvalidStageError",
    "MissingParamError",
    "ProjectNotFoundError",
    "ProjectValidationError",
    "EventChannel",
    "HistoryProtocol",
    "PageSurfaceProtocol",
    "ProjectStoreProtocol",
    "RendererProtocol",
    "RouteHandlersProtocol",
    "generate_slug",
    "generate_unique_slug",
]

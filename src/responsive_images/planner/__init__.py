from responsive_images.planner.middleware import (
    RenderMiddleware,
    RenderStats,
    logging_middleware,
    stats_middleware,
)
from responsive_images.planner.planner import RenditionPlanner, build_instruction

__all__ = [
    "RenditionPlanner",
    "build_instruction",
    "RenderMiddleware",
    "RenderStats",
    "logging_middleware",
    "stats_middleware",
]

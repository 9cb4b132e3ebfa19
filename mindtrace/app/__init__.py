"""
Mindtrace application layer: configuration.
"""

from mindtrace.app.config import (
    LayoutConfig,
    MindtraceConfig,
    TimelineConfig,
    get_config,
    reload_config,
    set_config,
)

__all__ = [
    "LayoutConfig",
    "MindtraceConfig",
    "TimelineConfig",
    "get_config",
    "reload_config",
    "set_config",
]

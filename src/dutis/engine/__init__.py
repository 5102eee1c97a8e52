# topmark:header:start
#
#   project      : Dutis
#   file         : __init__.py
#   file_relpath : src/dutis/engine/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""Resolution, query and assignment engine.

Typical use:

```python
platform = select_platform()
engine = build_engine(platform.native, config)
resolution = engine.resolve_group(["mp4", "mov"])
if resolution.common_handlers:
    engine.assign_group(resolution.mapping, resolution.common_handlers[0])
```
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from dutis.engine.group import AssignmentReport, GroupResolution, GroupResolver, GroupStatus
from dutis.engine.handlers import ConvergencePolicy, HandlerRegistry, Sleeper
from dutis.engine.resolver import TypeIdentifierResolver

if TYPE_CHECKING:
    from dutis.config.model import Config
    from dutis.platform.base import LaunchServicesLike

__all__ = [
    "AssignmentReport",
    "ConvergencePolicy",
    "GroupResolution",
    "GroupResolver",
    "GroupStatus",
    "HandlerRegistry",
    "Sleeper",
    "TypeIdentifierResolver",
    "build_engine",
]


def build_engine(
    native: LaunchServicesLike, config: Config, sleep: Sleeper | None = None
) -> GroupResolver:
    """Wire a `GroupResolver` over ``native`` using the policy and role from ``config``."""
    registry = HandlerRegistry(
        native,
        ConvergencePolicy.from_config(config),
        role=config.role,
        sleep=sleep,
    )
    return GroupResolver(TypeIdentifierResolver(native), registry)

"""
package: mstair.vardump.xdump
"""

# <AUTOGEN_INIT>
from mstair.vardump.xdump import (
    cycle_guard,
    dump_api,
    introspector,
    model,
    options,
    renderer,
    session,
    visibility,
)


__all__ = [
    "cycle_guard",
    "dump_api",
    "introspector",
    "model",
    "options",
    "renderer",
    "session",
    "visibility",
]
# </AUTOGEN_INIT>

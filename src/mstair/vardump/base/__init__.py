"""
package: mstair.vardump.base
"""

# <AUTOGEN_INIT>
from mstair.vardump.base import (
    caller_location,
    config,
)


__all__ = [
    "caller_location",
    "config",
]
# </AUTOGEN_INIT>

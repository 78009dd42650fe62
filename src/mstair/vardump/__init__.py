"""
package: mstair.vardump
"""

# <AUTOGEN_INIT>
from mstair.vardump import (
    base,
    io,
    xdump,
    xlogging,
)


__all__ = [
    "base",
    "io",
    "xdump",
    "xlogging",
]
# </AUTOGEN_INIT>

__version__ = "0.1.0"

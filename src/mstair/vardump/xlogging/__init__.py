"""
package: mstair.vardump.xlogging
"""

# <AUTOGEN_INIT>
from mstair.vardump.xlogging import (
    logger_constants,
    logger_factory,
    logger_levels,
)


__all__ = [
    "logger_constants",
    "logger_factory",
    "logger_levels",
]
# </AUTOGEN_INIT>

"""
package: mstair.vardump.io
"""

# <AUTOGEN_INIT>
from mstair.vardump.io import output_buffers


__all__ = ["output_buffers"]
# </AUTOGEN_INIT>

"""
Program Discovery

Catalog filtering, fee and scholarship pricing, and the interactive
discovery session that ties them together.
"""

__version__ = "1.0.0"

"""
Teaching tools for density transformations and normalizing flows.
"""

__version__ = "0.1.0"

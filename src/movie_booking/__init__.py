"""Movie ticket booking REST backend"""

__version__ = "1.0.0"

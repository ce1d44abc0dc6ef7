"""
Staybook - short-term rental marketplace backend.
"""

__version__ = "0.1.0"

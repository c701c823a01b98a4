"""
Flowbuilder: branching workflow editor core.
"""

__version__ = "0.1.0"

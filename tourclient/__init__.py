"""
Resilient async client for the Korea Tourism Organization public API.
"""

__version__ = "0.1.0"

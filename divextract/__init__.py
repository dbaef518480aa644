"""
divextract: fetch a document and cut out one div by its class tokens
"""

__version__ = "1.0.0"

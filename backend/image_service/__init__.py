"""
Product image service: stores uploads in a GitHub repository and
serves them through jsDelivr.
"""

__version__ = "0.1.0"

"""
slotengine - Compute bookable appointment slots for service providers.
"""

__version__ = "0.1.0"

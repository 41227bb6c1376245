"""
YGO Prices — price Yu-Gi-Oh! card lists from CSV or .ydk deck lists.
"""

__version__ = "0.1.0"

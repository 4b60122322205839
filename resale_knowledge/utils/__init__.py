"""
Utility helpers for resale_knowledge.
"""

from .confidence import clamp_confidence, safe_stringify

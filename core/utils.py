# core/utils.py

"""
Repository for program-wide utilities.
"""

import uuid


def generate_uuid() -> str:
    return str(uuid.uuid4())


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))

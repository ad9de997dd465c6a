from datetime import datetime
from typing import Callable

def get_clock() -> Callable[[], datetime]:
    """Source of the current time for booking rules; overridden in tests"""
    return datetime.now

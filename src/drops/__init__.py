from .config import DEFAULT_SYMBOLS, DropConfig, DropConfigurationError
from .field import DropField, RandomSource
from .service import DropAnimator, DropSnapshot

__all__ = [
    "DEFAULT_SYMBOLS",
    "DropAnimator",
    "DropConfig",
    "DropConfigurationError",
    "DropField",
    "DropSnapshot",
    "RandomSource",
]

from src.shared.utils.datetime import add_months, ensure_utc, utc_now
from src.shared.utils.generators import generate_cuid

__all__ = [
    "generate_cuid",
    "utc_now",
    "ensure_utc",
    "add_months",
]

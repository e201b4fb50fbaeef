import secrets
import time


def generate_sku(category: str, now_ms: int = None) -> str:
    """Build ``<CAT>-<last 6 digits of epoch ms>-<3 random digits>``.

    e.g. ``ELE-482913-007``. Uniqueness is not guaranteed here; callers that
    care check the store before using the value.
    """
    prefix = (category or "").strip()[:3].upper()
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    timestamp = str(now_ms)[-6:].zfill(6)
    random_part = f"{secrets.randbelow(1000):03d}"

    return f"{prefix}-{timestamp}-{random_part}"

from typing import Optional


def should_dispatch(current: str, recorded: Optional[str]) -> bool:
    """Return True when ``current`` has not been dispatched yet.

    A run is dispatched once per distinct status: when nothing has been
    recorded, or when the recorded status differs from the current one.
    """
    if not recorded:
        return True
    return recorded != current

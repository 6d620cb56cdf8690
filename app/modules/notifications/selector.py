from typing import Iterable, List

from modules.notifications.models import NotificationBinding


def select_bindings(bindings: Iterable[NotificationBinding]) -> List[NotificationBinding]:
    """Keep bindings that are ready and not suspended, preserving order.

    Declared run filters are not evaluated.
    """
    return [binding for binding in bindings if binding.ready and not binding.suspend]

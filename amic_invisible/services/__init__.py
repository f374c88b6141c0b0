from amic_invisible.services.assignment import AssignmentError, build_circle, shuffle
from amic_invisible.services.lookup import LinkResolutionError
from amic_invisible.services.notifier import NotificationDeliveryError

__all__ = [
    "AssignmentError",
    "LinkResolutionError",
    "NotificationDeliveryError",
    "build_circle",
    "shuffle",
]

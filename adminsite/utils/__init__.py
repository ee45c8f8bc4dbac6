from .formatting import format_currency, format_date, time_ago
from .validators import is_valid_email, is_valid_phone, is_admin_role, has_permission, is_feature_enabled
from .notifications import Notification, show_notification, notify_error, confirm
from .timing import debounce, throttle

__all__ = [
    "format_currency",
    "format_date",
    "time_ago",
    "is_valid_email",
    "is_valid_phone",
    "is_admin_role",
    "has_permission",
    "is_feature_enabled",
    "Notification",
    "show_notification",
    "notify_error",
    "confirm",
    "debounce",
    "throttle",
]

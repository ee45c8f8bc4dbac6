"""User-facing notifications and confirmations for the admin tools."""

from dataclasses import dataclass
from typing import Callable, Dict

from adminsite.logger import logger, NotificationEvent

NOTIFICATION_STYLES: Dict[str, str] = {
    'success': 'bg-green-500',
    'error': 'bg-red-500',
    'warning': 'bg-yellow-500',
    'info': 'bg-blue-500',
}

NOTIFICATION_ICONS: Dict[str, str] = {
    'success': 'check-circle',
    'error': 'exclamation-circle',
    'warning': 'exclamation-triangle',
    'info': 'info-circle',
}

NOTIFICATION_DURATION_SECONDS = 5


@dataclass
class Notification:
    message: str
    type: str
    css_class: str
    icon: str
    duration: float = NOTIFICATION_DURATION_SECONDS


def show_notification(message: str, type: str = 'info') -> Notification:
    """Build a notification and record it. Unknown types are shown as info."""
    if type not in NOTIFICATION_STYLES:
        type = 'info'
    notification = Notification(
        message=message,
        type=type,
        css_class=NOTIFICATION_STYLES[type],
        icon=NOTIFICATION_ICONS[type],
    )
    logger.log(NotificationEvent(type=type, message=message), domain="ui")
    return notification


def notify_error(exc: BaseException) -> Notification:
    return show_notification(str(exc) or type(exc).__name__, type='error')


def confirm(message: str, prompt: Callable[[str], str] = input) -> bool:
    """Ask the user to confirm an action. Only an explicit yes confirms."""
    answer = prompt(f"{message} [y/N] ")
    return answer.strip().lower() in ('y', 'yes')

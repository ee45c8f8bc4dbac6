import re
from config import AppConfig

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
# Kenyan mobile numbers: +2547XXXXXXXX / 07XXXXXXXX (and the 1 prefix range)
PHONE_PATTERN = re.compile(r'^(\+254|0)[17]\d{8}$')


def is_valid_email(email: str) -> bool:
    return bool(email) and EMAIL_PATTERN.match(email) is not None


def is_valid_phone(phone: str) -> bool:
    return bool(phone) and PHONE_PATTERN.match(phone) is not None


def is_admin_role(role: str) -> bool:
    return role in AppConfig.ADMIN_ROLES


def has_permission(role: str, permission: str) -> bool:
    return permission in AppConfig.ROLE_PERMISSIONS.get(role, set())


def is_feature_enabled(name: str) -> bool:
    return bool(AppConfig.FEATURES.get(name, False))

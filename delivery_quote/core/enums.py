from enum import Enum


class UserRole(str, Enum):
    ADMIN = "admin"

    def __str__(self):
        return self.value


class PricingTier(str, Enum):
    BASE = "base"
    MID = "mid"
    FAR = "far"

    def __str__(self):
        return self.value


class AuditAction(str, Enum):
    LOGIN = "login"
    REPLACE_TARIFF = "replace_tariff"
    UPDATE_TARIFF = "update_tariff"

    def __str__(self):
        return self.value

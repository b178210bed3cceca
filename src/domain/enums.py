"""Domain enumerations for the tenant core."""

from enum import Enum


class _ValuesMixin:
    @classmethod
    def values(cls) -> list[str]:
        """Get all valid values"""
        return [member.value for member in cls]  # type: ignore[attr-defined]


class TenantStatus(_ValuesMixin, str, Enum):
    """Tenant status enumeration"""

    TRIAL = "TRIAL"
    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"
    CANCELLED = "CANCELLED"
    EXPIRED = "EXPIRED"

    @property
    def is_terminal(self) -> bool:
        return self in (TenantStatus.CANCELLED, TenantStatus.EXPIRED)


class CampaignStatus(_ValuesMixin, str, Enum):
    """Campaign lifecycle states"""

    DRAFT = "DRAFT"
    SCHEDULED = "SCHEDULED"
    SENDING = "SENDING"
    PAUSED = "PAUSED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class CampaignType(_ValuesMixin, str, Enum):
    PROMOTIONAL = "PROMOTIONAL"
    REMINDER = "REMINDER"
    FOLLOW_UP = "FOLLOW_UP"
    BIRTHDAY = "BIRTHDAY"
    WELCOME = "WELCOME"
    RETENTION = "RETENTION"


class MessageChannel(_ValuesMixin, str, Enum):
    EMAIL = "EMAIL"
    SMS = "SMS"
    WHATSAPP = "WHATSAPP"
    PUSH = "PUSH"


class SegmentLogic(_ValuesMixin, str, Enum):
    AND = "AND"
    OR = "OR"


class SegmentOperator(_ValuesMixin, str, Enum):
    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    IN = "in"
    NOT_IN = "not_in"


class ReportType(_ValuesMixin, str, Enum):
    SALES = "SALES"
    APPOINTMENTS = "APPOINTMENTS"
    CLIENTS = "CLIENTS"
    MARKETING = "MARKETING"
    INVENTORY = "INVENTORY"
    FINANCES = "FINANCES"
    FINANCIAL = "FINANCIAL"
    STAFF_PERFORMANCE = "STAFF_PERFORMANCE"
    CUSTOM = "CUSTOM"


class ReportStatus(_ValuesMixin, str, Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class ReportFormat(_ValuesMixin, str, Enum):
    PDF = "PDF"
    EXCEL = "EXCEL"
    CSV = "CSV"
    JSON = "JSON"


class ReportFrequency(_ValuesMixin, str, Enum):
    ONCE = "ONCE"
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"
    YEARLY = "YEARLY"


class WidgetType(_ValuesMixin, str, Enum):
    CHART = "CHART"
    TABLE = "TABLE"
    METRIC = "METRIC"
    GAUGE = "GAUGE"


class ChartType(_ValuesMixin, str, Enum):
    LINE = "LINE"
    BAR = "BAR"
    PIE = "PIE"
    DOUGHNUT = "DOUGHNUT"
    AREA = "AREA"


class WidgetSize(_ValuesMixin, str, Enum):
    SMALL = "SMALL"
    MEDIUM = "MEDIUM"
    LARGE = "LARGE"

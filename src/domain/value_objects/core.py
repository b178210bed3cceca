import re
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, ClassVar

from src.domain.enums import ReportFrequency, SegmentLogic, SegmentOperator
from src.domain.exceptions import ValidationException
from src.shared.utils.datetime import ensure_utc


@dataclass(frozen=True)
class TenantSlug:
    """
    Value object for tenant slugs (used in headers, subdomains and paths)

    Slugs must be:
    - 3-63 characters (fits a DNS label)
    - lowercase
    - alphanumeric with single hyphens between groups
    """

    value: str

    PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value:
            raise ValidationException("Tenant slug must be a non-empty string", "slug")

        if len(self.value) < 3 or len(self.value) > 63:
            raise ValidationException("Tenant slug must be 3-63 characters", "slug")

        if not self.PATTERN.match(self.value):
            raise ValidationException(
                "Tenant slug must be lowercase alphanumeric with optional hyphens "
                "(e.g., 'acme', 'acme-spa', 'studio42')",
                "slug",
            )

    @classmethod
    def is_valid(cls, value: str) -> bool:
        try:
            cls(value)
        except ValidationException:
            return False
        return True

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SegmentCondition:
    """One filter condition of a client segment (field <operator> value)"""

    field: str
    operator: SegmentOperator
    value: Any

    def __post_init__(self):
        if not isinstance(self.field, str) or not self.field.strip():
            raise ValidationException("Segment condition field is required", "target_segment")
        try:
            object.__setattr__(self, "operator", SegmentOperator(self.operator))
        except ValueError as exc:
            raise ValidationException(
                f"Unsupported segment operator: {self.operator}", "target_segment"
            ) from exc

    def to_dict(self) -> dict[str, Any]:
        return {"field": self.field, "operator": self.operator.value, "value": self.value}


@dataclass(frozen=True)
class Segment:
    """Target segment: a non-empty set of conditions combined with AND/OR"""

    conditions: tuple[SegmentCondition, ...]
    logic: SegmentLogic = SegmentLogic.AND

    def __post_init__(self):
        object.__setattr__(self, "conditions", tuple(self.conditions))
        if not self.conditions:
            raise ValidationException(
                "Target segment must have at least one condition", "target_segment"
            )
        try:
            object.__setattr__(self, "logic", SegmentLogic(self.logic))
        except ValueError as exc:
            raise ValidationException(
                f"Unsupported segment logic: {self.logic}", "target_segment"
            ) from exc

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Segment":
        conditions = tuple(
            SegmentCondition(c.get("field", ""), c.get("operator", ""), c.get("value"))
            for c in data.get("conditions") or []
        )
        return cls(conditions=conditions, logic=data.get("logic", SegmentLogic.AND))

    def to_dict(self) -> dict[str, Any]:
        return {
            "conditions": [c.to_dict() for c in self.conditions],
            "logic": self.logic.value,
        }


@dataclass(frozen=True)
class CampaignMetrics:
    """Delivery counters of a campaign; counters never go below zero"""

    FIELDS: ClassVar[tuple[str, ...]] = (
        "total_sent",
        "delivered",
        "opened",
        "clicked",
        "converted",
    )

    total_sent: int = 0
    delivered: int = 0
    opened: int = 0
    clicked: int = 0
    converted: int = 0

    def __post_init__(self):
        for name in self.FIELDS:
            value = getattr(self, name)
            if not isinstance(value, int) or value < 0:
                raise ValidationException(f"Metric '{name}' must be a non-negative integer", name)

    def with_values(self, **counters: int) -> "CampaignMetrics":
        unknown = set(counters) - set(self.FIELDS)
        if unknown:
            raise ValidationException(f"Unknown metric(s): {', '.join(sorted(unknown))}", "metrics")
        return replace(self, **counters)

    def decreased_fields(self, other: "CampaignMetrics") -> list[str]:
        """Counters that would go down when moving from self to other"""
        return [name for name in self.FIELDS if getattr(other, name) < getattr(self, name)]

    def to_dict(self) -> dict[str, int]:
        return {name: getattr(self, name) for name in self.FIELDS}


@dataclass(frozen=True)
class DateRange:
    """Half-open reporting window; start must be strictly before end"""

    start: datetime
    end: datetime

    def __post_init__(self):
        if self.start is None or self.end is None:
            raise ValidationException("Date range requires both start and end", "date_range")
        object.__setattr__(self, "start", ensure_utc(self.start))
        object.__setattr__(self, "end", ensure_utc(self.end))
        if self.start >= self.end:
            raise ValidationException("Date range start must be before end", "date_range")

    def contains(self, moment: datetime) -> bool:
        return self.start <= ensure_utc(moment) < self.end


@dataclass(frozen=True)
class ReportFilters:
    """Report filters: optional date range plus entity-id filters"""

    date_range: DateRange | None = None
    staff_ids: tuple[str, ...] = ()
    service_ids: tuple[str, ...] = ()
    client_ids: tuple[str, ...] = ()
    product_ids: tuple[str, ...] = ()
    departments: tuple[str, ...] = ()
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        for name in ("staff_ids", "service_ids", "client_ids", "product_ids", "departments"):
            object.__setattr__(self, name, tuple(getattr(self, name) or ()))

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "ReportFilters":
        data = dict(data or {})
        date_range = data.pop("date_range", None)
        if isinstance(date_range, dict):
            date_range = DateRange(
                start=_parse_datetime(date_range.get("start")),
                end=_parse_datetime(date_range.get("end")),
            )
        known = {
            name: data.pop(name)
            for name in ("staff_ids", "service_ids", "client_ids", "product_ids", "departments")
            if name in data
        }
        extra = dict(data.pop("extra", None) or {})
        extra.update(data)
        return cls(date_range=date_range, extra=extra, **known)

    def to_dict(self) -> dict[str, Any]:
        return {
            "date_range": (
                {"start": self.date_range.start.isoformat(), "end": self.date_range.end.isoformat()}
                if self.date_range
                else None
            ),
            "staff_ids": list(self.staff_ids),
            "service_ids": list(self.service_ids),
            "client_ids": list(self.client_ids),
            "product_ids": list(self.product_ids),
            "departments": list(self.departments),
            "extra": dict(self.extra),
        }


@dataclass(frozen=True)
class ReportSchedule:
    """Recurring generation schedule of a report"""

    frequency: ReportFrequency
    next_run_at: datetime | None = None
    last_run_at: datetime | None = None
    is_active: bool = True

    def __post_init__(self):
        try:
            object.__setattr__(self, "frequency", ReportFrequency(self.frequency))
        except ValueError as exc:
            raise ValidationException(
                f"Unsupported report frequency: {self.frequency}", "schedule"
            ) from exc
        if self.next_run_at is not None:
            object.__setattr__(self, "next_run_at", ensure_utc(self.next_run_at))
        if self.last_run_at is not None:
            object.__setattr__(self, "last_run_at", ensure_utc(self.last_run_at))

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "ReportSchedule | None":
        if not data:
            return None
        return cls(
            frequency=data.get("frequency"),
            next_run_at=_parse_datetime(data.get("next_run_at")),
            last_run_at=_parse_datetime(data.get("last_run_at")),
            is_active=bool(data.get("is_active", True)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "frequency": self.frequency.value,
            "next_run_at": self.next_run_at.isoformat() if self.next_run_at else None,
            "last_run_at": self.last_run_at.isoformat() if self.last_run_at else None,
            "is_active": self.is_active,
        }


@dataclass(frozen=True)
class WidgetPosition:
    """Grid rectangle of a dashboard widget"""

    x: int
    y: int
    width: int
    height: int

    def __post_init__(self):
        if self.x < 0 or self.y < 0:
            raise ValidationException("Widget position must not be negative", "position")
        if self.width <= 0 or self.height <= 0:
            raise ValidationException("Widget width and height must be positive", "position")

    def overlaps(self, other: "WidgetPosition") -> bool:
        """Half-open rectangles: shared edges do not count as overlap"""
        return (
            self.x < other.x + other.width
            and other.x < self.x + self.width
            and self.y < other.y + other.height
            and other.y < self.y + self.height
        )

    def to_dict(self) -> dict[str, int]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


def _parse_datetime(value: Any) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)

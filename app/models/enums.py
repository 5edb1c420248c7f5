"""Canonical enum values for the portal schema."""

from __future__ import annotations

import enum


class UserRole(str, enum.Enum):
    ADMIN = "ADMIN"
    CUSTOMER = "CUSTOMER"


class LeadStatus(str, enum.Enum):
    NEW = "NEW"
    CONTACTED = "CONTACTED"
    MEETING_SCHEDULED = "MEETING_SCHEDULED"
    MEETING_COMPLETED = "MEETING_COMPLETED"
    CONVERTED = "CONVERTED"
    CLOSED = "CLOSED"


class ProjectType(str, enum.Enum):
    AI_AUTOMATION = "AI_AUTOMATION"
    BRAND_IDENTITY = "BRAND_IDENTITY"
    WEB_MOBILE = "WEB_MOBILE"
    FULL_PRODUCT = "FULL_PRODUCT"


class Budget(str, enum.Enum):
    RANGE_5K_10K = "RANGE_5K_10K"
    RANGE_10K_25K = "RANGE_10K_25K"
    RANGE_25K_50K = "RANGE_25K_50K"
    RANGE_50K_PLUS = "RANGE_50K_PLUS"


class ProjectStatus(str, enum.Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    ON_HOLD = "ON_HOLD"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class ContractStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    SENT = "SENT"
    VIEWED = "VIEWED"
    SIGNED = "SIGNED"
    EXPIRED = "EXPIRED"

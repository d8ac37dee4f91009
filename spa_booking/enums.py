"""Closed value sets shared by models, schemas and guards"""

import enum


class RoleEnum(str, enum.Enum):
    CUSTOMER = "Customer"
    STAFF = "Staff"
    ADMIN = "Admin"
    THERAPIST = "Therapist"


class AppointmentStatusEnum(str, enum.Enum):
    SCHEDULED = "Scheduled"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class TransactionStatusEnum(str, enum.Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class BlogStatusEnum(str, enum.Enum):
    DRAFT = "draft"
    PUBLISHED = "published"

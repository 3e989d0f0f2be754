"""Domain enumerations and state-transition rules."""

import enum


class UserRole(str, enum.Enum):
    DRIVER = "driver"
    ADMIN = "admin"


class ClientStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class TripStatus(str, enum.Enum):
    DRAFT = "draft"
    SUBMITTED = "submitted"
    APPROVED = "approved"
    REJECTED = "rejected"


class ReviewAction(str, enum.Enum):
    APPROVE = "approve"
    REJECT = "reject"


# Statuses a driver may create a trip in, and the only ones they may edit
DRIVER_EDITABLE: frozenset[TripStatus] = frozenset(
    {TripStatus.DRAFT, TripStatus.SUBMITTED}
)

# State machine for the owning driver: current status -> valid next statuses.
# Approved / rejected are terminal for drivers.
DRIVER_TRANSITIONS: dict[TripStatus, set[TripStatus]] = {
    TripStatus.DRAFT: {TripStatus.DRAFT, TripStatus.SUBMITTED},
    TripStatus.SUBMITTED: {TripStatus.DRAFT, TripStatus.SUBMITTED},
    TripStatus.APPROVED: set(),
    TripStatus.REJECTED: set(),
}

# Admin review: only submitted trips can be reviewed
REVIEW_TRANSITIONS: dict[TripStatus, set[TripStatus]] = {
    TripStatus.DRAFT: set(),
    TripStatus.SUBMITTED: {TripStatus.APPROVED, TripStatus.REJECTED},
    TripStatus.APPROVED: set(),
    TripStatus.REJECTED: set(),
}

REVIEW_OUTCOME: dict[ReviewAction, TripStatus] = {
    ReviewAction.APPROVE: TripStatus.APPROVED,
    ReviewAction.REJECT: TripStatus.REJECTED,
}

from ...domain import time_str_to_minutes
from .config import BookingConfig, get_booking_config


class ApprovalPolicy:
    """
    Morning reservations need manual approval when enabled.

    A single comparison against the cutoff; independent of the rule
    windows so operators can gate otherwise open slots.
    """

    def __init__(self, config: BookingConfig | None = None):
        self.config = config or get_booking_config()

    def requires_approval(self, time_of_day: str) -> bool:
        if not self.config.approval_enabled:
            return False
        return time_str_to_minutes(time_of_day) < self.config.approval_cutoff_minutes

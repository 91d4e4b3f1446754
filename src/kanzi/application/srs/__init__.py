# Application SRS Package
from .scheduler import SrsScheduler, percentage, utc_now

__all__ = ["SrsScheduler", "percentage", "utc_now"]

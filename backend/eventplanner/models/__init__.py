from eventplanner.models.event import Event
from eventplanner.models.guest import Guest
from eventplanner.models.vendor import Vendor

__all__ = ["Event", "Guest", "Vendor"]

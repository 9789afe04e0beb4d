from prometheus_client import Counter

# Catalog
TRAIN_SEARCHES = Counter("railbook_train_searches_total", "Train catalog searches served")

# Bookings
BOOKINGS_CREATED = Counter("railbook_bookings_created_total", "Bookings persisted")
BOOKINGS_CANCELLED = Counter("railbook_bookings_cancelled_total", "Bookings deleted by their owner")
BOOKING_FAILURES = Counter("railbook_booking_failures_total", "Rejected booking attempts", ["reason"])

# Sessions
SESSION_EVENTS = Counter("railbook_session_events_total", "Session lifecycle events", ["event"])

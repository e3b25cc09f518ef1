"""
Cache key families and TTLs.

Every cached value lives under ``{family}:{identifier}``. Families double as
invalidation tags: a value stored through ``CacheManager.get_or_set`` is
tagged with its family so that ``invalidate_pattern(family)`` drops the whole
group at once.
"""


class CacheKeys:
    """Key family prefixes."""

    USERS = "user"
    JOBSEEKERS = "jobseeker"
    EMPLOYERS = "employer"
    EVENTS = "event"
    BOOTHS = "booth"
    ATTENDANCE = "attendance"
    DASHBOARD_STATS = "dashboard_stats"
    SECURITY = "security"
    INTERVIEWS = "interview"
    ANALYTICS = "analytics"
    SESSION = "session"
    REALTIME = "realtime"
    QUEUE = "queue"

    @classmethod
    def all(cls) -> list[str]:
        return [value for name, value in vars(cls).items() if name.isupper()]


class CacheTTL:
    """Time-to-live presets in seconds."""

    IMMEDIATE = 60
    SHORT = 300
    MEDIUM = 1800
    LONG = 3600
    VERY_LONG = 86400
    DASHBOARD = 300
    USER_SESSION = 1800
    ANALYTICS = 3600

from enum import Enum
from .relative_time import parse_relative_time, utcnow


class SortKey(str, Enum):
    FEATURED = "featured"    # 注目順
    NEWEST = "newest"        # 新着順
    UPDATED = "updated"      # 更新順
    LAST_LOGIN = "lastLogin"  # 最終ログイン日順

    @classmethod
    def parse(cls, value, default=None):
        if isinstance(value, cls):
            return value
        if value in ("last_login", "lastLogin"):
            return cls.LAST_LOGIN
        try:
            return cls(value)
        except ValueError:
            if default is not None:
                return default
            raise


def _by_id_desc(candidates):
    return sorted(candidates, key=lambda c: c.id, reverse=True)


def sort_candidates(candidates, key, now=None):
    """Return a new list ordered by ``key``.

    Every ordering is built from stable passes, secondary key first, so
    candidates that tie on both keys keep their input order.
    """
    key = SortKey.parse(key)
    now = now or utcnow()
    ordered = _by_id_desc(candidates)

    if key is SortKey.NEWEST:
        return ordered
    if key is SortKey.FEATURED:
        return sorted(ordered, key=lambda c: not c.is_attention)
    if key is SortKey.UPDATED:
        def updated(c):
            return c.updated_at or parse_relative_time(c.last_login, now)
        return sorted(ordered, key=updated, reverse=True)
    # LAST_LOGIN
    return sorted(ordered, key=lambda c: parse_relative_time(c.last_login, now), reverse=True)

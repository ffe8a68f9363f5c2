from dataclasses import dataclass

_TRUE = ("1", "true", "on", "yes")


@dataclass(frozen=True)
class FilterToggles:
    """Result-list checkboxes. A disabled toggle imposes no constraint."""
    pickup: bool = False
    hide_hidden: bool = False
    new_user: bool = False
    last_login: bool = False
    working: bool = False

    @classmethod
    def from_args(cls, args):
        def flag(*names):
            for n in names:
                v = args.get(n)
                if v is not None:
                    return str(v).lower() in _TRUE
            return False

        return cls(
            pickup=flag("pickup"),
            hide_hidden=flag("hide_hidden", "hideHidden"),
            new_user=flag("new_user", "newUser"),
            last_login=flag("last_login", "lastLogin"),
            working=flag("working"),
        )


def is_pickup(candidate) -> bool:
    return bool(candidate.is_pickup)


def is_visible(candidate, hidden_set) -> bool:
    return candidate.id not in hidden_set


def is_new_user(candidate) -> bool:
    label = candidate.last_login or ""
    return "日前" in label or "時間前" in label


def is_recent_login(candidate) -> bool:
    label = candidate.last_login or ""
    return "時間前" in label or label == "1日前"


def is_working(candidate) -> bool:
    # career_history is newest first
    if not candidate.career_history:
        return False
    return "〜現在" in (candidate.career_history[0].period or "")


def filter_candidates(candidates, toggles, hidden_set=frozenset()):
    hidden_set = set(hidden_set or ())
    out = []
    for c in candidates:
        if toggles.pickup and not is_pickup(c):
            continue
        if toggles.hide_hidden and not is_visible(c, hidden_set):
            continue
        if toggles.new_user and not is_new_user(c):
            continue
        if toggles.last_login and not is_recent_login(c):
            continue
        if toggles.working and not is_working(c):
            continue
        out.append(c)
    return out

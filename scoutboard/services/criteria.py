"""Search criteria store.

One ``SearchCriteria`` lives per company-user session. Every surface that
shows search state (the form, the result list, the saved-search modal) reads
the same instance and may ``subscribe`` to be told which fields changed.

Min/max pairs follow an asymmetric write policy:

* ``set_min`` above the current max keeps the new min and **clears the max**;
* ``set_max`` below the current min is **rejected** and nothing changes.

The same rule is applied to current salary, desired salary and age.
"""
import re
import unicodedata
from dataclasses import dataclass, replace

# 検索条件 (フォーム入力値はすべて文字列で保持する)
SCALAR_FIELDS = (
    "search_group",
    "keyword",
    "current_salary_min",
    "current_salary_max",
    "current_company",
    "education",
    "english_level",
    "other_language",
    "other_language_level",
    "qualifications",
    "age_min",
    "age_max",
    "desired_salary_min",
    "desired_salary_max",
    "transfer_time",
    "selection_status",
    "similar_company_industry",
    "similar_company_location",
    "last_login_min",
)
BOOL_FIELDS = ("job_type_and_search", "industry_and_search")

# list field -> id prefix
LIST_FIELDS = {
    "experience_job_types": "job",
    "experience_industries": "industry",
    "desired_job_types": "desired-job",
    "desired_industries": "desired-industry",
    "desired_locations": "location",
    "work_styles": "work-style",
}
YEARS_FIELDS = ("experience_job_types", "experience_industries", "desired_job_types", "desired_industries")

RANGE_PAIRS = {
    "current_salary": ("current_salary_min", "current_salary_max"),
    "desired_salary": ("desired_salary_min", "desired_salary_max"),
    "age": ("age_min", "age_max"),
}
_MIN_TO_PAIR = {lo: name for name, (lo, hi) in RANGE_PAIRS.items()}
_MAX_TO_PAIR = {hi: name for name, (lo, hi) in RANGE_PAIRS.items()}

# UI state, reset together with the criteria but never saved with a search
FLAG_DEFAULTS = {
    "search_group_touched": False,
    "search_group_error": "",
    "is_loading": False,
    "error": None,
    "save_search_name": "",
    "save_error": "",
    "is_save_loading": False,
}

_FLAG_BOOLS = ("search_group_touched", "is_loading", "is_save_loading")
# flags carried across requests in the session (the group selector's inline error)
SESSION_FLAGS = ("search_group_touched", "search_group_error")

CRITERIA_FIELDS = SCALAR_FIELDS + BOOL_FIELDS + tuple(LIST_FIELDS)
SEARCH_GROUP_REQUIRED = "グループを選択してください"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_SPACES = re.compile(r"\s+")
_TRUTHY = ("1", "true", "on")


def _to_int(value):
    """parseInt-style: leading digits of the string, or None."""
    if value is None or value == "":
        return None
    m = _LEADING_INT.match(str(value))
    return int(m.group(1)) if m else None


def _to_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return bool(value)


def _to_text(name, value) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple, dict, set)):
        raise ValueError(f"{name} takes a single value")
    return str(value)


def item_id(list_field, name) -> str:
    normalized = unicodedata.normalize("NFKC", name or "").strip()
    normalized = _SPACES.sub("-", normalized).lower()
    return f"{LIST_FIELDS[list_field]}:{normalized}"


@dataclass(frozen=True)
class CriteriaItem:
    id: str
    name: str
    experience_years: str = None

    def to_dict(self):
        return {"id": self.id, "name": self.name, "experience_years": self.experience_years}


def _initial_state():
    state = {f: "" for f in SCALAR_FIELDS}
    state.update({f: False for f in BOOL_FIELDS})
    state.update({f: [] for f in LIST_FIELDS})
    state.update(FLAG_DEFAULTS)
    return state


class SearchCriteria:

    def __init__(self, **values):
        self._state = _initial_state()
        self._listeners = []
        if values:
            self.assign(values, replace_all=False)

    # -- read access -------------------------------------------------------

    def __getattr__(self, name):
        state = self.__dict__.get("_state")
        if state is not None and name in state:
            value = state[name]
            return list(value) if isinstance(value, list) else value
        raise AttributeError(name)

    def __eq__(self, other):
        if not isinstance(other, SearchCriteria):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        filled = {k: v for k, v in self.to_dict().items() if v not in ("", False, [])}
        return f"<SearchCriteria {filled}>"

    # -- change notification ----------------------------------------------

    def subscribe(self, listener):
        """Register ``listener(changed_fields)``; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def _commit(self, changes):
        changed = tuple(k for k, v in changes.items() if self._state[k] != v)
        if not changed:
            return changed
        for k in changed:
            self._state[k] = changes[k]
        for listener in list(self._listeners):
            listener(changed)
        return changed

    # -- setters -----------------------------------------------------------

    def set(self, name, value):
        """Per-field setter. Returns False when the write was rejected."""
        if name in _MIN_TO_PAIR:
            return self.set_min(_MIN_TO_PAIR[name], value)
        if name in _MAX_TO_PAIR:
            return self.set_max(_MAX_TO_PAIR[name], value)
        if name in LIST_FIELDS:
            if value is None:
                value = []
            if not isinstance(value, (list, tuple)):
                raise ValueError(f"{name} takes a list of items")
            self.set_items(name, value)
            return True
        if name in BOOL_FIELDS or name in _FLAG_BOOLS:
            self._commit({name: _to_bool(value)})
            return True
        if name == "error":
            self._commit({name: value or None})
            return True
        if name in SCALAR_FIELDS or name in FLAG_DEFAULTS:
            self._commit({name: _to_text(name, value)})
            return True
        raise ValueError(f"unknown search field: {name}")

    def set_min(self, pair, value):
        lo, hi = RANGE_PAIRS[pair]
        value = _to_text(lo, value)
        new_min, cur_max = _to_int(value), _to_int(self._state[hi])
        if cur_max is not None and new_min is not None and new_min > cur_max:
            # 最小値が最大値を超える場合は最大値をクリア
            self._commit({lo: value, hi: ""})
        else:
            self._commit({lo: value})
        return True

    def set_max(self, pair, value):
        lo, hi = RANGE_PAIRS[pair]
        value = _to_text(hi, value)
        new_max, cur_min = _to_int(value), _to_int(self._state[lo])
        if cur_min is not None and new_max is not None and new_max < cur_min:
            # 最大値が最小値を下回る場合は設定しない
            return False
        self._commit({hi: value})
        return True

    def set_current_salary_min(self, value):
        return self.set_min("current_salary", value)

    def set_current_salary_max(self, value):
        return self.set_max("current_salary", value)

    def set_desired_salary_min(self, value):
        return self.set_min("desired_salary", value)

    def set_desired_salary_max(self, value):
        return self.set_max("desired_salary", value)

    def set_age_min(self, value):
        return self.set_min("age", value)

    def set_age_max(self, value):
        return self.set_max("age", value)

    # -- list fields ---------------------------------------------------------

    def _coerce_item(self, list_field, raw):
        if isinstance(raw, CriteriaItem):
            name, years = raw.name, raw.experience_years
        elif isinstance(raw, dict):
            name, years = raw.get("name"), raw.get("experience_years") or raw.get("experienceYears")
        else:
            name, years = raw, None
        name = _to_text("name", name).strip()
        if not name:
            return None
        if list_field not in YEARS_FIELDS:
            years = None
        years = _to_text("experience_years", years) or None
        return CriteriaItem(id=item_id(list_field, name), name=name, experience_years=years)

    def set_items(self, list_field, items):
        if list_field not in LIST_FIELDS:
            raise ValueError(f"not a list field: {list_field}")
        out, seen = [], set()
        for raw in items:
            item = self._coerce_item(list_field, raw)
            if item is None or item.id in seen:
                continue
            seen.add(item.id)
            out.append(item)
        self._commit({list_field: out})

    def add_item(self, list_field, name, experience_years=None):
        """Add ``name``; re-adding an existing name only updates its years."""
        item = self._coerce_item(list_field, {"name": name, "experience_years": experience_years})
        if item is None:
            raise ValueError("item name must not be empty")
        items = self._state[list_field]
        for i, existing in enumerate(items):
            if existing.id == item.id:
                if experience_years is not None and existing.experience_years != item.experience_years:
                    updated = list(items)
                    updated[i] = replace(existing, experience_years=item.experience_years)
                    self._commit({list_field: updated})
                return existing.id
        self._commit({list_field: items + [item]})
        return item.id

    def remove_item(self, list_field, id_):
        items = self._state[list_field]
        self._commit({list_field: [i for i in items if i.id != id_]})

    def update_experience_years(self, list_field, id_, experience_years):
        if list_field not in YEARS_FIELDS:
            raise ValueError(f"{list_field} has no experience years")
        items = [
            replace(i, experience_years=_to_text("experience_years", experience_years) or None) if i.id == id_ else i
            for i in self._state[list_field]
        ]
        self._commit({list_field: items})

    # -- form lifecycle ----------------------------------------------------

    def reset_form(self):
        self._commit(_initial_state())

    def validate(self) -> bool:
        return bool(self._state["search_group"])

    def touch_search_group(self):
        self._commit({
            "search_group_touched": True,
            "search_group_error": "" if self.validate() else SEARCH_GROUP_REQUIRED,
        })

    def assign(self, mapping, replace_all=True):
        """Bulk-load criteria (saved search, session, query string).

        Values go through the regular setters in field order, so a stored
        min/max pair that violates the range rule loses its max.
        """
        if replace_all:
            self.reset_form()
        for name in CRITERIA_FIELDS:
            if name in mapping and mapping[name] is not None:
                self.set(name, mapping[name])
        return self

    # -- serialisation ----------------------------------------------------

    def to_dict(self) -> dict:
        out = {}
        for name in CRITERIA_FIELDS:
            value = self._state[name]
            out[name] = [i.to_dict() for i in value] if name in LIST_FIELDS else value
        return out

    @classmethod
    def from_dict(cls, data):
        return cls().assign(data or {})

    def to_session(self) -> dict:
        """``to_dict()`` plus the flags the form shows between requests."""
        out = self.to_dict()
        out.update({name: self._state[name] for name in SESSION_FLAGS})
        return out

    @classmethod
    def from_session(cls, data):
        criteria = cls.from_dict(data)
        for name in SESSION_FLAGS:
            if data and name in data:
                criteria.set(name, data[name])
        return criteria

    def to_query(self) -> dict:
        """URL query encoding: comma-joined names for lists, raw strings otherwise."""
        params = {}
        for name in CRITERIA_FIELDS:
            value = self._state[name]
            if name in LIST_FIELDS:
                if value:
                    params[name] = ",".join(i.name for i in value)
            elif name in BOOL_FIELDS:
                if value:
                    params[name] = "true"
            elif value:
                params[name] = value
        return params

    @classmethod
    def from_query(cls, params):
        criteria = cls()
        for name in CRITERIA_FIELDS:
            raw = params.get(name)
            if not raw:
                continue
            if name in LIST_FIELDS:
                names = raw if isinstance(raw, (list, tuple)) else str(raw).split(",")
                criteria.set_items(name, [str(n).strip() for n in names])
            elif name in BOOL_FIELDS:
                criteria.set(name, _to_bool(str(raw)))
            else:
                criteria.set(name, raw)
        return criteria

    def to_conditions(self) -> dict:
        """Typed conditions handed to the candidate query."""
        def items(name):
            return [
                {"name": i.name, "experience_years": _to_int(i.experience_years)}
                for i in self._state[name]
            ]

        s = self._state
        return {
            "keyword": s["keyword"].strip(),
            "experience_job_types": items("experience_job_types"),
            "experience_industries": items("experience_industries"),
            "job_type_and_search": s["job_type_and_search"],
            "industry_and_search": s["industry_and_search"],
            "current_salary_min": _to_int(s["current_salary_min"]),
            "current_salary_max": _to_int(s["current_salary_max"]),
            "desired_salary_min": _to_int(s["desired_salary_min"]),
            "desired_salary_max": _to_int(s["desired_salary_max"]),
            "age_min": _to_int(s["age_min"]),
            "age_max": _to_int(s["age_max"]),
            "current_company": s["current_company"].strip(),
            "education": s["education"],
            "english_level": s["english_level"],
            "other_language": s["other_language"],
            "other_language_level": s["other_language_level"],
            "qualifications": s["qualifications"].strip(),
            "last_login_min": _to_int(s["last_login_min"]),
            "desired_job_types": [i.name for i in s["desired_job_types"]],
            "desired_industries": [i.name for i in s["desired_industries"]],
            "desired_locations": [i.name for i in s["desired_locations"]],
            "work_styles": [i.name for i in s["work_styles"]],
            "transfer_time": s["transfer_time"],
            "selection_status": s["selection_status"],
        }

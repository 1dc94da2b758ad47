# resources/tags.py
"""Tag collection with the two matching conventions callers use.

Callers either pass a plain pair such as ``{"Env": "prod"}`` or an already
structured record such as ``{"key": "Env", "value": "prod"}``. Both shapes are
turned into a match object that compares against the stored entries.
"""
from collections.abc import Mapping


def tag_entry(key, value):
    """Build the structured form stored in a Tags collection."""
    return {"key": key, "value": value}


class PairMatch:
    """Match a single ``{key: value}`` pair; keys are compared as text."""

    def __init__(self, key, value):
        self.key = key
        self.value = value

    @property
    def target(self):
        return tag_entry(str(self.key), self.value)

    def matches(self, entry):
        return _entry_equals(entry, self.target)

    def __repr__(self):
        return f"PairMatch({self.key!r}, {self.value!r})"


class StructuredMatch:
    """Match a ``{"key": ..., "value": ...}`` record by strict equality."""

    def __init__(self, entry):
        self.entry = dict(entry)

    @property
    def target(self):
        return self.entry

    def matches(self, entry):
        return _entry_equals(entry, self.target)

    def __repr__(self):
        return f"StructuredMatch({self.entry!r})"


def _entry_equals(entry, target):
    return dict(entry) == target


def tag_match(pair_or_entry):
    """Pick the match variant for whatever shape the caller handed over.

    Returns None for an empty mapping, which matches nothing.
    """
    if isinstance(pair_or_entry, (PairMatch, StructuredMatch)):
        return pair_or_entry
    if not isinstance(pair_or_entry, Mapping):
        raise TypeError(f"Expected a tag mapping, got {type(pair_or_entry).__name__}")
    if "key" in pair_or_entry and "value" in pair_or_entry:
        return StructuredMatch(pair_or_entry)
    for key, value in pair_or_entry.items():
        # only the first pair is considered
        return PairMatch(key, value)
    return None


class Tags(list):
    """Tag entries of one instance, in the order AWS returned them."""

    @classmethod
    def from_aws(cls, aws_tags):
        """Build from the boto3 ``[{"Key": ..., "Value": ...}]`` shape."""
        return cls(tag_entry(t["Key"], t["Value"]) for t in aws_tags or [])

    def find(self, pair_or_entry):
        """First entry matching the pair or record, None if nothing does."""
        match = tag_match(pair_or_entry)
        if match is None:
            return None
        for entry in self:
            if match.matches(entry):
                return entry
        return None

    def has_tag(self, pair):
        """True if some entry carries the first key/value of ``pair``."""
        if not pair:
            return False
        key, value = _first_pair(pair)
        return self.find(PairMatch(key, value)) is not None

    def include(self, pair_or_entry):
        return self.find(pair_or_entry) is not None

    def __contains__(self, pair_or_entry):
        if isinstance(pair_or_entry, (Mapping, PairMatch, StructuredMatch)):
            return self.include(pair_or_entry)
        return super().__contains__(pair_or_entry)

    def to_dict(self):
        """Flatten to ``{key: value}``; later duplicates win."""
        return {entry["key"]: entry["value"] for entry in self}

    def keys(self):
        return [entry["key"] for entry in self]


def _first_pair(pair):
    for key, value in pair.items():
        return key, value

"""
MANOR Program Enumerations (v1.0)

Closed vocabularies shared by the validation, advisor and intake layers.
"""

from __future__ import annotations
from enum import Enum
from typing import Any, Type, TypeVar

from ..errors import InvalidEnumValueError

E = TypeVar("E", bound=Enum)


def parse_enum(enum_cls: Type[E], value: Any) -> E:
    """
    Coerce a raw value into a member of enum_cls.

    Accepts an existing member, a member value, or a member name
    (case-insensitive, dashes treated as underscores).
    """
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        for member in enum_cls:
            if member.value == value:
                return member
        key = value.strip().upper().replace("-", "_").replace(" ", "_")
        if key in enum_cls.__members__:
            return enum_cls.__members__[key]
        lowered = value.strip().lower()
        for member in enum_cls:
            if isinstance(member.value, str) and member.value.lower() == lowered:
                return member
    raise InvalidEnumValueError(enum_cls.__name__, value, [m.value for m in enum_cls])


# =============================================================================
# ADJACENCY
# =============================================================================

class Relationship(Enum):
    """
    Required spatial relationship between two spaces.

    Ordered by strength: ADJACENT > NEAR > BUFFERED > SEPARATED.
    Values are the letter codes used in program matrices.
    """
    ADJACENT = "A"
    NEAR = "N"
    BUFFERED = "B"
    SEPARATED = "S"

    @classmethod
    def parse(cls, value: Any) -> "Relationship":
        return parse_enum(cls, value)

    @property
    def strength(self) -> int:
        return _STRENGTH[self]

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def is_close(self) -> bool:
        """Adjacent or near."""
        return self.strength >= _STRENGTH[Relationship.NEAR]

    def conflicts_with(self, other: "Relationship") -> bool:
        """Adjacent and separated cannot both hold for one pair."""
        return {self, other} == {Relationship.ADJACENT, Relationship.SEPARATED}

    def __lt__(self, other):
        if not isinstance(other, Relationship):
            return NotImplemented
        return self.strength < other.strength

    def __le__(self, other):
        if not isinstance(other, Relationship):
            return NotImplemented
        return self.strength <= other.strength

    def __gt__(self, other):
        if not isinstance(other, Relationship):
            return NotImplemented
        return self.strength > other.strength

    def __ge__(self, other):
        if not isinstance(other, Relationship):
            return NotImplemented
        return self.strength >= other.strength


_STRENGTH = {
    Relationship.ADJACENT: 4,
    Relationship.NEAR: 3,
    Relationship.BUFFERED: 2,
    Relationship.SEPARATED: 1,
}

_LABELS = {
    Relationship.ADJACENT: "Adjacent (direct connection required)",
    Relationship.NEAR: "Near (close proximity needed)",
    Relationship.BUFFERED: "Buffered (buffer zone required)",
    Relationship.SEPARATED: "Separate (isolation required)",
}


class AcousticZone(Enum):
    """Acoustic zoning of a space, quietest first."""
    QUIET_SLEEPING = "zone_0"
    CONVERSATION = "zone_1"
    ACTIVE = "zone_2"
    HIGH_NOISE = "zone_3"


# =============================================================================
# FINDINGS
# =============================================================================

class Severity(Enum):
    """Red flag severity."""
    CRITICAL = "critical"
    WARNING = "warning"


class FlagClass(Enum):
    """Where a red flag came from."""
    RULE = "rule"               # One of the named path-tracing rules
    CONFLICT = "conflict"       # Contradictory matrix entries
    REFERENCE = "reference"     # Dangling space or room reference
    HEURISTIC = "heuristic"     # Operating-model heuristic


class GateStatus(Enum):
    """Overall validation gate."""
    PASS = "pass"
    WARNING = "warning"
    FAIL = "fail"


class DetectionMode(Enum):
    """Which red-flag strategy produced the findings."""
    GRAPH = "graph"
    MATRIX = "matrix"


# =============================================================================
# OPERATING MODEL
# =============================================================================

class Typology(Enum):
    SINGLE_FAMILY = "single_family"
    MULTI_FAMILY = "multi_family"
    VACATION = "vacation"
    WINTER = "winter"


class EntertainingLoad(Enum):
    RARE = "rare"
    QUARTERLY = "quarterly"
    MONTHLY = "monthly"
    WEEKLY = "weekly"


class StaffingLevel(Enum):
    NONE = "none"
    PART_TIME = "part_time"
    FULL_TIME = "full_time"
    LIVE_IN = "live_in"


class PrivacyPosture(Enum):
    OPEN = "open"
    BALANCED = "balanced"
    FORMAL = "formal"
    PRIVATE = "private"


class WetProgram(Enum):
    NONE = "none"
    POOL_ONLY = "pool_only"
    POOL_SPA = "pool_spa"
    FULL_WELLNESS = "full_wellness"


# =============================================================================
# BRIDGES
# =============================================================================

class BridgeType(Enum):
    """Connective spaces that resolve competing adjacency demands."""
    BUTLER_PANTRY = "butler_pantry"
    GUEST_AUTONOMY = "guest_autonomy"
    SOUND_LOCK = "sound_lock"
    WET_FEET = "wet_feet"
    OPS_CORE = "ops_core"


class BridgePresence(Enum):
    """Whether a required bridge exists in the program."""
    PRESENT = "present"
    ABSENT = "absent"
    UNKNOWN = "unknown"


# =============================================================================
# PLAN GRAPH
# =============================================================================

class EdgeType(Enum):
    DOOR = "door"
    OPENING = "opening"
    PASSAGE = "passage"


class PathType(Enum):
    GUEST_CIRCULATION = "guest_circulation"
    SERVICE_CIRCULATION = "service_circulation"
    DELIVERY_ROUTE = "delivery_route"
    REFUSE_ROUTE = "refuse_route"
    FOH_TO_TERRACE = "foh_to_terrace"


class WallType(Enum):
    WALL = "wall"
    FLOOR_CEILING = "floor_ceiling"

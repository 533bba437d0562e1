"""
MANOR Program Schema (v1.0)

Data structures for residential programs: spaces, adjacency
requirements, circulation nodes, operating context and plan graphs.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Optional, Tuple, TYPE_CHECKING
import logging

from .enums import (
    AcousticZone,
    BridgeType,
    EdgeType,
    EntertainingLoad,
    PathType,
    PrivacyPosture,
    Relationship,
    StaffingLevel,
    Typology,
    WallType,
    WetProgram,
    parse_enum,
)
from ..errors import ProgramInputError

if TYPE_CHECKING:
    from .presets import ProgramPreset

logger = logging.getLogger(__name__)


def _require(data: Dict[str, Any], entity: str, *fields: str) -> None:
    missing = [f for f in fields if f not in data]
    if missing:
        raise ProgramInputError(f"{entity} missing field(s): {', '.join(missing)}", entry=data)


# =============================================================================
# SPACES AND RELATIONSHIPS
# =============================================================================

@dataclass(frozen=True)
class Space:
    """A programmed room or outdoor area."""

    code: str
    name: str
    zone: str = ""
    level: int = 1
    target_sf: int = 0
    acoustic_zone: Optional[AcousticZone] = None
    tags: Tuple[str, ...] = ()
    rationale: str = ""

    def __post_init__(self):
        if not self.code:
            raise ProgramInputError("Space code must not be empty")
        if self.target_sf < 0:
            raise ProgramInputError(
                f"Space {self.code} has negative target area",
                code=self.code,
                target_sf=self.target_sf,
            )

    def has_tag(self, *tags: str) -> bool:
        return any(t in self.tags for t in tags)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "code": self.code,
            "name": self.name,
            "zone": self.zone,
            "level": self.level,
            "target_sf": self.target_sf,
            "acoustic_zone": self.acoustic_zone.value if self.acoustic_zone else None,
            "tags": list(self.tags),
            "rationale": self.rationale,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Space":
        _require(data, "Space entry", "code")
        acoustic = data.get("acoustic_zone")
        return cls(
            code=data["code"],
            name=data.get("name", data["code"]),
            zone=data.get("zone", ""),
            level=int(data.get("level", 1)),
            target_sf=int(data.get("target_sf", 0)),
            acoustic_zone=parse_enum(AcousticZone, acoustic) if acoustic else None,
            tags=tuple(data.get("tags", ())),
            rationale=data.get("rationale", ""),
        )


@dataclass(frozen=True)
class AdjacencyRequirement:
    """Directed matrix entry: from_code requires relationship with to_code."""

    from_code: str
    to_code: str
    relationship: Relationship

    @property
    def pair(self) -> Tuple[str, str]:
        """Unordered pair key, sorted."""
        return tuple(sorted((self.from_code, self.to_code)))

    def involves(self, code: str) -> bool:
        return code in (self.from_code, self.to_code)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "from": self.from_code,
            "to": self.to_code,
            "relationship": self.relationship.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AdjacencyRequirement":
        try:
            return cls(
                from_code=data["from"],
                to_code=data["to"],
                relationship=Relationship.parse(data["relationship"]),
            )
        except KeyError as e:
            raise ProgramInputError(f"Adjacency entry missing field {e}", entry=data)


@dataclass(frozen=True)
class CirculationNode:
    """Named cluster of spaces served by the same circulation."""

    node_id: str
    name: str
    space_codes: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.node_id, "name": self.name, "space_codes": list(self.space_codes)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CirculationNode":
        _require(data, "Circulation node", "id")
        return cls(
            node_id=data["id"],
            name=data.get("name", data["id"]),
            space_codes=tuple(data.get("space_codes", ())),
        )


# =============================================================================
# OPERATING CONTEXT
# =============================================================================

@dataclass
class BridgeConfig:
    """Which bridge spaces the program includes."""

    butler_pantry: bool = False
    guest_autonomy: bool = False
    sound_lock: bool = False
    wet_feet: bool = False
    ops_core: bool = False

    def includes(self, bridge: BridgeType) -> bool:
        return bool(getattr(self, bridge.value))

    def to_dict(self) -> Dict[str, bool]:
        return {b.value: self.includes(b) for b in BridgeType}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BridgeConfig":
        return cls(**{b.value: bool(data.get(b.value, False)) for b in BridgeType})

    @classmethod
    def all_present(cls) -> "BridgeConfig":
        return cls(**{b.value: True for b in BridgeType})


@dataclass
class OperatingModel:
    """How the household runs the house."""

    typology: Typology = Typology.SINGLE_FAMILY
    entertaining_load: EntertainingLoad = EntertainingLoad.QUARTERLY
    staffing: StaffingLevel = StaffingLevel.NONE
    privacy_posture: PrivacyPosture = PrivacyPosture.BALANCED
    wet_program: WetProgram = WetProgram.NONE

    def to_dict(self) -> Dict[str, str]:
        return {
            "typology": self.typology.value,
            "entertaining_load": self.entertaining_load.value,
            "staffing": self.staffing.value,
            "privacy_posture": self.privacy_posture.value,
            "wet_program": self.wet_program.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OperatingModel":
        defaults = cls()
        return cls(
            typology=parse_enum(Typology, data.get("typology", defaults.typology)),
            entertaining_load=parse_enum(
                EntertainingLoad, data.get("entertaining_load", defaults.entertaining_load)
            ),
            staffing=parse_enum(StaffingLevel, data.get("staffing", defaults.staffing)),
            privacy_posture=parse_enum(
                PrivacyPosture, data.get("privacy_posture", defaults.privacy_posture)
            ),
            wet_program=parse_enum(WetProgram, data.get("wet_program", defaults.wet_program)),
        )


@dataclass
class LifestylePriorities:
    """Lifestyle flags that drive bridges and module scoring."""

    chef_led: bool = False
    multi_family_hosting: bool = False
    late_night_media: bool = False
    home_office: bool = False
    fitness_recovery: bool = False
    pool_entertainment: bool = False

    def to_dict(self) -> Dict[str, bool]:
        return {
            "chef_led": self.chef_led,
            "multi_family_hosting": self.multi_family_hosting,
            "late_night_media": self.late_night_media,
            "home_office": self.home_office,
            "fitness_recovery": self.fitness_recovery,
            "pool_entertainment": self.pool_entertainment,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LifestylePriorities":
        known = cls().to_dict()
        return cls(**{k: bool(data[k]) for k in known if k in data})


# =============================================================================
# PLAN GRAPH
# =============================================================================

@dataclass(frozen=True)
class Room:
    """Room of a drawn plan."""

    room_id: str
    name: str
    level: int = 1
    zone: str = ""
    acoustic_zone: Optional[AcousticZone] = None
    tags: Tuple[str, ...] = ()
    space_code: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Room":
        _require(data, "Plan room", "id")
        acoustic = data.get("acoustic_zone")
        return cls(
            room_id=data["id"],
            name=data.get("name", data["id"]),
            level=int(data.get("level", 1)),
            zone=data.get("zone", ""),
            acoustic_zone=parse_enum(AcousticZone, acoustic) if acoustic else None,
            tags=tuple(data.get("tags", ())),
            space_code=data.get("space_code"),
        )


@dataclass(frozen=True)
class PlanEdge:
    """Connection between two rooms."""

    from_room: str
    to_room: str
    edge_type: EdgeType = EdgeType.DOOR

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlanEdge":
        _require(data, "Plan edge", "from", "to")
        return cls(
            from_room=data["from"],
            to_room=data["to"],
            edge_type=parse_enum(EdgeType, data.get("type", EdgeType.DOOR)),
        )


@dataclass(frozen=True)
class NamedPath:
    """Ordered room sequence for a circulation route."""

    path_id: str
    path_type: PathType
    rooms: Tuple[str, ...]
    name: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NamedPath":
        _require(data, "Plan path", "type")
        return cls(
            path_id=data.get("id", data["type"]),
            path_type=parse_enum(PathType, data["type"]),
            rooms=tuple(data.get("rooms", ())),
            name=data.get("name", ""),
        )


@dataclass(frozen=True)
class SharedWall:
    """Wall or floor/ceiling assembly shared by two rooms."""

    room_a: str
    room_b: str
    wall_type: WallType = WallType.WALL

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SharedWall":
        _require(data, "Shared wall", "a", "b")
        return cls(
            room_a=data["a"],
            room_b=data["b"],
            wall_type=parse_enum(WallType, data.get("type", WallType.WALL)),
        )


@dataclass
class PlanGraph:
    """Drawn plan as rooms, edges, named paths and shared walls."""

    rooms: List[Room] = field(default_factory=list)
    edges: List[PlanEdge] = field(default_factory=list)
    paths: List[NamedPath] = field(default_factory=list)
    shared_walls: List[SharedWall] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.rooms

    def room(self, room_id: str) -> Optional[Room]:
        for r in self.rooms:
            if r.room_id == room_id:
                return r
        return None

    def paths_of_type(self, *types: PathType) -> List[NamedPath]:
        return [p for p in self.paths if p.path_type in types]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlanGraph":
        return cls(
            rooms=[Room.from_dict(r) for r in data.get("rooms", [])],
            edges=[PlanEdge.from_dict(e) for e in data.get("edges", [])],
            paths=[NamedPath.from_dict(p) for p in data.get("paths", [])],
            shared_walls=[SharedWall.from_dict(w) for w in data.get("shared_walls", [])],
        )


# =============================================================================
# PROGRAM STATE
# =============================================================================

@dataclass
class ProgramState:
    """
    Caller-owned working program.

    Holds the spaces, adjacency matrix, circulation nodes and bridge
    configuration being edited. Engines read it and never mutate it.
    """

    tier: Optional[str] = None
    spaces: List[Space] = field(default_factory=list)
    matrix: List[AdjacencyRequirement] = field(default_factory=list)
    nodes: List[CirculationNode] = field(default_factory=list)
    bridge_config: Optional[BridgeConfig] = None

    # -------------------------------------------------------------------------
    # Presets
    # -------------------------------------------------------------------------

    def load_preset(self, preset: "ProgramPreset") -> None:
        """Replace the whole program with a preset. Nothing is merged."""
        self.tier = preset.tier
        self.spaces = list(preset.spaces)
        self.matrix = list(preset.matrix)
        self.nodes = list(preset.nodes)
        self.bridge_config = replace(preset.bridge_config)
        logger.info(f"Loaded preset {preset.tier}: {len(self.spaces)} spaces, "
                    f"{len(self.matrix)} adjacency entries")

    @classmethod
    def from_preset(cls, preset: "ProgramPreset") -> "ProgramState":
        state = cls()
        state.load_preset(preset)
        return state

    # -------------------------------------------------------------------------
    # Spaces
    # -------------------------------------------------------------------------

    @property
    def codes(self) -> List[str]:
        return [s.code for s in self.spaces]

    @property
    def total_sf(self) -> int:
        return sum(s.target_sf for s in self.spaces)

    def space(self, code: str) -> Optional[Space]:
        for s in self.spaces:
            if s.code == code:
                return s
        return None

    def add_space(self, space: Space) -> None:
        if self.space(space.code) is not None:
            raise ProgramInputError(f"Space {space.code} already exists", code=space.code)
        self.spaces.append(space)

    def remove_space(self, code: str) -> None:
        """Delete a space and every relationship or node membership naming it."""
        self.spaces = [s for s in self.spaces if s.code != code]
        self.matrix = [r for r in self.matrix if not r.involves(code)]
        self.nodes = [
            replace(n, space_codes=tuple(c for c in n.space_codes if c != code))
            for n in self.nodes
        ]

    # -------------------------------------------------------------------------
    # Matrix
    # -------------------------------------------------------------------------

    def get_relationship(self, from_code: str, to_code: str) -> Optional[Relationship]:
        for r in self.matrix:
            if r.from_code == from_code and r.to_code == to_code:
                return r.relationship
        return None

    def set_relationship(
        self,
        from_code: str,
        to_code: str,
        relationship: Relationship,
        symmetric: bool = True,
    ) -> None:
        """Overwrite the entry for the pair (both directions when symmetric)."""
        targets = {(from_code, to_code)}
        if symmetric:
            targets.add((to_code, from_code))
        self.matrix = [
            r for r in self.matrix if (r.from_code, r.to_code) not in targets
        ]
        for a, b in sorted(targets):
            self.matrix.append(AdjacencyRequirement(a, b, relationship))

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tier": self.tier,
            "spaces": [s.to_dict() for s in self.spaces],
            "matrix": [r.to_dict() for r in self.matrix],
            "nodes": [n.to_dict() for n in self.nodes],
            "bridge_config": self.bridge_config.to_dict() if self.bridge_config else None,
            "total_sf": self.total_sf,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProgramState":
        bridges = data.get("bridge_config")
        return cls(
            tier=data.get("tier"),
            spaces=[Space.from_dict(s) for s in data.get("spaces", [])],
            matrix=[AdjacencyRequirement.from_dict(r) for r in data.get("matrix", [])],
            nodes=[CirculationNode.from_dict(n) for n in data.get("nodes", [])],
            bridge_config=BridgeConfig.from_dict(bridges) if bridges is not None else None,
        )


def lookup(matrix: Iterable[AdjacencyRequirement], a: str, b: str) -> Optional[Relationship]:
    """Relationship of a to b, falling back to b to a."""
    reverse = None
    for r in matrix:
        if r.from_code == a and r.to_code == b:
            return r.relationship
        if r.from_code == b and r.to_code == a and reverse is None:
            reverse = r.relationship
    return reverse


def strongest_relationship(
    matrix: Iterable[AdjacencyRequirement], a: str, b: str
) -> Optional[Relationship]:
    """Strongest relationship recorded between a and b in either direction."""
    found = [r.relationship for r in matrix
             if (r.from_code, r.to_code) in ((a, b), (b, a))]
    return max(found, key=lambda rel: rel.strength) if found else None

"""
MANOR Red Flag Strategies (v1.0)

Two ways of answering the same rule questions:

- MatrixStrategy reads relationship strengths between code groups in the
  adjacency matrix, falling back to space acoustic zones and tags.
- GraphStrategy traces named paths, open edges and shared walls in a
  drawn plan.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Callable, FrozenSet, Iterable, List, Optional, Set, Tuple
import logging

import networkx as nx

from ..program.enums import AcousticZone, DetectionMode, PathType, Relationship, WallType
from ..program.schema import PlanGraph, ProgramState, Room, Space, strongest_relationship
from .plan_graph import (
    ENTRY_CODES,
    KITCHEN_WORK_CODES,
    PRIMARY_CODES,
    SHOW_KITCHEN_CODES,
    SHOW_KITCHEN_NAMES,
    SHOW_KITCHEN_TAGS,
    build_plan_graph,
    is_entry,
    is_front_of_house,
    is_kitchen_work,
    is_primary_suite,
    is_show_kitchen,
    name_matches,
    open_neighbors,
    room_acoustic_zone,
    rooms_by_id,
)
from .red_flags import RedFlagRule, RuleHit

logger = logging.getLogger(__name__)

__all__ = [
    "GUEST_CODES",
    "SLEEPING_CODES",
    "SERVICE_ENTRY_CODES",
    "HIGH_NOISE_CODES",
    "CONVERSATION_CODES",
    "RedFlagStrategy",
    "MatrixStrategy",
    "GraphStrategy",
]


GUEST_CODES: FrozenSet[str] = frozenset({
    "GUEST1", "GUEST2", "GUEST3", "GUEST4", "GST1", "GST2", "GSL1", "GSL1A", "GSL1B",
})
SLEEPING_CODES: FrozenSet[str] = GUEST_CODES | {"PRI", "KIDS", "BUNK"}
SERVICE_ENTRY_CODES: FrozenSet[str] = frozenset({"GAR", "MUD", "OPSCORE"})
FORMAL_CODES: FrozenSet[str] = frozenset({"GR", "DR"})
HIGH_NOISE_CODES: FrozenSet[str] = frozenset({"MEDIA", "THR", "GAME"})
CONVERSATION_CODES: FrozenSet[str] = frozenset({"GR", "DR", "LIB", "OFF", "SAL"})

CLOSE = frozenset({Relationship.ADJACENT, Relationship.NEAR})
DIRECT = frozenset({Relationship.ADJACENT})

_ZONE_LABELS = {
    AcousticZone.QUIET_SLEEPING: "Zone 0",
    AcousticZone.CONVERSATION: "Zone 1",
    AcousticZone.ACTIVE: "Zone 2",
    AcousticZone.HIGH_NOISE: "Zone 3",
}


class RedFlagStrategy(ABC):
    """Answers each red flag check for one representation of the program."""

    @property
    @abstractmethod
    def mode(self) -> DetectionMode:
        pass

    def evaluate(self, rule: RedFlagRule) -> Optional[RuleHit]:
        """Run the check named by rule. None when the rule does not trigger."""
        handler: Callable[[], Optional[RuleHit]] = getattr(self, f"check_{rule.check.value}")
        return handler()

    @abstractmethod
    def check_guest_primary(self) -> Optional[RuleHit]:
        pass

    @abstractmethod
    def check_service_foh(self) -> Optional[RuleHit]:
        pass

    @abstractmethod
    def check_acoustic_bleed(self) -> Optional[RuleHit]:
        pass

    @abstractmethod
    def check_show_kitchen(self) -> Optional[RuleHit]:
        pass

    @abstractmethod
    def check_guest_kitchen(self) -> Optional[RuleHit]:
        pass

    @abstractmethod
    def check_kitchen_entry(self) -> Optional[RuleHit]:
        pass

    @abstractmethod
    def check_acoustic_living(self) -> Optional[RuleHit]:
        pass


# =============================================================================
# MATRIX STRATEGY
# =============================================================================

class MatrixStrategy(RedFlagStrategy):
    """Rule checks over the adjacency matrix."""

    def __init__(self, program: ProgramState):
        self.program = program
        self._codes: Set[str] = set(program.codes)
        for r in program.matrix:
            self._codes.update((r.from_code, r.to_code))

    @property
    def mode(self) -> DetectionMode:
        return DetectionMode.MATRIX

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _name(self, code: str) -> str:
        space = self.program.space(code)
        return space.name if space else code

    def _group(
        self,
        codes: Iterable[str],
        zone: Optional[AcousticZone] = None,
        predicate: Optional[Callable[[Space], bool]] = None,
    ) -> List[str]:
        members = {c for c in codes if c in self._codes}
        for space in self.program.spaces:
            if zone is not None and space.acoustic_zone == zone:
                members.add(space.code)
            elif predicate is not None and predicate(space):
                members.add(space.code)
        return sorted(members)

    def _pairs(
        self,
        left: List[str],
        right: List[str],
        allowed: FrozenSet[Relationship],
    ) -> List[Tuple[str, str, Relationship]]:
        found = []
        seen = set()
        for a in left:
            for b in right:
                key = frozenset((a, b))
                if a == b or key in seen:
                    continue
                rel = strongest_relationship(self.program.matrix, a, b)
                if rel in allowed:
                    seen.add(key)
                    found.append((a, b, rel))
        return found

    def _hit(self, pairs, phrase: str) -> Optional[RuleHit]:
        if not pairs:
            return None
        parts = []
        affected = []
        for a, b, rel in pairs:
            parts.append(f"{self._name(a)} and {self._name(b)} are {rel.name.lower()} "
                         f"({phrase})")
            affected.extend([(a, self._name(a)), (b, self._name(b))])
        return RuleHit(description="; ".join(parts), affected=affected)

    # -------------------------------------------------------------------------
    # Checks
    # -------------------------------------------------------------------------

    def check_guest_primary(self) -> Optional[RuleHit]:
        pairs = self._pairs(self._group(GUEST_CODES), self._group(PRIMARY_CODES), CLOSE)
        return self._hit(pairs, "guest space opens toward the primary suite")

    def check_service_foh(self) -> Optional[RuleHit]:
        service = self._group(SERVICE_ENTRY_CODES)
        pairs = self._pairs(service, self._group(ENTRY_CODES), CLOSE)
        pairs += self._pairs(service, self._group(FORMAL_CODES), DIRECT)
        return self._hit(pairs, "service entry feeds front-of-house")

    def check_acoustic_bleed(self) -> Optional[RuleHit]:
        pairs = self._pairs(
            self._group(HIGH_NOISE_CODES, zone=AcousticZone.HIGH_NOISE),
            self._group(SLEEPING_CODES, zone=AcousticZone.QUIET_SLEEPING),
            CLOSE,
        )
        return self._hit(pairs, "high-noise space beside sleeping space")

    def check_show_kitchen(self) -> Optional[RuleHit]:
        if not self.program.spaces:
            return None
        for space in self.program.spaces:
            if space.level != 1:
                continue
            if (space.code in SHOW_KITCHEN_CODES
                    or space.has_tag(*SHOW_KITCHEN_TAGS)
                    or name_matches(space.name, SHOW_KITCHEN_NAMES)):
                return None
        return RuleHit(
            description="No principal-level show kitchen detected. The program has no "
                        "kitchen on Level 1 to anchor family and entertaining use.",
        )

    def check_guest_kitchen(self) -> Optional[RuleHit]:
        pairs = self._pairs(self._group(GUEST_CODES), self._group(KITCHEN_WORK_CODES), CLOSE)
        return self._hit(pairs, "guest route runs through the kitchen work zone")

    def check_kitchen_entry(self) -> Optional[RuleHit]:
        kitchens = self._group(SHOW_KITCHEN_CODES, predicate=lambda s: s.has_tag(*SHOW_KITCHEN_TAGS))
        pairs = self._pairs(kitchens, self._group(ENTRY_CODES), CLOSE)
        return self._hit(pairs, "kitchen is visible on arrival")

    def check_acoustic_living(self) -> Optional[RuleHit]:
        pairs = self._pairs(
            self._group(HIGH_NOISE_CODES, zone=AcousticZone.HIGH_NOISE),
            self._group(CONVERSATION_CODES, zone=AcousticZone.CONVERSATION),
            DIRECT,
        )
        return self._hit(pairs, "high-noise space beside conversation space")


# =============================================================================
# GRAPH STRATEGY
# =============================================================================

class GraphStrategy(RedFlagStrategy):
    """Rule checks over a drawn plan."""

    def __init__(self, plan: PlanGraph, program: Optional[ProgramState] = None):
        self.plan = plan
        self.program = program
        self.graph: nx.Graph = build_plan_graph(plan)
        self._rooms = rooms_by_id(self.graph)

    @property
    def mode(self) -> DetectionMode:
        return DetectionMode.GRAPH

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _ref(room: Room) -> Tuple[str, str]:
        return (room.space_code or room.room_id, room.name)

    def _path_rooms(self, *types: PathType) -> List[Tuple[str, List[Room]]]:
        """Known rooms of each path of the given types; unknown ids are skipped."""
        traced = []
        for path in self.plan.paths_of_type(*types):
            rooms = [self._rooms[r] for r in path.rooms if r in self._rooms]
            if len(rooms) < len(path.rooms):
                logger.debug(f"Path {path.path_id}: tracing {len(rooms)} of "
                             f"{len(path.rooms)} rooms, unknown ids skipped")
            traced.append((path.name or path.path_type.value, rooms))
        return traced

    def _walls_between(self, zone_a: AcousticZone, zone_b: AcousticZone):
        found = []
        for wall in self.plan.shared_walls:
            ra = self._rooms.get(wall.room_a)
            rb = self._rooms.get(wall.room_b)
            if ra is None or rb is None:
                continue
            za = room_acoustic_zone(ra, self.program)
            zb = room_acoustic_zone(rb, self.program)
            if za == zone_a and zb == zone_b:
                found.append((ra, rb, wall.wall_type))
            elif za == zone_b and zb == zone_a:
                found.append((rb, ra, wall.wall_type))
        return found

    def _acoustic_hit(self, zone_a: AcousticZone, zone_b: AcousticZone, noun: str):
        walls = self._walls_between(zone_a, zone_b)
        if not walls:
            return None
        parts = []
        affected = []
        for loud, quiet, wall_type in walls:
            assembly = "floor/ceiling" if wall_type == WallType.FLOOR_CEILING else "wall"
            parts.append(
                f"Acoustic conflict: {_ZONE_LABELS[zone_a]} room ({loud.name}) shares "
                f"{assembly} with {_ZONE_LABELS[zone_b]} {noun} ({quiet.name})"
            )
            affected.extend([self._ref(loud), self._ref(quiet)])
        return RuleHit(description="; ".join(parts), affected=affected)

    # -------------------------------------------------------------------------
    # Checks
    # -------------------------------------------------------------------------

    def check_guest_primary(self) -> Optional[RuleHit]:
        crossings: List[Room] = []
        for _, rooms in self._path_rooms(PathType.GUEST_CIRCULATION):
            on_path = {r.room_id for r in rooms}
            for room in rooms:
                if is_primary_suite(room):
                    crossings.append(room)
                for n in open_neighbors(self.graph, room.room_id):
                    neighbor = self._rooms[n]
                    if n not in on_path and is_primary_suite(neighbor):
                        crossings.append(neighbor)
        if not crossings:
            return None
        names = sorted({r.name for r in crossings})
        return RuleHit(
            description=f"Guest circulation crosses primary suite threshold at: "
                        f"{', '.join(names)}",
            affected=[self._ref(r) for r in crossings],
        )

    def check_service_foh(self) -> Optional[RuleHit]:
        parts = []
        affected = []
        for label, rooms in self._path_rooms(PathType.DELIVERY_ROUTE, PathType.REFUSE_ROUTE):
            foh = [r for r in rooms if is_front_of_house(r)]
            if foh:
                parts.append(f"{label} passes through front-of-house: "
                             f"{', '.join(r.name for r in foh)}")
                affected.extend(self._ref(r) for r in foh)
        if not parts:
            return None
        return RuleHit(description="; ".join(parts), affected=affected)

    def check_acoustic_bleed(self) -> Optional[RuleHit]:
        return self._acoustic_hit(AcousticZone.HIGH_NOISE, AcousticZone.QUIET_SLEEPING, "bedroom")

    def check_show_kitchen(self) -> Optional[RuleHit]:
        if not self._rooms:
            return None
        if any(r.level == 1 and is_show_kitchen(r) for r in self._rooms.values()):
            return None
        return RuleHit(
            description="No principal-level show kitchen detected. No Level 1 room is "
                        "tagged or named as the show kitchen.",
        )

    def check_guest_kitchen(self) -> Optional[RuleHit]:
        parts = []
        affected = []
        for label, rooms in self._path_rooms(PathType.FOH_TO_TERRACE):
            work = [r for r in rooms if is_kitchen_work(r)]
            if work:
                parts.append(f"{label} crosses kitchen work aisle at: "
                             f"{', '.join(r.name for r in work)}")
                affected.extend(self._ref(r) for r in work)
        if not parts:
            return None
        return RuleHit(description="; ".join(parts), affected=affected)

    def check_kitchen_entry(self) -> Optional[RuleHit]:
        parts = []
        affected = []
        for room_id in sorted(self._rooms):
            kitchen = self._rooms[room_id]
            if not is_show_kitchen(kitchen):
                continue
            for n in open_neighbors(self.graph, room_id):
                entry = self._rooms[n]
                if is_entry(entry):
                    parts.append(f"{kitchen.name} opens directly onto {entry.name}")
                    affected.extend([self._ref(kitchen), self._ref(entry)])
        if not parts:
            return None
        return RuleHit(description="; ".join(parts), affected=affected)

    def check_acoustic_living(self) -> Optional[RuleHit]:
        return self._acoustic_hit(AcousticZone.HIGH_NOISE, AcousticZone.CONVERSATION,
                                  "living room")

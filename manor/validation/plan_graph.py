"""
validation/plan_graph.py - Plan graph construction and room classification

Builds a networkx graph from a drawn plan and classifies rooms into the
functional groups the path-tracing rules reason about. Classification
checks tags first, then zone, then space code, then room name.
"""

from __future__ import annotations
from typing import Dict, FrozenSet, Iterable, List, Optional, Set
import logging

import networkx as nx

from ..program.enums import AcousticZone, EdgeType
from ..program.schema import PlanGraph, ProgramState, Room

logger = logging.getLogger(__name__)

__all__ = [
    "FOH_CODES",
    "PRIMARY_CODES",
    "KITCHEN_WORK_CODES",
    "SHOW_KITCHEN_CODES",
    "ENTRY_CODES",
    "build_plan_graph",
    "is_front_of_house",
    "is_primary_suite",
    "is_kitchen_work",
    "is_show_kitchen",
    "is_entry",
    "name_matches",
    "room_codes",
    "room_acoustic_zone",
    "find_reference_problems",
    "open_neighbors",
    "rooms_by_id",
]


# =============================================================================
# ROOM GROUPS
# =============================================================================

FOH_CODES: FrozenSet[str] = frozenset({"FOY", "GR", "DR", "FR", "LIB", "OFF", "SAL"})
FOH_NAMES: FrozenSet[str] = frozenset({
    "foyer", "gallery", "great room", "dining", "family room",
    "library", "office", "living room", "salon", "drawing room",
})
FOH_TAGS: FrozenSet[str] = frozenset({"foh", "front_of_house"})
FOH_ZONES: FrozenSet[str] = frozenset({
    "foh", "front_of_house", "formal", "entertaining", "arrival",
})

PRIMARY_CODES: FrozenSet[str] = frozenset({
    "PRI", "PRIBATH", "PRICL", "PRILNG", "PRILOUNGE", "PRISIT",
})
PRIMARY_NAMES: FrozenSet[str] = frozenset({
    "primary bedroom", "primary bath", "primary closet", "primary lounge",
    "primary sitting", "primary suite", "master bedroom", "master bath", "master closet",
})
PRIMARY_TAGS: FrozenSet[str] = frozenset({"primary_suite", "master_suite"})
PRIMARY_ZONES: FrozenSet[str] = frozenset({"primary", "primary_suite", "master", "master_suite"})

KITCHEN_WORK_CODES: FrozenSet[str] = frozenset({"KIT", "CHEF", "SCUL"})
KITCHEN_WORK_NAMES: FrozenSet[str] = frozenset({"kitchen", "scullery"})
KITCHEN_WORK_TAGS: FrozenSet[str] = frozenset({"kitchen_work", "work_aisle"})
KITCHEN_WORK_ZONES: FrozenSet[str] = frozenset({"kitchen_work", "work_aisle"})

SHOW_KITCHEN_CODES: FrozenSet[str] = frozenset({"KIT"})
SHOW_KITCHEN_NAMES: FrozenSet[str] = frozenset({
    "kitchen", "show kitchen", "principal kitchen", "main kitchen",
})
SHOW_KITCHEN_TAGS: FrozenSet[str] = frozenset({"show_kitchen", "principal_kitchen"})
SHOW_KITCHEN_ZONES: FrozenSet[str] = frozenset({"show_kitchen"})

# Entry names match whole names only: "Service Entry" is not an arrival room.
ENTRY_CODES: FrozenSet[str] = frozenset({"FOY"})
ENTRY_NAMES: FrozenSet[str] = frozenset({"foyer", "entry", "entrance hall", "vestibule"})
ENTRY_TAGS: FrozenSet[str] = frozenset({"entry", "arrival"})


def name_matches(name: str, names: Iterable[str], partial: bool = True) -> bool:
    """Case-insensitive name match; partial matches any listed name inside name."""
    name = " ".join(name.lower().split())
    if partial:
        return any(n in name for n in names)
    return name in names


def room_codes(room: Room) -> Set[str]:
    """Codes a room answers to: its space code, its id and its compacted name."""
    codes = {room.room_id.upper(), "".join(room.name.split()).upper()}
    if room.space_code:
        codes.add(room.space_code.upper())
    return codes


def _classify(
    room: Room,
    tags: FrozenSet[str],
    zones: FrozenSet[str],
    codes: FrozenSet[str],
    names: FrozenSet[str],
    partial_names: bool = True,
) -> bool:
    if tags.intersection(room.tags):
        return True
    zone = "_".join(room.zone.lower().split())
    if zone and zone in zones:
        return True
    if codes.intersection(room_codes(room)):
        return True
    return name_matches(room.name, names, partial_names)


def is_front_of_house(room: Room) -> bool:
    return _classify(room, FOH_TAGS, FOH_ZONES, FOH_CODES, FOH_NAMES)


def is_primary_suite(room: Room) -> bool:
    return _classify(room, PRIMARY_TAGS, PRIMARY_ZONES, PRIMARY_CODES, PRIMARY_NAMES)


def is_kitchen_work(room: Room) -> bool:
    return _classify(room, KITCHEN_WORK_TAGS, KITCHEN_WORK_ZONES, KITCHEN_WORK_CODES,
                     KITCHEN_WORK_NAMES)


def is_show_kitchen(room: Room) -> bool:
    return _classify(room, SHOW_KITCHEN_TAGS, SHOW_KITCHEN_ZONES, SHOW_KITCHEN_CODES,
                     SHOW_KITCHEN_NAMES)


def is_entry(room: Room) -> bool:
    return _classify(room, ENTRY_TAGS, frozenset(), ENTRY_CODES, ENTRY_NAMES,
                     partial_names=False)


def room_acoustic_zone(room: Room, program: Optional[ProgramState] = None) -> Optional[AcousticZone]:
    """Room's own acoustic zone, else that of its programmed space."""
    if room.acoustic_zone is not None:
        return room.acoustic_zone
    if program is not None and room.space_code:
        space = program.space(room.space_code)
        if space is not None:
            return space.acoustic_zone
    return None


# =============================================================================
# GRAPH
# =============================================================================

def build_plan_graph(plan: PlanGraph) -> nx.Graph:
    """
    Build an undirected room graph.

    Nodes carry the Room under the "room" attribute; edges carry
    "edge_type". Edges naming unknown rooms are left out.
    """
    G = nx.Graph()
    for room in plan.rooms:
        G.add_node(room.room_id, room=room)

    for edge in plan.edges:
        if edge.from_room not in G or edge.to_room not in G:
            continue
        G.add_edge(edge.from_room, edge.to_room, edge_type=edge.edge_type)

    logger.debug(f"Plan graph: {G.number_of_nodes()} rooms, {G.number_of_edges()} edges")
    return G


def open_neighbors(G: nx.Graph, room_id: str) -> List[str]:
    """Rooms joined to room_id by an opening (no door)."""
    if room_id not in G:
        return []
    return sorted(
        n for n in G.neighbors(room_id)
        if G.edges[room_id, n].get("edge_type") == EdgeType.OPENING
    )


def find_reference_problems(plan: PlanGraph, G: Optional[nx.Graph] = None) -> List[str]:
    """
    Describe dangling references in a plan.

    Covers edges, shared walls and paths naming unknown rooms, and
    consecutive path rooms with no connecting edge.
    """
    if G is None:
        G = build_plan_graph(plan)
    known: Set[str] = set(G.nodes)
    problems: List[str] = []

    for edge in plan.edges:
        missing = [r for r in (edge.from_room, edge.to_room) if r not in known]
        if missing:
            problems.append(f"Edge {edge.from_room}-{edge.to_room} references unknown room(s): "
                            f"{', '.join(missing)}")

    for wall in plan.shared_walls:
        missing = [r for r in (wall.room_a, wall.room_b) if r not in known]
        if missing:
            problems.append(f"Shared wall {wall.room_a}/{wall.room_b} references unknown "
                            f"room(s): {', '.join(missing)}")

    for path in plan.paths:
        missing = [r for r in path.rooms if r not in known]
        if missing:
            problems.append(f"Path {path.path_id} references unknown room(s): "
                            f"{', '.join(missing)}")
        for a, b in zip(path.rooms, path.rooms[1:]):
            if a in known and b in known and not G.has_edge(a, b):
                problems.append(f"Path {path.path_id} steps from {a} to {b} without a "
                                f"connecting door or opening")

    return problems


def rooms_by_id(G: nx.Graph) -> Dict[str, Room]:
    return {n: data["room"] for n, data in G.nodes(data=True)}

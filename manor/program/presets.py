"""
MANOR Benchmark Programs (v1.0)

Baseline programs for the four size tiers: spaces, default adjacency
matrix, circulation nodes and bridge configuration.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Tuple
import logging

from .enums import AcousticZone, Relationship
from .schema import AdjacencyRequirement, BridgeConfig, CirculationNode, Space
from ..errors import ProgramInputError, UnknownTierError

logger = logging.getLogger(__name__)

__all__ = [
    "ProgramPreset",
    "PresetLibrary",
    "PRESET_LIBRARY",
    "get_preset",
    "list_tiers",
    "tier_for_area",
]


@dataclass(frozen=True)
class ProgramPreset:
    """Immutable benchmark program for one tier."""

    tier: str
    label: str
    description: str
    spaces: Tuple[Space, ...]
    matrix: Tuple[AdjacencyRequirement, ...]
    nodes: Tuple[CirculationNode, ...]
    bridge_config: BridgeConfig

    @property
    def total_sf(self) -> int:
        return sum(s.target_sf for s in self.spaces)

    @property
    def codes(self) -> List[str]:
        return [s.code for s in self.spaces]

    def to_dict(self) -> Dict:
        return {
            "tier": self.tier,
            "label": self.label,
            "description": self.description,
            "total_sf": self.total_sf,
            "spaces": [s.to_dict() for s in self.spaces],
            "matrix": [r.to_dict() for r in self.matrix],
            "nodes": [n.to_dict() for n in self.nodes],
            "bridge_config": self.bridge_config.to_dict(),
        }


# =============================================================================
# BUILDERS
# =============================================================================

_ACOUSTIC: Dict[str, AcousticZone] = {
    **{c: AcousticZone.QUIET_SLEEPING for c in (
        "PRI", "GUEST1", "GUEST2", "GUEST3", "GUEST4", "GSL1", "GSL1A", "GSL1B", "KIDS",
    )},
    **{c: AcousticZone.CONVERSATION for c in ("GR", "DR", "LIB", "OFF", "SAL", "PRILNG")},
    **{c: AcousticZone.ACTIVE for c in ("FR", "KIT", "BKF", "GYM", "PLAY")},
    **{c: AcousticZone.HIGH_NOISE for c in ("MEDIA", "GAME", "BAR")},
}


def _sp(code: str, name: str, sf: int, zone: str, level: int = 1) -> Space:
    return Space(
        code=code,
        name=name,
        zone=zone,
        level=level,
        target_sf=sf,
        acoustic_zone=_ACOUSTIC.get(code),
    )


def _matrix(table: Dict[str, Dict[str, str]]) -> Tuple[AdjacencyRequirement, ...]:
    return tuple(
        AdjacencyRequirement(src, dst, Relationship.parse(rel))
        for src, row in table.items()
        for dst, rel in row.items()
    )


_ALL_BRIDGES = BridgeConfig.all_present()


# =============================================================================
# PRESET LIBRARY
# =============================================================================

class PresetLibrary:
    """Registry of benchmark programs keyed by tier."""

    def __init__(self):
        self._presets: Dict[str, ProgramPreset] = {}
        self._load_10k()
        self._load_5k()
        self._load_15k()
        self._load_20k()

    def register(self, preset: ProgramPreset) -> None:
        self._presets[preset.tier] = preset

    def get(self, tier: str) -> ProgramPreset:
        preset = self._presets.get(tier)
        if preset is None:
            logger.warning(f"Unknown benchmark tier requested: {tier!r}")
            raise UnknownTierError(tier, available=self.tiers())
        return replace(preset, bridge_config=replace(preset.bridge_config))

    def tiers(self) -> List[str]:
        return sorted(self._presets, key=lambda t: int(t.rstrip("k")))

    # -------------------------------------------------------------------------
    # 10,000 SF
    # -------------------------------------------------------------------------

    def _load_10k(self) -> None:
        arrival = "Arrival + Formal"
        hub = "Family Hub"
        service = "Service Core"
        wellness = "Wellness"
        spaces = (
            _sp("FOY", "Foyer / Gallery + coat + powder", 420, arrival),
            _sp("OFF", "Private Office", 220, arrival),
            _sp("GR", "Great Room (formal)", 520, arrival),
            _sp("DR", "Formal Dining", 320, arrival),
            _sp("WINE", "Wine Storage", 110, arrival),
            _sp("FR", "Family Room (hub)", 520, hub),
            _sp("KIT", "Kitchen", 380, hub),
            _sp("BKF", "Breakfast Nook", 150, hub),
            _sp("SCUL", "Scullery / Prep + pantry", 220, hub),
            _sp("CHEF", "Chef's Kitchen (service)", 180, service),
            _sp("LIB", "Library", 220, hub),
            _sp("MEDIA", "Media / Theater (buffered)", 280, hub),
            _sp("MUD", "Mudroom / Daily Entry", 180, service),
            _sp("GYM", "Gym (daylight + views)", 260, wellness),
            _sp("SPA", "Spa / Wellness", 220, wellness),
            _sp("POOLSUP", "Pool Support", 120, wellness),
            _sp("GSL1", "Guest Suite (Level 1)", 460, "Hospitality"),
            _sp("LAUN1", "Laundry (L1)", 140, service),
            _sp("MEP", "Mechanical / Storage / AV / IT", 320, service),
            _sp("CIRC1", "Circulation + stair/lift allowance", 940, "Circulation"),
            _sp("TERR", "Main Terrace / Outdoor Dining", 0, "Outdoor"),
            _sp("POOL", "Lap Pool + Deck", 0, "Outdoor"),
            _sp("PRI", "Primary Bedroom", 360, "Primary Wing", 2),
            _sp("PRIBATH", "Primary Bath", 260, "Primary Wing", 2),
            _sp("PRICL", "Primary Closets (his/hers)", 260, "Primary Wing", 2),
            _sp("PRILNG", "Primary Lounge", 180, "Primary Wing", 2),
            _sp("LAND", "Landing (daylit)", 520, "Guest Wing Node", 2),
            _sp("GUEST1", "Guest Suite (L2) #1", 340, "Guest Wing Node", 2),
            _sp("GUEST2", "Guest Suite (L2) #2", 340, "Guest Wing Node", 2),
            _sp("LAUN2", "Laundry + linen (L2)", 140, "Support", 2),
            _sp("MEP2", "Storage / IT (L2)", 120, "Support", 2),
            _sp("CIRC2", "Corridors (generous)", 1040, "Circulation", 2),
            _sp("CORE2", "Stair / lift distribution", 440, "Circulation", 2),
        )
        matrix = _matrix({
            "FOY": {"OFF": "A", "GR": "A", "DR": "N", "WINE": "S", "FR": "B", "KIT": "B",
                    "CHEF": "S", "SCUL": "S", "MUD": "S", "LIB": "S", "MEDIA": "S",
                    "TERR": "S", "GYM": "S", "SPA": "S", "POOL": "S"},
            "OFF": {"FOY": "A", "GR": "S", "DR": "S"},
            "GR": {"FOY": "A", "TERR": "N"},
            "DR": {"FOY": "N", "WINE": "A", "CHEF": "B"},
            "CHEF": {"DR": "B", "SCUL": "A", "KIT": "N", "FOY": "S"},
            "WINE": {"DR": "A", "SCUL": "B"},
            "FR": {"FOY": "B", "KIT": "A", "LIB": "A", "MEDIA": "B", "TERR": "A", "GYM": "A"},
            "KIT": {"FOY": "B", "FR": "A", "BKF": "A", "SCUL": "A", "CHEF": "N", "MUD": "N",
                    "TERR": "N"},
            "SCUL": {"KIT": "A", "CHEF": "A", "MUD": "A", "WINE": "B"},
            "MUD": {"SCUL": "A", "KIT": "N"},
            "GYM": {"FR": "A", "SPA": "A"},
            "SPA": {"GYM": "A", "POOL": "A"},
            "TERR": {"FR": "A", "POOL": "A", "GR": "N", "KIT": "N"},
            "MEDIA": {"PRI": "S", "GUEST1": "S", "GUEST2": "S"},
        })
        nodes = (
            CirculationNode("node-1", "Node 1: Front Gallery + Formal",
                            ("FOY", "OFF", "GR", "DR", "WINE")),
            CirculationNode("node-2", "Node 2: Family Hub + Service + Wellness",
                            ("FR", "KIT", "BKF", "CHEF", "SCUL", "MUD", "LIB", "MEDIA",
                             "TERR", "GYM", "SPA", "POOL")),
        )
        self.register(ProgramPreset(
            tier="10k",
            label="10,000 SF",
            description="2-level | 4 bedrooms | no basement | lap pool scenario",
            spaces=spaces,
            matrix=matrix,
            nodes=nodes,
            bridge_config=_ALL_BRIDGES,
        ))

    # -------------------------------------------------------------------------
    # 5,000 SF (compact subset of the 10k program)
    # -------------------------------------------------------------------------

    def _load_5k(self) -> None:
        arrival = "Arrival + Formal"
        hub = "Family Hub"
        service = "Service Core"
        spaces = (
            _sp("FOY", "Foyer + powder", 220, arrival),
            _sp("OFF", "Study / Office", 150, arrival),
            _sp("GR", "Great Room", 450, arrival),
            _sp("DR", "Dining", 220, arrival),
            _sp("FR", "Family Room (hub)", 380, hub),
            _sp("KIT", "Kitchen", 300, hub),
            _sp("SCUL", "Pantry / Prep", 120, hub),
            _sp("MUD", "Mudroom / Daily Entry", 120, service),
            _sp("MEDIA", "Media Room", 220, hub),
            _sp("GSL1", "Guest Suite (Level 1)", 360, "Hospitality"),
            _sp("LAUN1", "Laundry", 100, service),
            _sp("MEP", "Mechanical / Storage", 180, service),
            _sp("CIRC1", "Circulation + stair", 560, "Circulation"),
            _sp("TERR", "Terrace", 0, "Outdoor"),
            _sp("PRI", "Primary Bedroom", 300, "Primary Wing", 2),
            _sp("PRIBATH", "Primary Bath", 200, "Primary Wing", 2),
            _sp("PRICL", "Primary Closet", 180, "Primary Wing", 2),
            _sp("GUEST1", "Guest Suite (L2) #1", 280, "Guest Wing Node", 2),
            _sp("GUEST2", "Guest Suite (L2) #2", 260, "Guest Wing Node", 2),
            _sp("CIRC2", "Corridors", 400, "Circulation", 2),
        )
        codes = {s.code for s in spaces}
        matrix = tuple(
            r for r in self._presets["10k"].matrix
            if r.from_code in codes and r.to_code in codes
        )
        nodes = (
            CirculationNode("node-1", "Node 1: Entry + Formal", ("FOY", "OFF", "GR", "DR")),
            CirculationNode("node-2", "Node 2: Family Hub + Service",
                            ("FR", "KIT", "SCUL", "MUD", "MEDIA", "TERR")),
        )
        self.register(ProgramPreset(
            tier="5k",
            label="5,000 SF",
            description="2-level | 3 bedrooms | compact program | no basement",
            spaces=spaces,
            matrix=matrix,
            nodes=nodes,
            bridge_config=_ALL_BRIDGES,
        ))

    # -------------------------------------------------------------------------
    # 15,000 SF
    # -------------------------------------------------------------------------

    def _load_15k(self) -> None:
        arrival = "Arrival + Formal"
        hub = "Family Hub"
        service = "Service Core"
        wellness = "Wellness"
        guests = "Guest Suites"
        spaces = (
            _sp("FOY", "Foyer / Gallery + coat + powder", 520, arrival),
            _sp("OFF", "Private Office", 260, arrival),
            _sp("GR", "Great Room (formal)", 680, arrival),
            _sp("DR", "Formal Dining", 380, arrival),
            _sp("WINE", "Wine Storage / Tasting", 180, arrival),
            _sp("FR", "Family Room (hub)", 640, hub),
            _sp("KIT", "Kitchen", 460, hub),
            _sp("BKF", "Breakfast Nook", 180, hub),
            _sp("SCUL", "Scullery / Prep + pantry", 300, hub),
            _sp("CHEF", "Chef's Kitchen (service)", 220, service),
            _sp("MUD", "Mudroom / Daily Entry", 220, hub),
            _sp("LIB", "Library", 260, hub),
            _sp("MEDIA", "Media / Theater (buffered)", 360, hub),
            _sp("WLINK", "Wellness Link (room)", 160, wellness),
            _sp("GYM", "Gym (daylight + views)", 320, wellness),
            _sp("SPA", "Spa / Wellness (daylight + views)", 300, wellness),
            _sp("POOLSUP", "Pool Support", 160, wellness),
            _sp("GSL1", "Guest Suite (Level 1)", 520, "Hospitality"),
            _sp("LAUN1", "Laundry (L1)", 160, service),
            _sp("MEP", "Mechanical / Storage / AV / IT", 420, service),
            _sp("CIRC1", "Circulation + stair/lift allowance", 2520, "Circulation"),
            _sp("TERR", "Main Terrace / Outdoor Living", 0, "Outdoor"),
            _sp("POOL", "Lap Pool + Deck", 0, "Outdoor"),
            _sp("PRI", "Primary Bedroom", 440, "Primary Wing", 2),
            _sp("PRIBATH", "Primary Bath", 340, "Primary Wing", 2),
            _sp("PRICL", "Primary Closets (his/hers)", 420, "Primary Wing", 2),
            _sp("PRILNG", "Primary Lounge", 240, "Primary Wing", 2),
            _sp("LAND", "Landing (daylit)", 760, guests, 2),
            _sp("GUEST1", "Guest Suite (L2) #1", 420, guests, 2),
            _sp("GUEST2", "Guest Suite (L2) #2", 420, guests, 2),
            _sp("GUEST3", "Guest Suite (L2) #3", 420, guests, 2),
            _sp("LAUN2", "Laundry + linen (L2)", 200, "Support", 2),
            _sp("MEP2", "Storage / IT (L2)", 180, "Support", 2),
            _sp("CORE2", "Stair/lift distribution + corridors", 2160, "Circulation", 2),
        )
        matrix = _matrix({
            "FOY": {"OFF": "A", "GR": "A", "DR": "N", "WINE": "S", "FR": "B", "KIT": "B",
                    "CHEF": "S", "SCUL": "S", "MUD": "S", "LIB": "S", "MEDIA": "S",
                    "WLINK": "S", "TERR": "S", "GYM": "S", "SPA": "S", "POOL": "S"},
            "OFF": {"FOY": "A", "GR": "S", "DR": "S"},
            "GR": {"FOY": "A", "TERR": "N"},
            "DR": {"FOY": "N", "WINE": "A", "CHEF": "B"},
            "CHEF": {"DR": "B", "SCUL": "A", "KIT": "N", "FOY": "S"},
            "WINE": {"DR": "A", "SCUL": "B"},
            "FR": {"FOY": "B", "KIT": "A", "LIB": "A", "MEDIA": "B", "WLINK": "A", "TERR": "A"},
            "KIT": {"FOY": "B", "FR": "A", "BKF": "A", "SCUL": "A", "CHEF": "N", "MUD": "N",
                    "TERR": "N"},
            "SCUL": {"KIT": "A", "CHEF": "A", "MUD": "A", "WINE": "B"},
            "MUD": {"SCUL": "A", "KIT": "N"},
            "WLINK": {"FR": "A", "GYM": "A", "SPA": "A"},
            "GYM": {"WLINK": "A", "SPA": "N"},
            "SPA": {"WLINK": "A", "GYM": "N", "POOL": "A"},
            "TERR": {"FR": "A", "POOL": "A", "GR": "N", "KIT": "N"},
            "MEDIA": {"PRI": "S", "GUEST1": "S", "GUEST2": "S", "GUEST3": "S"},
        })
        nodes = (
            CirculationNode("node-1", "Node 1: Front Gallery + Formal",
                            ("FOY", "OFF", "GR", "DR", "WINE")),
            CirculationNode("node-2", "Node 2: Family Hub + Service + Wellness",
                            ("FR", "KIT", "BKF", "CHEF", "SCUL", "MUD", "LIB", "MEDIA",
                             "WLINK", "GYM", "SPA", "TERR", "POOL")),
        )
        self.register(ProgramPreset(
            tier="15k",
            label="15,000 SF",
            description="2-level | 5 bedrooms | no basement | lap pool + acreage",
            spaces=spaces,
            matrix=matrix,
            nodes=nodes,
            bridge_config=_ALL_BRIDGES,
        ))

    # -------------------------------------------------------------------------
    # 20,000 SF
    # -------------------------------------------------------------------------

    def _load_20k(self) -> None:
        arrival = "Arrival + Formal"
        hub = "Family Hub"
        service = "Service Core"
        wellness = "Wellness"
        guests = "Guest Wing Node"
        kids = "Kids Zone"
        spaces = (
            _sp("FOY", "Foyer / Gallery + coat + powder", 650, arrival),
            _sp("OFF", "Private Office", 280, arrival),
            _sp("GR", "Great Room (formal)", 800, arrival),
            _sp("SAL", "Formal Lounge / Salon", 520, arrival),
            _sp("DR", "Formal Dining", 420, arrival),
            _sp("WINE", "Wine Storage", 220, arrival),
            _sp("FR", "Family Room (hub)", 760, hub),
            _sp("KIT", "Kitchen", 520, hub),
            _sp("BKF", "Breakfast Nook", 190, hub),
            _sp("SCUL", "Scullery / Catering Prep", 360, hub),
            _sp("CHEF", "Chef's Kitchen (service)", 280, service),
            _sp("MUD", "Mudroom / Daily Entry", 260, service),
            _sp("LIB", "Library", 320, hub),
            _sp("MEDIA", "Media / Theater (buffered)", 420, hub),
            _sp("BAR", "Bar / Lounge", 280, hub),
            _sp("GAME", "Game / Recreation", 420, hub),
            _sp("GYM", "Gym (daylight + views)", 380, wellness),
            _sp("SPA", "Spa / Wellness", 360, wellness),
            _sp("POOLSUP", "Pool Support", 180, wellness),
            _sp("GSL1A", "Guest Suite 1 (L1)", 520, "Hospitality"),
            _sp("GSL1B", "Guest Suite 2 (L1)", 520, "Hospitality"),
            _sp("LAUN1", "Laundry (L1)", 180, service),
            _sp("MEP", "Mechanical / Storage / AV / IT", 520, service),
            _sp("CIRC1", "Circulation + stair/lift allowance", 2920, "Circulation"),
            _sp("TERR", "Main Terrace / Outdoor Dining", 0, "Outdoor"),
            _sp("POOL", "Lap Pool + Deck", 0, "Outdoor"),
            _sp("PRI", "Primary Bedroom", 520, "Primary Wing", 2),
            _sp("PRIBATH", "Primary Bath", 420, "Primary Wing", 2),
            _sp("PRICL", "Primary Closets (his/hers)", 520, "Primary Wing", 2),
            _sp("PRILNG", "Primary Lounge", 280, "Primary Wing", 2),
            _sp("LAND", "Landing (daylit)", 980, guests, 2),
            _sp("GUEST1", "Guest Suite (L2) #1", 360, guests, 2),
            _sp("GUEST2", "Guest Suite (L2) #2", 360, guests, 2),
            _sp("GUEST3", "Guest Suite (L2) #3", 360, guests, 2),
            _sp("GUEST4", "Guest Suite (L2) #4", 360, guests, 2),
            _sp("PLAY", "Kids Playroom (L2)", 320, kids, 2),
            _sp("KIDS", "Kids Room / Bunk Room (L2)", 300, kids, 2),
            _sp("HW", "Homework / Loft Perch (L2)", 220, kids, 2),
            _sp("LAUN2", "Laundry + linen (L2)", 220, "Support", 2),
            _sp("MEP2", "Storage / IT (L2)", 200, "Support", 2),
            _sp("CORE2", "Stair/lift distribution + corridors", 2580, "Circulation", 2),
        )
        matrix = _matrix({
            "FOY": {"OFF": "A", "GR": "A", "SAL": "A", "DR": "N", "WINE": "S", "FR": "B",
                    "KIT": "B", "CHEF": "S", "SCUL": "S", "MUD": "S", "LIB": "S",
                    "MEDIA": "S", "BAR": "S", "GAME": "S", "TERR": "S", "GYM": "S",
                    "SPA": "S", "POOL": "S", "GSL1A": "A", "GSL1B": "A"},
            "OFF": {"FOY": "A", "GR": "S", "SAL": "S"},
            "GR": {"FOY": "A", "TERR": "N"},
            "SAL": {"FOY": "A"},
            "DR": {"FOY": "N", "WINE": "A", "CHEF": "B"},
            "CHEF": {"DR": "B", "SCUL": "A", "KIT": "N", "FOY": "S"},
            "WINE": {"DR": "A", "SCUL": "B"},
            "FR": {"FOY": "B", "KIT": "A", "LIB": "A", "MEDIA": "B", "BAR": "A", "TERR": "A",
                   "GYM": "A"},
            "KIT": {"FOY": "B", "FR": "A", "BKF": "A", "SCUL": "A", "CHEF": "N", "MUD": "N",
                    "TERR": "N"},
            "SCUL": {"KIT": "A", "CHEF": "A", "MUD": "A", "WINE": "B"},
            "MUD": {"SCUL": "A", "KIT": "N"},
            "BAR": {"FR": "A", "GAME": "A", "TERR": "A"},
            "GAME": {"BAR": "A"},
            "GYM": {"FR": "A", "SPA": "A"},
            "SPA": {"GYM": "A", "POOL": "A"},
            "TERR": {"FR": "A", "BAR": "A", "POOL": "A", "GR": "N", "KIT": "N"},
            "MEDIA": {"PRI": "S", "GUEST1": "S", "GUEST2": "S", "GUEST3": "S", "GUEST4": "S",
                      "KIDS": "S"},
        })
        nodes = (
            CirculationNode("node-1", "Node 1: Front Gallery + Formal",
                            ("FOY", "OFF", "GR", "SAL", "DR", "WINE", "GSL1A", "GSL1B")),
            CirculationNode("node-2", "Node 2: Family Hub + Entertainment + Service",
                            ("FR", "KIT", "BKF", "CHEF", "SCUL", "MUD", "LIB", "MEDIA", "BAR",
                             "GAME", "TERR", "GYM", "SPA", "POOL")),
        )
        self.register(ProgramPreset(
            tier="20k",
            label="20,000 SF",
            description="2-level | 8 bedrooms | expanded amenities | no basement",
            spaces=spaces,
            matrix=matrix,
            nodes=nodes,
            bridge_config=_ALL_BRIDGES,
        ))


# Global preset library instance
PRESET_LIBRARY = PresetLibrary()


def get_preset(tier: str) -> ProgramPreset:
    """Get the benchmark program for a tier ("5k", "10k", "15k", "20k")."""
    return PRESET_LIBRARY.get(tier)


def list_tiers() -> List[str]:
    return PRESET_LIBRARY.tiers()


def tier_for_area(target_sf: float) -> str:
    """
    Select the benchmark tier for a target gross area.

    Below 7,500 SF -> 5k; up to 12,500 -> 10k; up to 17,500 -> 15k;
    anything larger -> 20k.
    """
    if target_sf < 0:
        raise ProgramInputError(f"Target area must be non-negative, got {target_sf}")
    if target_sf < 7500:
        return "5k"
    if target_sf <= 12500:
        return "10k"
    if target_sf <= 17500:
        return "15k"
    return "20k"

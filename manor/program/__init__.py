"""
MANOR Program Module

Domain model for residential programs and the benchmark preset library.
"""

from .enums import (
    Relationship,
    AcousticZone,
    Severity,
    FlagClass,
    GateStatus,
    DetectionMode,
    Typology,
    EntertainingLoad,
    StaffingLevel,
    PrivacyPosture,
    WetProgram,
    BridgeType,
    BridgePresence,
    EdgeType,
    PathType,
    WallType,
    parse_enum,
)

from .schema import (
    Space,
    AdjacencyRequirement,
    CirculationNode,
    BridgeConfig,
    OperatingModel,
    LifestylePriorities,
    Room,
    PlanEdge,
    NamedPath,
    SharedWall,
    PlanGraph,
    ProgramState,
    lookup,
    strongest_relationship,
)

from .presets import (
    ProgramPreset,
    PresetLibrary,
    PRESET_LIBRARY,
    get_preset,
    list_tiers,
    tier_for_area,
)

__all__ = [
    # Enums
    "Relationship",
    "AcousticZone",
    "Severity",
    "FlagClass",
    "GateStatus",
    "DetectionMode",
    "Typology",
    "EntertainingLoad",
    "StaffingLevel",
    "PrivacyPosture",
    "WetProgram",
    "BridgeType",
    "BridgePresence",
    "EdgeType",
    "PathType",
    "WallType",
    "parse_enum",
    # Schema
    "Space",
    "AdjacencyRequirement",
    "CirculationNode",
    "BridgeConfig",
    "OperatingModel",
    "LifestylePriorities",
    "Room",
    "PlanEdge",
    "NamedPath",
    "SharedWall",
    "PlanGraph",
    "ProgramState",
    "lookup",
    "strongest_relationship",
    # Presets
    "ProgramPreset",
    "PresetLibrary",
    "PRESET_LIBRARY",
    "get_preset",
    "list_tiers",
    "tier_for_area",
]

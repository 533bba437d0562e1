"""
MANOR Validation Module

Adjacency validation and scoring: path-tracing red flag detection,
bridge requirements, per-module scoring and the validation gate.
"""

from .red_flags import (
    CheckKind,
    RedFlag,
    RedFlagRule,
    RuleHit,
    RED_FLAG_RULES,
    get_rule,
)

from .strategies import (
    RedFlagStrategy,
    MatrixStrategy,
    GraphStrategy,
)

from .detector import (
    DetectionResult,
    RedFlagDetector,
)

from .bridges import (
    RequiredBridge,
    BridgeRule,
    BRIDGE_RULES,
    detect_required_bridges,
)

from .scoring import (
    ModuleDefinition,
    ModuleRule,
    ModuleScore,
    ScoringPolicy,
    MODULES,
    MODULE_RULES,
    SPACE_MODULE_MAP,
    ModuleScorer,
    modules_for_flag,
    overall_score,
    determine_gate,
)

from .engine import (
    ValidationInput,
    ValidationResult,
    ValidationEngine,
    validate_program,
)

__all__ = [
    # Red flags
    "CheckKind",
    "RedFlag",
    "RedFlagRule",
    "RuleHit",
    "RED_FLAG_RULES",
    "get_rule",
    # Strategies
    "RedFlagStrategy",
    "MatrixStrategy",
    "GraphStrategy",
    # Detector
    "DetectionResult",
    "RedFlagDetector",
    # Bridges
    "RequiredBridge",
    "BridgeRule",
    "BRIDGE_RULES",
    "detect_required_bridges",
    # Scoring
    "ModuleDefinition",
    "ModuleRule",
    "ModuleScore",
    "ScoringPolicy",
    "MODULES",
    "MODULE_RULES",
    "SPACE_MODULE_MAP",
    "ModuleScorer",
    "modules_for_flag",
    "overall_score",
    "determine_gate",
    # Engine
    "ValidationInput",
    "ValidationResult",
    "ValidationEngine",
    "validate_program",
]

"""
MANOR Validation Engine (v1.0)

Central program validation: red flags, required bridges, module scores
and the gate, produced as one ValidationResult.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional
import logging

from ..errors import ProgramInputError
from ..program.enums import DetectionMode, GateStatus
from ..program.presets import get_preset
from ..program.schema import (
    BridgeConfig,
    LifestylePriorities,
    OperatingModel,
    PlanGraph,
    ProgramState,
)
from .bridges import RequiredBridge, detect_required_bridges
from .detector import RedFlagDetector
from .red_flags import RedFlag
from .scoring import ModuleScore, ModuleScorer, ScoringPolicy, determine_gate, overall_score

logger = logging.getLogger(__name__)


@dataclass
class ValidationInput:
    """Everything a validation run reads."""

    program: ProgramState
    operating_model: OperatingModel = field(default_factory=OperatingModel)
    lifestyle: LifestylePriorities = field(default_factory=LifestylePriorities)
    plan: Optional[PlanGraph] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ValidationInput":
        """
        Build from a request payload.

        The program comes from "program", or from the benchmark preset
        named by "tier". A top-level "bridge_config" (null included)
        replaces the program's own.
        """
        if data.get("program") is not None:
            program = ProgramState.from_dict(data["program"])
        elif data.get("tier"):
            program = ProgramState.from_preset(get_preset(data["tier"]))
        else:
            raise ProgramInputError("Payload needs a 'program' or a 'tier'")

        if "bridge_config" in data:
            bridges = data["bridge_config"]
            program.bridge_config = BridgeConfig.from_dict(bridges) if bridges is not None else None

        plan = data.get("plan")
        return cls(
            program=program,
            operating_model=OperatingModel.from_dict(data.get("operating_model") or {}),
            lifestyle=LifestylePriorities.from_dict(data.get("lifestyle") or {}),
            plan=PlanGraph.from_dict(plan) if plan else None,
        )


@dataclass
class ValidationResult:
    """Complete validation outcome. Recomputed on every run."""

    gate: GateStatus
    mode: DetectionMode
    overall_score: int
    red_flags: List[RedFlag] = field(default_factory=list)
    required_bridges: List[RequiredBridge] = field(default_factory=list)
    module_scores: List[ModuleScore] = field(default_factory=list)
    tier: Optional[str] = None
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def critical_flags(self) -> List[RedFlag]:
        return [f for f in self.red_flags if f.is_critical]

    @property
    def warning_flags(self) -> List[RedFlag]:
        return [f for f in self.red_flags if not f.is_critical]

    @property
    def missing_bridges(self) -> List[RequiredBridge]:
        return [b for b in self.required_bridges if not b.is_present]

    def module(self, module_id: str) -> Optional[ModuleScore]:
        for m in self.module_scores:
            if m.module_id == module_id:
                return m
        return None

    def flag(self, rule_id: str) -> Optional[RedFlag]:
        for f in self.red_flags:
            if f.rule_id == rule_id:
                return f
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "timestamp": self.timestamp,
            "tier": self.tier,
            "gate": self.gate.value,
            "mode": self.mode.value,
            "overall_score": self.overall_score,
            "summary": {
                "critical_count": len(self.critical_flags),
                "warning_count": len(self.warning_flags),
                "missing_bridges": [b.name for b in self.missing_bridges],
                "modules_passing": sum(1 for m in self.module_scores if m.passed),
            },
            "red_flags": [f.to_dict() for f in self.red_flags],
            "required_bridges": [b.to_dict() for b in self.required_bridges],
            "module_scores": [m.to_dict() for m in self.module_scores],
        }


class ValidationEngine:
    """
    Program validation engine.

    Coordinates red flag detection, bridge derivation, module scoring
    and gate determination. Holds no state between runs.
    """

    def __init__(
        self,
        policy: Optional[ScoringPolicy] = None,
        detector: Optional[RedFlagDetector] = None,
        assume_bridges_present: bool = False,
    ):
        """
        Initialize validation engine.

        Args:
            policy: Scoring policy (defaults to ScoringPolicy())
            detector: Red flag detector (defaults to the standard rule table)
            assume_bridges_present: Count bridges of unknown presence as present
        """
        self.policy = policy or ScoringPolicy()
        self.detector = detector or RedFlagDetector()
        self.scorer = ModuleScorer(self.policy)
        self.assume_bridges_present = assume_bridges_present

    def validate(self, request: ValidationInput) -> ValidationResult:
        """Validate a program and return the full result."""
        detection = self.detector.detect(
            request.program,
            plan=request.plan,
            operating_model=request.operating_model,
            lifestyle=request.lifestyle,
        )
        bridges = detect_required_bridges(
            request.operating_model,
            request.lifestyle,
            bridge_config=request.program.bridge_config,
            assume_present=self.assume_bridges_present,
        )
        scores = self.scorer.score(request.operating_model, request.lifestyle, detection.flags)
        overall = overall_score(scores)
        gate = determine_gate(detection.flags, bridges, overall, self.policy.threshold)

        logger.info(f"Validation {gate.value}: overall={overall}, "
                    f"flags={len(detection.flags)}, bridges={len(bridges)}")

        return ValidationResult(
            gate=gate,
            mode=detection.mode,
            overall_score=overall,
            red_flags=detection.flags,
            required_bridges=bridges,
            module_scores=scores,
            tier=request.program.tier,
        )


def validate_program(
    program: ProgramState,
    operating_model: Optional[OperatingModel] = None,
    lifestyle: Optional[LifestylePriorities] = None,
    plan: Optional[PlanGraph] = None,
    engine: Optional[ValidationEngine] = None,
) -> ValidationResult:
    """Validate with a default engine."""
    engine = engine or ValidationEngine()
    return engine.validate(ValidationInput(
        program=program,
        operating_model=operating_model or OperatingModel(),
        lifestyle=lifestyle or LifestylePriorities(),
        plan=plan,
    ))

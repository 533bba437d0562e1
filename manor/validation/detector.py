"""
MANOR Red Flag Detector (v1.0)

Runs the named red flag rules through the appropriate strategy and adds
matrix integrity, plan reference and operating model findings.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Sequence
import logging

from ..program.enums import DetectionMode, FlagClass, Severity
from ..program.schema import LifestylePriorities, OperatingModel, PlanGraph, ProgramState
from .heuristics import detect_heuristic_flags
from .matrix_checks import run_matrix_checks
from .plan_graph import find_reference_problems
from .red_flags import RED_FLAG_RULES, RedFlag, RedFlagRule
from .strategies import GraphStrategy, MatrixStrategy, RedFlagStrategy

logger = logging.getLogger(__name__)


@dataclass
class DetectionResult:
    mode: DetectionMode
    flags: List[RedFlag] = field(default_factory=list)

    @property
    def critical_count(self) -> int:
        return sum(1 for f in self.flags if f.is_critical)

    @property
    def warning_count(self) -> int:
        return sum(1 for f in self.flags if not f.is_critical)


class RedFlagDetector:
    """
    Path-tracing red flag detector.

    Graph mode is used whenever a non-empty plan is supplied; otherwise
    the matrix strategy answers the same rules. Each triggered rule
    yields exactly one flag, and repeated runs over the same input give
    the same flags in the same order.
    """

    def __init__(self, rules: Optional[Sequence[RedFlagRule]] = None):
        self.rules = tuple(rules) if rules is not None else RED_FLAG_RULES

    @staticmethod
    def select_strategy(
        program: ProgramState,
        plan: Optional[PlanGraph] = None,
    ) -> RedFlagStrategy:
        if plan is not None and not plan.is_empty:
            return GraphStrategy(plan, program)
        return MatrixStrategy(program)

    def detect(
        self,
        program: ProgramState,
        plan: Optional[PlanGraph] = None,
        operating_model: Optional[OperatingModel] = None,
        lifestyle: Optional[LifestylePriorities] = None,
    ) -> DetectionResult:
        strategy = self.select_strategy(program, plan)
        result = DetectionResult(mode=strategy.mode)

        if strategy.mode == DetectionMode.MATRIX and not program.spaces and not program.matrix:
            logger.debug("Empty program, no red flags to detect")
            return result

        flags: List[RedFlag] = []
        for rule in self.rules:
            hit = strategy.evaluate(rule)
            if hit is not None:
                flags.append(RedFlag.from_rule(rule, hit))

        if program.matrix:
            flags.extend(run_matrix_checks(program))

        if strategy.mode == DetectionMode.GRAPH:
            reference_flag = self._plan_reference_flag(plan, strategy)
            if reference_flag is not None:
                flags.append(reference_flag)

        if operating_model is not None:
            flags.extend(detect_heuristic_flags(
                operating_model, lifestyle or LifestylePriorities()
            ))

        # Critical first; otherwise keep rule-table order
        flags.sort(key=lambda f: 0 if f.is_critical else 1)
        result.flags = flags

        logger.info(f"Red flag detection ({result.mode.value}): "
                    f"{result.critical_count} critical, {result.warning_count} warning")
        return result

    @staticmethod
    def _plan_reference_flag(plan: PlanGraph, strategy: GraphStrategy) -> Optional[RedFlag]:
        problems = find_reference_problems(plan, strategy.graph)
        if not problems:
            return None
        logger.warning(f"Plan has {len(problems)} reference problem(s)")
        return RedFlag(
            flag_id="PLAN-REFERENCE",
            rule_id="PLAN-REFERENCE",
            name="Plan references unknown or disconnected rooms",
            severity=Severity.WARNING,
            flag_class=FlagClass.REFERENCE,
            description="; ".join(problems),
            corrective_action="Correct room ids in edges, shared walls and named paths",
        )

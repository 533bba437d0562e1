"""
validation/matrix_checks.py - Adjacency matrix integrity checks

Contradictory entries, separated pairs sharing a circulation node, and
entries naming spaces the program does not include.
"""

from __future__ import annotations
from typing import Dict, List, Set, Tuple
import logging

from ..program.enums import FlagClass, Relationship, Severity
from ..program.schema import ProgramState
from .red_flags import RedFlag

logger = logging.getLogger(__name__)


def _name(program: ProgramState, code: str) -> str:
    space = program.space(code)
    return space.name if space else code


def find_conflicts(program: ProgramState) -> List[RedFlag]:
    """Pairs carrying both Adjacent and Separated, in either direction."""
    by_pair: Dict[Tuple[str, str], Set[Relationship]] = {}
    for r in program.matrix:
        if r.from_code == r.to_code:
            continue
        by_pair.setdefault(r.pair, set()).add(r.relationship)

    flags = []
    for (a, b), rels in sorted(by_pair.items()):
        if not (Relationship.ADJACENT in rels and Relationship.SEPARATED in rels):
            continue
        found = " vs ".join(r.label for r in sorted(rels, reverse=True))
        flags.append(RedFlag(
            flag_id=f"ADJ-CONFLICT-{a}-{b}",
            rule_id="ADJ-CONFLICT",
            name="Conflicting adjacency requirements",
            severity=Severity.CRITICAL,
            flag_class=FlagClass.CONFLICT,
            description=f"Conflicting requirements: {_name(program, a)} and "
                        f"{_name(program, b)} have incompatible adjacency requirements "
                        f"({found})",
            affected_spaces=[_name(program, a), _name(program, b)],
            affected_codes=[a, b],
            corrective_action="Resolve the conflicting adjacency requirements in the program",
        ))
    return flags


def find_node_separations(program: ProgramState) -> List[RedFlag]:
    """Separated pairs grouped in the same circulation node."""
    flags = []
    seen = set()
    for node in sorted(program.nodes, key=lambda n: n.node_id):
        members = set(node.space_codes)
        for r in program.matrix:
            if r.relationship != Relationship.SEPARATED:
                continue
            if r.from_code not in members or r.to_code not in members:
                continue
            a, b = r.pair
            if (a, b) in seen:
                continue
            seen.add((a, b))
            flags.append(RedFlag(
                flag_id=f"ADJ-NODE-{a}-{b}",
                rule_id="ADJ-NODE",
                name="Separated spaces share a circulation node",
                severity=Severity.WARNING,
                flag_class=FlagClass.CONFLICT,
                description=f"{_name(program, a)} and {_name(program, b)} require separation "
                            f"but are grouped in the same circulation node ({node.name})",
                affected_spaces=[_name(program, a), _name(program, b)],
                affected_codes=[a, b],
                corrective_action="Consider relocating one space to a different circulation "
                                  "node or ensure adequate acoustic/visual buffering",
            ))
    return sorted(flags, key=lambda f: f.flag_id)


def find_missing_references(program: ProgramState) -> List[RedFlag]:
    """Matrix entries naming a space absent from a non-empty program."""
    if not program.spaces:
        return []
    codes = set(program.codes)
    flags: Dict[str, RedFlag] = {}
    for r in program.matrix:
        for present, missing in ((r.from_code, r.to_code), (r.to_code, r.from_code)):
            if missing in codes:
                continue
            a, b = r.pair
            flag_id = f"ADJ-MISSING-{a}-{b}"
            if flag_id in flags:
                continue
            if present in codes:
                description = (f"{_name(program, present)} requires "
                               f"{r.relationship.name.lower()} relationship to {missing} "
                               f"but that space is not included in the program")
            else:
                description = (f"Adjacency entry {r.from_code}-{r.to_code} names spaces "
                               f"that are not included in the program")
            flags[flag_id] = RedFlag(
                flag_id=flag_id,
                rule_id="ADJ-MISSING",
                name="Relationship references missing space",
                severity=Severity.WARNING,
                flag_class=FlagClass.REFERENCE,
                description=description,
                affected_spaces=[_name(program, c) for c in (a, b)],
                affected_codes=[a, b],
                corrective_action=f"Add {missing} to the program or remove the relationship",
            )
    if flags:
        logger.warning(f"{len(flags)} adjacency entries reference missing spaces")
    return [flags[k] for k in sorted(flags)]


def run_matrix_checks(program: ProgramState) -> List[RedFlag]:
    return (
        find_conflicts(program)
        + find_node_separations(program)
        + find_missing_references(program)
    )

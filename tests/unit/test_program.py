"""
tests/unit/test_program.py - Domain model and benchmark library tests
"""

import pytest

from manor.errors import InvalidEnumValueError, ProgramInputError, UnknownTierError
from manor.program.enums import AcousticZone, BridgeType, Relationship
from manor.program.presets import get_preset, list_tiers, tier_for_area
from manor.program.schema import (
    AdjacencyRequirement,
    BridgeConfig,
    CirculationNode,
    OperatingModel,
    PlanGraph,
    ProgramState,
    Space,
    lookup,
    strongest_relationship,
)


# =============================================================================
# RELATIONSHIP
# =============================================================================

class TestRelationship:
    """Tests for the relationship enumeration."""

    def test_strength_order(self):
        """Adjacent > Near > Buffered > Separated."""
        assert Relationship.ADJACENT > Relationship.NEAR > Relationship.BUFFERED > Relationship.SEPARATED
        assert sorted(Relationship, reverse=True)[0] == Relationship.ADJACENT

    def test_parse_letter_and_name(self):
        assert Relationship.parse("A") == Relationship.ADJACENT
        assert Relationship.parse("separated") == Relationship.SEPARATED
        assert Relationship.parse(Relationship.NEAR) == Relationship.NEAR

    def test_parse_rejects_unknown(self):
        with pytest.raises(InvalidEnumValueError) as exc:
            Relationship.parse("X")
        assert exc.value.details["allowed"] == ["A", "N", "B", "S"]

    def test_conflicts_with(self):
        assert Relationship.ADJACENT.conflicts_with(Relationship.SEPARATED)
        assert Relationship.SEPARATED.conflicts_with(Relationship.ADJACENT)
        assert not Relationship.ADJACENT.conflicts_with(Relationship.NEAR)

    def test_is_close(self):
        assert Relationship.NEAR.is_close
        assert not Relationship.BUFFERED.is_close


# =============================================================================
# SCHEMA
# =============================================================================

class TestSpace:
    """Tests for Space validation and serialization."""

    def test_negative_area_rejected(self):
        with pytest.raises(ProgramInputError):
            Space(code="KIT", name="Kitchen", target_sf=-1)

    def test_exterior_space_has_zero_area(self):
        terrace = Space(code="TERR", name="Terrace", target_sf=0)
        assert terrace.target_sf == 0

    def test_from_dict_parses_acoustic_zone(self):
        space = Space.from_dict({"code": "MEDIA", "name": "Media", "acoustic_zone": "zone_3"})
        assert space.acoustic_zone == AcousticZone.HIGH_NOISE
        assert Space.from_dict(space.to_dict()) == space


class TestProgramState:
    """Tests for the caller-owned working program."""

    def test_load_preset_replaces_everything(self, program_10k):
        """Loading a preset never merges with existing content."""
        program_10k.add_space(Space(code="EXTRA", name="Extra"))
        program_10k.load_preset(get_preset("5k"))
        assert program_10k.tier == "5k"
        assert program_10k.space("EXTRA") is None
        assert program_10k.codes == get_preset("5k").codes

    def test_remove_space_drops_relationships(self, program_10k):
        program_10k.remove_space("OFF")
        assert all(not r.involves("OFF") for r in program_10k.matrix)
        assert all("OFF" not in n.space_codes for n in program_10k.nodes)

    def test_add_duplicate_space_rejected(self, program_10k):
        with pytest.raises(ProgramInputError):
            program_10k.add_space(Space(code="KIT", name="Second kitchen"))

    def test_set_relationship_symmetric(self):
        program = ProgramState()
        program.set_relationship("KIT", "FR", Relationship.ADJACENT)
        program.set_relationship("KIT", "FR", Relationship.NEAR)
        assert len(program.matrix) == 2
        assert program.get_relationship("FR", "KIT") == Relationship.NEAR

    def test_bridge_config_is_copied_from_preset(self, program_10k):
        program_10k.bridge_config.butler_pantry = False
        assert get_preset("10k").bridge_config.butler_pantry is True

    def test_round_trip(self, program_10k):
        restored = ProgramState.from_dict(program_10k.to_dict())
        assert restored.matrix == program_10k.matrix
        assert restored.bridge_config == program_10k.bridge_config
        assert restored.total_sf == program_10k.total_sf

    def test_adjacency_entry_missing_field(self):
        with pytest.raises(ProgramInputError):
            AdjacencyRequirement.from_dict({"from": "KIT", "relationship": "A"})

    def test_space_entry_missing_code(self):
        with pytest.raises(ProgramInputError) as exc:
            ProgramState.from_dict({"spaces": [{"name": "Kitchen"}]})
        assert exc.value.http_status == 400

    def test_node_entry_missing_id(self):
        with pytest.raises(ProgramInputError):
            CirculationNode.from_dict({"name": "Family hub"})

    @pytest.mark.parametrize("plan", [
        {"rooms": [{"name": "Kitchen"}]},
        {"rooms": [{"id": "k"}], "edges": [{"from": "k"}]},
        {"paths": [{"rooms": ["k"]}]},
        {"shared_walls": [{"a": "k"}]},
    ])
    def test_plan_entry_missing_field(self, plan):
        with pytest.raises(ProgramInputError):
            PlanGraph.from_dict(plan)


class TestLookup:

    def test_forward_preferred_over_reverse(self):
        matrix = [
            AdjacencyRequirement("FR", "KIT", Relationship.NEAR),
            AdjacencyRequirement("KIT", "FR", Relationship.ADJACENT),
        ]
        assert lookup(matrix, "KIT", "FR") == Relationship.ADJACENT
        assert lookup(matrix, "FR", "KIT") == Relationship.NEAR

    def test_reverse_fallback(self):
        matrix = [AdjacencyRequirement("FR", "KIT", Relationship.NEAR)]
        assert lookup(matrix, "KIT", "FR") == Relationship.NEAR
        assert lookup(matrix, "KIT", "DR") is None

    def test_strongest_relationship_ignores_entry_order(self):
        entries = [
            AdjacencyRequirement("GUEST1", "PRI", Relationship.SEPARATED),
            AdjacencyRequirement("PRI", "GUEST1", Relationship.ADJACENT),
        ]
        for matrix in (entries, entries[::-1]):
            assert strongest_relationship(matrix, "GUEST1", "PRI") == Relationship.ADJACENT
            assert strongest_relationship(matrix, "PRI", "GUEST1") == Relationship.ADJACENT
        assert strongest_relationship(entries, "PRI", "KIT") is None


class TestOperatingContext:

    def test_operating_model_defaults(self):
        om = OperatingModel.from_dict({})
        assert om == OperatingModel()

    def test_operating_model_accepts_names(self):
        om = OperatingModel.from_dict({"staffing": "live-in", "wet_program": "POOL_SPA"})
        assert om.staffing.value == "live_in"
        assert om.wet_program.value == "pool_spa"

    def test_bridge_config_round_trip(self):
        config = BridgeConfig(sound_lock=True)
        assert config.includes(BridgeType.SOUND_LOCK)
        assert not config.includes(BridgeType.OPS_CORE)
        assert BridgeConfig.from_dict(config.to_dict()) == config

    def test_plan_graph_from_dict(self):
        plan = PlanGraph.from_dict({
            "rooms": [{"id": "r1", "name": "Foyer"}, {"id": "r2", "name": "Kitchen"}],
            "edges": [{"from": "r1", "to": "r2", "type": "opening"}],
            "paths": [{"type": "guest_circulation", "rooms": ["r1", "r2"]}],
            "shared_walls": [{"a": "r1", "b": "r2", "type": "floor_ceiling"}],
        })
        assert not plan.is_empty
        assert plan.room("r2").name == "Kitchen"
        assert plan.paths[0].path_id == "guest_circulation"


# =============================================================================
# PRESETS
# =============================================================================

class TestPresets:
    """Tests for the benchmark library."""

    def test_four_tiers(self):
        assert list_tiers() == ["5k", "10k", "15k", "20k"]

    def test_unknown_tier(self):
        with pytest.raises(UnknownTierError) as exc:
            get_preset("30k")
        assert exc.value.http_status == 404
        assert "10k" in exc.value.details["available"]

    @pytest.mark.parametrize("tier", ["5k", "10k", "15k", "20k"])
    def test_preset_integrity(self, tier):
        """Every matrix entry and node member names a space of the preset."""
        preset = get_preset(tier)
        codes = set(preset.codes)
        assert len(codes) == len(preset.spaces)
        for entry in preset.matrix:
            assert entry.from_code in codes and entry.to_code in codes
        for node in preset.nodes:
            assert set(node.space_codes) <= codes

    def test_preset_sizes_increase(self):
        totals = [get_preset(t).total_sf for t in list_tiers()]
        assert totals == sorted(totals)

    @pytest.mark.parametrize("sf,tier", [
        (0, "5k"),
        (7499, "5k"),
        (7500, "10k"),
        (12500, "10k"),
        (12501, "15k"),
        (17500, "15k"),
        (17501, "20k"),
        (40000, "20k"),
    ])
    def test_tier_for_area(self, sf, tier):
        assert tier_for_area(sf) == tier

    def test_tier_for_negative_area(self):
        with pytest.raises(ProgramInputError):
            tier_for_area(-5)

    def test_nodes_are_circulation_nodes(self):
        assert all(isinstance(n, CirculationNode) for n in get_preset("20k").nodes)

"""Unit tests for the validation stage."""
import pytest

from ratecon.core.errors import ValidationError
from ratecon.core.extraction_schema import StopType
from ratecon.extraction.validation import validate_record


class TestShape:
    def test_valid_payload(self):
        record, warnings = validate_record({"reference": "L-1", "origin": "Chicago, IL"})
        assert record.reference == "L-1"
        assert warnings == []

    def test_unknown_keys_ignored(self):
        record, _ = validate_record({"reference": "L-1", "broker_mc": "MC123"})
        assert not hasattr(record, "broker_mc")

    def test_pickup_address_not_object_raises(self):
        with pytest.raises(ValidationError) as exc:
            validate_record({"pickup_address": ["100 Main St"]})
        assert any(e.startswith("pickup_address") for e in exc.value.errors)
        assert exc.value.stage == "validate"

    def test_stops_not_list_raises(self):
        with pytest.raises(ValidationError):
            validate_record({"stops": "PU then DEL"})

    def test_unknown_stop_type_raises(self):
        with pytest.raises(ValidationError):
            validate_record({"stops": [{"sequence": 1, "type": "LAYOVER"}]})

    def test_non_integer_sequence_raises(self):
        with pytest.raises(ValidationError):
            validate_record({"stops": [{"sequence": "first", "type": "PICKUP"}]})

    def test_null_stops_is_empty(self):
        record, _ = validate_record({"stops": None})
        assert record.stops == []


class TestCoercion:
    def test_numbers_become_strings(self):
        record, _ = validate_record({"rate": 2450.5, "pieces": 26, "reference": 448120})
        assert record.rate == "2450.5"
        assert record.pieces == "26"
        assert record.reference == "448120"

    def test_blank_strings_become_none(self):
        record, _ = validate_record({"commodity": "   "})
        assert record.commodity is None

    def test_list_of_lines_joined(self):
        record, _ = validate_record({
            "special_instructions": ["Tarps", " Straps ", None, ""],
            "commodity": [],
        })
        assert record.special_instructions == "Tarps, Straps"
        assert record.commodity is None

    def test_list_of_objects_in_text_field_raises(self):
        with pytest.raises(ValidationError):
            validate_record({"special_instructions": [{"note": "Tarps"}]})

    def test_large_float_kept_positional(self):
        record, _ = validate_record({"rate": 1e16})
        assert record.rate == "10000000000000000"

    def test_stop_type_aliases(self):
        record, _ = validate_record({"stops": [
            {"sequence": 1, "type": "pu"},
            {"sequence": 2, "type": "Drop"},
        ]})
        assert [s.type for s in record.stops] == [StopType.PICKUP, StopType.DELIVERY]


class TestEquipment:
    def test_keyword_coerced_to_enum(self):
        record, warnings = validate_record({"equipment_type": "REEFER UNIT"})
        assert record.equipment_type == "REEFER"
        assert warnings == []

    def test_unmatched_dropped_with_warning(self):
        record, warnings = validate_record({"equipment_type": "hotshot"})
        assert record.equipment_type is None
        assert any("hotshot" in w for w in warnings)


class TestStates:
    def test_two_letter_state_uppercased(self):
        record, _ = validate_record({"origin_state": "il", "pickup_address": {"state": "Ca."}})
        assert record.origin_state == "IL"
        assert record.pickup_address.state == "CA"

    def test_full_state_name_dropped(self):
        record, warnings = validate_record({"destination_state": "Texas"})
        assert record.destination_state is None
        assert any("destination_state" in w for w in warnings)

    def test_address_state_dropped(self):
        record, warnings = validate_record({"delivery_address": {"city": "Reno", "state": "Nevada"}})
        assert record.delivery_address.city == "Reno"
        assert record.delivery_address.state is None
        assert len(warnings) == 1


class TestStops:
    def test_sorted_by_sequence(self):
        record, warnings = validate_record({"stops": [
            {"sequence": 2, "type": "DELIVERY", "city": "Reno"},
            {"sequence": 1, "type": "PICKUP", "city": "Hollister"},
        ]})
        assert [s.city for s in record.stops] == ["Hollister", "Reno"]
        assert [s.sequence for s in record.stops] == [1, 2]
        assert warnings == []

    def test_gaps_renumbered_with_warning(self):
        record, warnings = validate_record({"stops": [
            {"sequence": 10, "type": "PICKUP"},
            {"sequence": 30, "type": "DELIVERY"},
            {"sequence": 20, "type": "STOP"},
        ]})
        assert [s.sequence for s in record.stops] == [1, 2, 3]
        assert [s.type for s in record.stops] == [StopType.PICKUP, StopType.STOP, StopType.DELIVERY]
        assert any("Renumbered" in w for w in warnings)

    def test_missing_sequence_uses_position(self):
        record, warnings = validate_record({"stops": [
            {"type": "PICKUP", "city": "A"},
            {"type": "DELIVERY", "city": "B"},
        ]})
        assert [s.city for s in record.stops] == ["A", "B"]
        assert [s.sequence for s in record.stops] == [1, 2]
        assert any("Renumbered" in w for w in warnings)

    def test_stop_state_cleaned(self):
        record, warnings = validate_record({"stops": [{"sequence": 1, "type": "PICKUP", "state": "California"}]})
        assert record.stops[0].state is None
        assert len(warnings) == 1

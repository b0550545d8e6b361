"""Unit tests for equipment keyword mapping."""
import pytest

from ratecon.core.extraction_schema import EquipmentType
from ratecon.extraction.equipment import equipment_code, map_equipment


class TestMapEquipment:
    @pytest.mark.parametrize("raw, label", [
        ("REEFER UNIT", "Reefer"),
        ("REEFER", "Reefer"),
        ("53' Reefer Van", "Reefer"),
        ("DRY_VAN", "Dry Van"),
        ("53ft dry van", "Dry Van"),
        ("FLATBED", "Flatbed"),
        ("Flat Bed 48'", "Flatbed"),
        ("STEP_DECK", "Step Deck"),
        ("drop deck", "Step Deck"),
        ("LOWBOY", "Lowboy"),
        ("POWER_ONLY", "Power Only"),
        ("BOX_TRUCK", "Box Truck"),
        ("26' straight truck", "Box Truck"),
        ("OTHER", "Other"),
    ])
    def test_keyword_labels(self, raw, label):
        assert map_equipment(raw) == label

    def test_unknown_code_is_blank(self):
        assert map_equipment("UNKNOWN_CODE") == ""

    def test_none_is_blank(self):
        assert map_equipment(None) == ""
        assert map_equipment("") == ""


class TestEquipmentCode:
    def test_returns_enum(self):
        assert equipment_code("Reefer") is EquipmentType.REEFER

    def test_enum_values_map_to_themselves(self):
        for code in EquipmentType:
            assert equipment_code(code.value) is code

    def test_no_match_is_none(self):
        assert equipment_code("hotshot") is None

"""
Alias resolution across the long-form and shapefile-truncated schemas.
"""

import pytest

from site_fields import FIELD_ALIASES, MISSING, is_blank, resolve_attribute, resolve_field, resolve_site

CLOSURE = ["CLOSURE_IND", "CLOSR_IND"]


class TestResolveField:
    def test_lowercase_short_form_key(self):
        assert resolve_field({"closr_ind": "Y"}, CLOSURE) == "Y"

    def test_first_candidate_wins(self):
        assert resolve_field({"CLOSR_IND": "N", "CLOSURE_IND": "Y"}, CLOSURE) == "Y"

    def test_exact_beats_case_insensitive_within_candidate(self):
        props = {"closure_ind": "lower", "CLOSURE_IND": "exact"}
        assert resolve_field(props, CLOSURE) == "exact"

    def test_first_candidate_any_case_beats_second_candidate(self):
        props = {"CLOSR_IND": "short", "closure_ind": "long"}
        assert resolve_field(props, CLOSURE) == "long"

    def test_none_falls_through_to_next_candidate(self):
        assert resolve_field({"CLOSURE_IND": None, "CLOSR_IND": "Y"}, CLOSURE) == "Y"

    def test_zero_is_a_value(self):
        value = resolve_field({"DFND_CAMP": 0}, ["DEFINED_CAMPSITES", "DFND_CAMP"])
        assert value == 0
        assert value is not MISSING

    def test_empty_string_is_a_value(self):
        assert resolve_field({"CLOSURE_IND": ""}, CLOSURE) == ""

    def test_missing_when_nothing_matches(self):
        assert resolve_field({"OTHER": 1}, CLOSURE) is MISSING

    def test_missing_for_non_mapping(self):
        assert resolve_field(None, CLOSURE) is MISSING
        assert resolve_field(["CLOSURE_IND"], CLOSURE) is MISSING

    def test_missing_for_no_candidates(self):
        assert resolve_field({"CLOSURE_IND": "Y"}, []) is MISSING


class TestMissingSentinel:
    def test_is_falsy_but_distinct(self):
        assert not MISSING
        assert MISSING is not None
        assert MISSING != 0
        assert MISSING != ""

    def test_repr(self):
        assert repr(MISSING) == "MISSING"


class TestResolveSite:
    def test_has_every_attribute(self):
        site = resolve_site({})
        assert set(site) == set(FIELD_ALIASES)
        assert all(v is MISSING for v in site.values())

    def test_mixed_schemas(self):
        site = resolve_site({"PROJECT_NM": "Kettle River", "site_location": "Near Rock Creek", "F_FILE_ID": "REC5810"})
        assert site["name"] == "Kettle River"
        assert site["location"] == "Near Rock Creek"
        assert site["site_id"] == "REC5810"
        assert site["closure_ind"] is MISSING

    def test_unknown_attribute_raises(self):
        with pytest.raises(KeyError):
            resolve_attribute({}, "elevation")

    def test_coordinate_aliases(self):
        assert resolve_attribute({"lat": 49.5}, "latitude") == 49.5


class TestIsBlank:
    @pytest.mark.parametrize("value", [MISSING, None, "", "   ", float("nan")])
    def test_blank(self, value):
        assert is_blank(value)

    @pytest.mark.parametrize("value", [0, "0", "x", 0.0])
    def test_not_blank(self, value):
        assert not is_blank(value)

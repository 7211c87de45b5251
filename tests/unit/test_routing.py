"""Unit tests for DestinationRouter and the pure resolution functions."""

from __future__ import annotations

import copy
import logging
import pickle

import pytest

from visionsink.errors import MalformedRoutingKeyError, UnknownSchemaError, VisionSinkError
from visionsink.models.destinations import DestinationConfig
from visionsink.routing.destinations import (
    DestinationRouter,
    RoutedRow,
    schema_for,
    schema_suffix,
    table_destination_for,
    table_spec_for,
)
from visionsink.schemas import LABEL_ANNOTATION_SCHEMA, SCHEMAS


# ---------------------------------------------------------------------------
# Test: table naming
# ---------------------------------------------------------------------------


class TestTableSpec:
    @pytest.mark.parametrize(
        "key",
        ["LABEL_ANNOTATION", "FACE_ANNOTATION", "UNKNOWN_TYPE", "custom_table-1"],
    )
    def test_format(self, config, key):
        assert table_spec_for(config, key) == f"proj1:ds1.{key}"

    def test_empty_key_is_malformed(self, config):
        with pytest.raises(MalformedRoutingKeyError):
            table_spec_for(config, "")

    def test_description_is_fixed_literal(self, config):
        for key in ["LABEL_ANNOTATION", "UNKNOWN_TYPE"]:
            dest = table_destination_for(config, table_spec_for(config, key))
            assert dest.description == "vision api data from dataflow"

    def test_custom_description(self):
        config = DestinationConfig(
            project_id="proj1", dataset_id="ds1", table_description="nightly batch"
        )
        assert table_destination_for(config, "proj1:ds1.X").description == "nightly batch"


# ---------------------------------------------------------------------------
# Test: suffix extraction
# ---------------------------------------------------------------------------


class TestSchemaSuffix:
    def test_suffix_after_dataset(self):
        assert schema_suffix("proj1:ds1.LOGO_ANNOTATION") == "LOGO_ANNOTATION"

    def test_domain_scoped_project(self):
        assert schema_suffix("example.com:proj1:ds1.IMAGE_PROPERTIES") == "IMAGE_PROPERTIES"

    def test_everything_after_first_dot(self):
        assert schema_suffix("proj1:ds1.LABEL_ANNOTATION.v2") == "LABEL_ANNOTATION.v2"

    @pytest.mark.parametrize("spec", ["proj1:ds1", "proj1:ds1.", "ds1"])
    def test_missing_suffix_is_malformed(self, spec):
        with pytest.raises(MalformedRoutingKeyError):
            schema_suffix(spec)

    def test_malformed_is_a_value_error(self):
        with pytest.raises(ValueError):
            schema_suffix("no-separator")


# ---------------------------------------------------------------------------
# Test: schema selection
# ---------------------------------------------------------------------------


class TestSchemaFor:
    @pytest.mark.parametrize("suffix", sorted(SCHEMAS))
    def test_known_suffix_exact_schema(self, config, suffix):
        assert schema_for(config, f"proj1:ds1.{suffix}") == SCHEMAS[suffix]

    def test_unknown_suffix_falls_back_to_label(self, config):
        assert schema_for(config, "proj1:ds1.UNKNOWN_TYPE") == LABEL_ANNOTATION_SCHEMA

    def test_fallback_is_logged_as_warning(self, config, caplog):
        with caplog.at_level(logging.WARNING, logger="visionsink"):
            schema_for(config, "proj1:ds1.UNKNOWN_TYPE")
        assert "UNKNOWN_TYPE" in caplog.text

    def test_lowercase_suffix_is_unknown(self, strict_config):
        with pytest.raises(UnknownSchemaError):
            schema_for(strict_config, "proj1:ds1.label_annotation")

    def test_strict_policy_raises(self, strict_config):
        with pytest.raises(UnknownSchemaError) as excinfo:
            schema_for(strict_config, "proj1:ds1.UNKNOWN_TYPE")
        assert excinfo.value.suffix == "UNKNOWN_TYPE"
        assert excinfo.value.table_spec == "proj1:ds1.UNKNOWN_TYPE"
        assert isinstance(excinfo.value, VisionSinkError)

    def test_strict_policy_known_suffix_ok(self, strict_config):
        assert schema_for(strict_config, "proj1:ds1.FACE_ANNOTATION") == SCHEMAS["FACE_ANNOTATION"]

    def test_malformed_spec_raises_not_defaults(self, config):
        with pytest.raises(MalformedRoutingKeyError):
            schema_for(config, "proj1:ds1")

    def test_debug_logs_resolution(self, config, caplog):
        with caplog.at_level(logging.DEBUG, logger="visionsink"):
            schema_for(config, "proj1:ds1.LOGO_ANNOTATION")
        assert "Table Key LOGO_ANNOTATION" in caplog.text
        assert "Schema" in caplog.text


# ---------------------------------------------------------------------------
# Test: DestinationRouter
# ---------------------------------------------------------------------------


class TestDestinationRouter:
    def test_label_scenario(self, router):
        resolved = router.resolve("LABEL_ANNOTATION")
        assert resolved.table_spec == "proj1:ds1.LABEL_ANNOTATION"
        assert resolved.table_schema == LABEL_ANNOTATION_SCHEMA
        assert resolved.schema_known is True

    def test_unknown_scenario(self, router):
        resolved = router.resolve("UNKNOWN_TYPE")
        assert resolved.table_spec == "proj1:ds1.UNKNOWN_TYPE"
        assert resolved.suffix == "UNKNOWN_TYPE"
        assert resolved.table_schema == LABEL_ANNOTATION_SCHEMA
        assert resolved.schema_known is False

    def test_resolution_is_idempotent(self, router):
        first = router.resolve("LANDMARK_ANNOTATION")
        second = router.resolve("LANDMARK_ANNOTATION")
        assert first == second

    def test_route_keeps_record_unchanged(self, router, make_row):
        row = make_row()
        original = copy.deepcopy(row)
        routed = router.route("LABEL_ANNOTATION", row)
        assert routed == original
        assert row == original
        assert "table_spec" not in routed
        assert routed.table_spec == "proj1:ds1.LABEL_ANNOTATION"

    def test_table_for_reads_bound_destination(self, router, make_row):
        routed = router.route("CROP_HINTS_ANNOTATION", make_row())
        assert router.table_for(routed) == "proj1:ds1.CROP_HINTS_ANNOTATION"

    def test_table_properties_carry_description(self, router):
        assert router.table_properties() == {"description": "vision api data from dataflow"}

    def test_table_properties_follow_config(self):
        config = DestinationConfig(
            project_id="proj1", dataset_id="ds1", table_description="nightly batch"
        )
        assert DestinationRouter(config).table_properties() == {"description": "nightly batch"}

    def test_description_for(self, router):
        assert router.description_for("proj1:ds1.X") == "vision api data from dataflow"

    def test_route_empty_key_raises(self, router, make_row):
        with pytest.raises(MalformedRoutingKeyError):
            router.route("", make_row())

    def test_router_exposes_config(self, router, config):
        assert router.config is config


class TestRoutedRow:
    def test_pickle_round_trip_keeps_destination(self, make_row):
        routed = RoutedRow(make_row(), "proj1:ds1.LOGO_ANNOTATION")
        restored = pickle.loads(pickle.dumps(routed))
        assert restored == routed
        assert restored.table_spec == "proj1:ds1.LOGO_ANNOTATION"

    def test_is_a_plain_mapping(self, make_row):
        routed = RoutedRow(make_row(), "p:d.K")
        assert isinstance(routed, dict)
        assert dict(routed) == make_row()

"""
Tests for Parcel's JSON reporter configuration.
"""

import json

import pytest

from zephyr_codemod.catalog import BUNDLER_CONFIGS, TransformType
from zephyr_codemod.exceptions import UnsupportedShape
from zephyr_codemod.mutation import apply_transform
from zephyr_codemod.mutation.parcel import dump_json_config

PARCEL = BUNDLER_CONFIGS["parcel"]


def test_reporter_appended():
    document = {"reporters": ["@parcel/reporter-dev-server"]}
    apply_transform(document, TransformType.PARCEL_REPORTERS, PARCEL)
    assert document["reporters"] == ["@parcel/reporter-dev-server", "parcel-reporter-zephyr"]


def test_missing_reporters_keeps_inherited():
    document = {"extends": "@parcel/config-default"}
    apply_transform(document, TransformType.PARCEL_REPORTERS, PARCEL)
    assert document == {
        "extends": "@parcel/config-default",
        "reporters": ["...", "parcel-reporter-zephyr"],
    }


def test_reporter_not_duplicated():
    document = {"reporters": ["parcel-reporter-zephyr"]}
    apply_transform(document, TransformType.PARCEL_REPORTERS, PARCEL)
    assert document["reporters"] == ["parcel-reporter-zephyr"]


def test_reporters_must_be_a_list():
    with pytest.raises(UnsupportedShape) as exc_info:
        apply_transform({"reporters": "oops"}, TransformType.PARCEL_REPORTERS, PARCEL)
    assert exc_info.value.shape == "parcel_reporters"


def test_dump_json_config():
    text = dump_json_config({"extends": "@parcel/config-default", "reporters": ["..."]})
    assert text == '{\n  "extends": "@parcel/config-default",\n  "reporters": [\n    "..."\n  ]\n}\n'
    assert json.loads(text)["reporters"] == ["..."]

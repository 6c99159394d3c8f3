"""
Lenient parsing of raw settings payloads.
"""

import logging

from treegen.services.settings_provider import parse_settings
from treegen.services.tree_types import DEFAULT_SETTINGS, GenerationSettings, TreeType


def test_no_payload_means_no_settings():
    assert parse_settings(None) is None


def test_empty_payload_means_defaults():
    assert parse_settings({}) == DEFAULT_SETTINGS


def test_full_camel_case_payload():
    settings = parse_settings(
        {
            "treeType": "SINGLE_ELIMINATION",
            "hasPreliminary": True,
            "preliminaryGroupSize": 3,
            "advancingPerGroup": 2,
        }
    )
    assert settings == GenerationSettings(
        tree_type=TreeType.SINGLE_ELIMINATION,
        has_preliminary=True,
        preliminary_group_size=3,
        advancing_per_group=2,
    )


def test_snake_case_keys_and_json_string():
    settings = parse_settings('{"tree_type": "single-elimination", "has_preliminary": true}')
    assert settings.tree_type == TreeType.SINGLE_ELIMINATION
    assert settings.has_preliminary is True
    assert settings.preliminary_group_size == DEFAULT_SETTINGS.preliminary_group_size


def test_tree_type_is_normalized():
    assert parse_settings({"treeType": " play off "}).tree_type == TreeType.PLAY_OFF


def test_unknown_keys_are_dropped():
    assert parse_settings({"fightDuration": 3, "hasEncho": True}) == DEFAULT_SETTINGS


def test_malformed_fields_fall_back_individually(caplog):
    with caplog.at_level(logging.WARNING, logger="treegen.services.settings_provider"):
        settings = parse_settings(
            {
                "treeType": "ROUND_ROBIN",
                "hasPreliminary": True,
                "preliminaryGroupSize": "many",
                "advancingPerGroup": 0,
            }
        )

    assert settings == GenerationSettings(
        tree_type=None,
        has_preliminary=True,
        preliminary_group_size=DEFAULT_SETTINGS.preliminary_group_size,
        advancing_per_group=DEFAULT_SETTINGS.advancing_per_group,
    )
    assert "malformed settings fields" in caplog.text


def test_group_size_below_one_is_passed_through():
    assert parse_settings({"hasPreliminary": False, "preliminaryGroupSize": 0}).preliminary_group_size == 0


def test_unreadable_json_uses_defaults(caplog):
    with caplog.at_level(logging.WARNING, logger="treegen.services.settings_provider"):
        assert parse_settings("{not json") == DEFAULT_SETTINGS
    assert "Unreadable settings payload" in caplog.text


def test_non_object_payload_uses_defaults():
    assert parse_settings(["SINGLE_ELIMINATION"]) == DEFAULT_SETTINGS
    assert parse_settings("42") == DEFAULT_SETTINGS


def test_unrecognized_tree_type_stays_unmatched():
    assert parse_settings({"treeType": "DOUBLE_ELIMINATION"}).tree_type is None
    assert parse_settings({"treeType": None}).tree_type is None


def test_absent_tree_type_is_the_default():
    assert parse_settings({"hasPreliminary": True}).tree_type == DEFAULT_SETTINGS.tree_type

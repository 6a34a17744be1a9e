"""
Unit tests for the access classifier.
"""

import itertools

import pytest

from atlas_access.classifier import classify, partition
from atlas_access.models import Classification, MapConfig, SharingResult


PUBLIC = SharingResult(is_public=True, access="public")
NOT_PUBLIC = SharingResult(is_public=False, error="You do not have permissions")


# ── Tests: classify ──────────────────────────────────────────────────

def test_public_on_platform_and_in_config_is_effectively_public():
    m = MapConfig(name="A", item_id="x1", access="public")
    assert classify(m, PUBLIC) is Classification.EFFECTIVELY_PUBLIC


def test_admin_override_to_private_is_config_restricted():
    m = MapConfig(name="A", item_id="x1", access="private")
    assert classify(m, PUBLIC) is Classification.CONFIG_RESTRICTED


@pytest.mark.parametrize("access", ["public", "private"])
def test_platform_denial_wins_over_config_flag(access):
    m = MapConfig(name="B", item_id="x2", access=access)
    assert classify(m, NOT_PUBLIC) is Classification.PLATFORM_RESTRICTED


def test_missing_sharing_result_is_platform_restricted():
    m = MapConfig(name="B", item_id="x2")
    assert classify(m, None) is Classification.PLATFORM_RESTRICTED


@pytest.mark.parametrize("item_id", [None, "", "   ", "../etc/passwd", "abc?token=1"])
def test_map_without_usable_item_id_is_config_restricted(item_id):
    m = MapConfig(name="C", item_id=item_id)
    assert m.item_id is None
    assert classify(m, PUBLIC) is Classification.CONFIG_RESTRICTED
    assert classify(m, None) is Classification.CONFIG_RESTRICTED


def test_classify_is_total():
    sharing_options = [None, PUBLIC, NOT_PUBLIC]
    for item_id, access, sharing in itertools.product(["x1", None], ["public", "private"], sharing_options):
        result = classify(MapConfig(name="M", item_id=item_id, access=access), sharing)
        assert result in set(Classification)


# ── Tests: partition ─────────────────────────────────────────────────

def test_partition_keeps_input_order_within_buckets():
    maps = [
        MapConfig(name="p1", item_id="a"),
        MapConfig(name="r1", item_id="b"),
        MapConfig(name="c1", item_id="c", access="private"),
        MapConfig(name="p2", item_id="d"),
        MapConfig(name="c2"),
        MapConfig(name="r2", item_id="e"),
    ]
    sharing = {"a": PUBLIC, "b": NOT_PUBLIC, "c": PUBLIC, "d": PUBLIC}

    buckets = partition(maps, sharing)

    assert [m.name for m in buckets[Classification.EFFECTIVELY_PUBLIC]] == ["p1", "p2"]
    assert [m.name for m in buckets[Classification.CONFIG_RESTRICTED]] == ["c1", "c2"]
    assert [m.name for m in buckets[Classification.PLATFORM_RESTRICTED]] == ["r1", "r2"]


def test_partition_empty():
    buckets = partition([], {})
    assert all(not v for v in buckets.values())
    assert set(buckets) == set(Classification)

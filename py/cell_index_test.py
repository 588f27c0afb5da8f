#
# created by:
#   @author: vlv-squid
#   @date: 2025-07-28
#

import random

import pytest

import cells
from cell_index import CellBitmapIndex


@pytest.fixture
def cell_index():
    return CellBitmapIndex(9, 12)


def _total(cell_index):
    return sum(len(b) for b in cell_index.cell_map.values())


def test_insert_fills_every_level(cell_index):
    cell_index.insert((10.0, 10.0), 1)

    leaf = cells.degrees_to_cell(10.0, 10.0)
    for level in range(9, 13):
        assert 1 in cell_index.bitmap(cells.ancestor(leaf, level))
    assert len(cell_index) == 4


def test_insert_is_idempotent(cell_index):
    cell_index.insert((10.0, 10.0), 1)
    before = _total(cell_index)
    cell_index.insert((10.0, 10.0), 1)
    assert _total(cell_index) == before
    assert len(cell_index) == 4


def test_levels_outside_range_not_indexed(cell_index):
    cell_index.insert((10.0, 10.0), 1)
    leaf = cells.degrees_to_cell(10.0, 10.0)
    assert cells.ancestor(leaf, 8) not in cell_index
    assert cells.ancestor(leaf, 13) not in cell_index


def test_bitmap_of_absent_cell_is_empty(cell_index):
    assert cell_index.bitmap(cells.degrees_to_cell(1.0, 1.0)) == frozenset()


def test_within_zero_radius_finds_point(cell_index):
    cell_index.insert((10.0, 10.0), 1)
    assert 1 in cell_index.within_radius((10.0, 10.0), 0, 8)


def test_within_radius(cell_index):
    cell_index.insert((10.0, 10.0), 1)
    cell_index.insert((10.001, 10.001), 2)
    cell_index.insert((20.0, 20.0), 3)

    result = cell_index.within_radius((10.0, 10.0), 5, 8)
    assert {1, 2} <= result
    assert 3 not in result


def test_within_radius_empty_index(cell_index):
    assert cell_index.within_radius((10.0, 10.0), 5, 8) == set()


def test_within_negative_radius(cell_index):
    cell_index.insert((10.0, 10.0), 1)
    assert cell_index.within_radius((10.0, 10.0), -1, 8) == set()


def test_result_is_a_copy(cell_index):
    cell_index.insert((10.0, 10.0), 1)
    result = cell_index.within_radius((10.0, 10.0), 0, 8)
    result.add(99)
    assert 99 not in cell_index.within_radius((10.0, 10.0), 0, 8)


@pytest.mark.parametrize("feature_id", [-1, 2**32, 1.5, "1"])
def test_invalid_feature_id(cell_index, feature_id):
    with pytest.raises(ValueError):
        cell_index.insert((10.0, 10.0), feature_id)


def test_level_invariant_random_points(cell_index):
    rng = random.Random(7)
    points = [(rng.uniform(-60, 60), rng.uniform(-180, 180), i)
              for i in range(40)]
    leaves = {}
    for lat, lon, fid in points:
        cell_index.insert((lat, lon), fid)
        leaves[fid] = cells.degrees_to_cell(lat, lon)
    before = _total(cell_index)

    for lat, lon, fid in points:
        cell_index.insert((lat, lon), fid)
        for level in range(9, 13):
            cell = cells.ancestor(leaves[fid], level)
            assert cells.contains(cell, leaves[fid])
            assert fid in cell_index.bitmap(cell)
    assert _total(cell_index) == before

    # 每个单元格只登记落在其中的点
    for cell, bitmap in cell_index.cell_map.items():
        assert 9 <= cells.cell_level(cell) <= 12
        for fid in bitmap:
            assert cells.contains(cell, leaves[fid])


def test_within_radius_converts_km(cell_index):
    radius_km = 50
    radius_deg = radius_km / 111.0
    cell_index.insert((10.0 + 0.9 * radius_deg, 10.0), 1)
    cell_index.insert((10.0, 10.0 - 0.9 * radius_deg), 2)
    cell_index.insert((10.0 + 3 * radius_deg, 10.0), 3)
    cell_index.insert((10.0, 10.0 + 3 * radius_deg), 4)

    result = cell_index.within_radius((10.0, 10.0), radius_km, 8)
    assert {1, 2} <= result
    assert not {3, 4} & result


@pytest.mark.parametrize("radius_km", [0, 1, 5])
def test_within_radius_covering_budget(monkeypatch, cell_index,
                                       radius_km):
    seen = []
    cap_covering = cells.cap_covering

    def recording(*args):
        covering = cap_covering(*args)
        seen.append(covering)
        return covering

    monkeypatch.setattr(cells, "cap_covering", recording)
    cell_index.within_radius((10.0, 10.0), radius_km, 8)
    assert len(seen) == 1
    assert 0 < len(seen[0]) <= 8

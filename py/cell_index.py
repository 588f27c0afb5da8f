# cell_index.py
# created by:
#   @author: vlv-squid
#   @date: 2025-07-28
#

import logging

import cells
from index_base import KM_PER_DEGREE, check_feature_id, km_to_degrees

logger = logging.getLogger(__name__)

_EMPTY = frozenset()


class CellBitmapIndex:
    """
    多层级单元格 -> 要素ID集合 的倒排索引。

    每个点在 [min_level, max_level] 的每一层都登记一次，
    查询时按圆形覆盖取出各单元格的集合并求并集。
    """

    def __init__(self, min_level, max_level, km_per_degree=KM_PER_DEGREE):
        self.min_level = min_level
        self.max_level = max_level
        self.km_per_degree = km_per_degree
        self.cell_map = {}

    def __len__(self):
        return len(self.cell_map)

    def __contains__(self, cell):
        return cell in self.cell_map

    def insert(self, coords, feature_id):
        """按经纬度 (lat, lon) 和要素ID插入"""
        check_feature_id(feature_id)
        lat, lon = coords
        leaf = cells.degrees_to_cell(lat, lon)
        for level in range(self.min_level, self.max_level + 1):
            cell = cells.ancestor(leaf, level)
            bitmap = self.cell_map.get(cell)
            if bitmap is None:
                bitmap = self.cell_map[cell] = set()
            bitmap.add(feature_id)

    def bitmap(self, cell):
        return frozenset(self.cell_map.get(cell, _EMPTY))

    def within_radius(self, coords, radius_km, max_cells):
        """
        返回中心 coords、半径 radius_km（公里）范围内的要素ID集合。

        公里按每度 111 km 换算为角度，只在赤道附近精确；
        这是已知的精度上限，不是大地线半径。
        """
        lat, lon = coords
        radius_deg = km_to_degrees(radius_km, self.km_per_degree)
        covering = cells.cap_covering(lat, lon, radius_deg, self.min_level,
                                      self.max_level, max_cells)

        bitmaps = [self.cell_map.get(cell, _EMPTY) for cell in covering]
        result = set().union(*bitmaps)

        logger.debug("覆盖单元格: %d, 结果要素: %d", len(covering), len(result))
        return result

# world.py
# created by:
#   @author: vlv-squid
#   @date: 2025-08-01
#

import logging

from cell_index import CellBitmapIndex
from config import WorldConfig
from index_base import km_to_degrees, squared_euclidean_distance
from rtree_index import PointNeighborIndex
from shape_index import ShapeNeighborIndex

logger = logging.getLogger(__name__)


class World:
    """
    统一管理单元格索引、点索引和线段索引。

    坐标统一为 (lat, lon)，单位为度。所有操作都是同步的，
    内部不加锁：并发修改需要调用方自行加锁。
    """

    def __init__(self, min_level=9, max_level=12, max_cells=8, config=None):
        if config is None:
            config = WorldConfig(min_level=min_level,
                                 max_level=max_level,
                                 max_cells=max_cells)
        self.config = config
        self.min_level = config.min_level
        self.max_level = config.max_level
        self.cell_index = CellBitmapIndex(config.min_level, config.max_level,
                                          config.km_per_degree)
        self.point_index = PointNeighborIndex()
        self.shape_index = ShapeNeighborIndex()

    @classmethod
    def from_config(cls, config):
        return cls(config=config)

    def insert(self, coords, feature_id):
        """按经纬度和要素ID插入单元格索引"""
        self.cell_index.insert(coords, feature_id)

    def insert_shape(self, coords, feature_id):
        self.shape_index.insert_shape(coords, feature_id)

    def insert_shapes(self, shapes, feature_id):
        self.shape_index.insert_shapes(shapes, feature_id)

    def build_point_index(self, points):
        """用完整的点列表构建最近邻索引，替换旧索引"""
        self.point_index.build(points)

    def within_radius(self, coords, radius_km, max_cells=None):
        """半径 radius_km（公里）内的要素ID集合"""
        if max_cells is None:
            max_cells = self.config.max_cells
        return self.cell_index.within_radius(coords, radius_km, max_cells)

    def nearest(self, coords):
        return self.point_index.nearest(coords)

    def nearest_vec(self, coords, limit):
        return self.point_index.nearest_vec(coords, limit)

    def nearest_shape(self, coords):
        return self.shape_index.nearest_shape(coords)

    def nearest_shapes(self, coords):
        return self.shape_index.nearest_shapes(coords)

    def shapes_within_radius(self, coords, radius_km):
        """
        半径 radius_km（公里）内的线段要素ID，每条线段一项。

        与 within_radius 一样按每度 111 km 换算为度后比较。
        需要直接使用度为单位时调用 shape_index.within_distance()。
        """
        radius_deg = km_to_degrees(radius_km, self.config.km_per_degree)
        return self.shape_index.within_distance(coords, radius_deg)

    squared_euclidean_distance = staticmethod(squared_euclidean_distance)

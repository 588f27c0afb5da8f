# shape_index.py
# created by:
#   @author: vlv-squid
#   @date: 2025-07-30
#

import logging

from rtree import index
from shapely.geometry import LineString, Point

from index_base import Segment, check_feature_id
from rtree_index import rtree_properties

logger = logging.getLogger(__name__)


class ShapeNeighborIndex:
    """
    线段 R 树索引，用于折线和多边形边界的最近邻与范围查询。

    支持增量插入。R 树只保存线段的外包矩形，
    点到线段的精确距离由 shapely 计算。
    """

    def __init__(self):
        self.rtree_idx = index.Index(properties=rtree_properties())
        self.segments = []
        self._lines = []

    def __len__(self):
        return len(self.segments)

    def _insert_segment(self, start, end, feature_id):
        seg_id = len(self.segments)
        line = LineString([start, end])
        self.segments.append(Segment(tuple(start), tuple(end), feature_id))
        self._lines.append(line)
        self.rtree_idx.insert(seg_id, line.bounds)

    def insert_shape(self, coords, feature_id):
        """插入折线，少于两个点时忽略"""
        check_feature_id(feature_id)
        coords = list(coords)
        if len(coords) < 2:
            return
        for start, end in zip(coords, coords[1:]):
            self._insert_segment(start, end, feature_id)

    def insert_shapes(self, shapes, feature_id):
        """以同一要素ID插入多条折线，只跳过少于两个点的折线"""
        check_feature_id(feature_id)
        for coords in shapes:
            coords = list(coords)
            if len(coords) < 2:
                logger.debug("跳过点数不足的折线, 要素ID: %d", feature_id)
                continue
            self.insert_shape(coords, feature_id)

    def _distance(self, seg_id, point):
        return self._lines[seg_id].distance(point)

    def _closest(self, coords):
        """返回 (最近距离, [(seg_id, 距离), ...])，索引为空时返回 None"""
        if not self.segments:
            return None
        x, y = coords
        point = Point(x, y)

        # 外包矩形距离不大于真实距离，用最近外包矩形的真实距离作为搜索框
        first = next(self.rtree_idx.nearest((x, y, x, y), num_results=1))
        bound = self._distance(first, point)
        seg_ids = set(self.rtree_idx.intersection(
            (x - bound, y - bound, x + bound, y + bound)))
        seg_ids.add(first)
        candidates = [(seg_id, self._distance(seg_id, point))
                      for seg_id in seg_ids]
        best = min(d for _, d in candidates)
        return best, candidates

    def nearest_shape(self, coords):
        closest = self._closest(coords)
        if closest is None:
            return None
        best, candidates = closest
        seg_id = min(seg_id for seg_id, d in candidates if d == best)
        return self.segments[seg_id].feature_id

    def nearest_shapes(self, coords):
        """返回所有并列最近线段的要素ID（每条线段一项）"""
        closest = self._closest(coords)
        if closest is None:
            return None
        best, candidates = closest
        return [
            self.segments[seg_id].feature_id
            for seg_id in sorted(s for s, d in candidates if d == best)
        ]

    def within_distance(self, coords, radius):
        """
        返回距离 coords 不超过 radius 的所有线段的要素ID（每条线段一项）。

        radius 与坐标同单位（度），不做公里换算。
        """
        if radius < 0 or not self.segments:
            return []
        x, y = coords
        point = Point(x, y)
        radius_2 = radius * radius
        hits = []
        for seg_id in sorted(self.rtree_idx.intersection(
                (x - radius, y - radius, x + radius, y + radius))):
            d = self._distance(seg_id, point)
            if d * d <= radius_2:
                hits.append(self.segments[seg_id].feature_id)
        return hits

# rtree_index.py
# created by:
#   @author: vlv-squid
#   @date: 2025-07-23
#

import logging
import time
from itertools import islice

from rtree import index

from index_base import (IndexNotBuiltError, NoResultError, PointRecord,
                        check_feature_id)

logger = logging.getLogger(__name__)


def rtree_properties():
    props = index.Property()
    props.dimension = 2
    return props


class PointNeighborIndex:
    """
    点要素的最近邻索引。

    只能通过 build() 一次性批量构建，之后不可修改；
    再次 build() 会整体替换旧的 R 树而不是合并。
    距离为 (lat, lon) 平面上的欧氏距离，只适用于局部范围的查询。
    """

    def __init__(self):
        self.rtree_idx = None
        self.point_count = 0

    @property
    def is_built(self):
        return self.rtree_idx is not None

    def __len__(self):
        return self.point_count

    def build(self, points):
        """批量构建 R 树索引，替换已有的索引"""
        start_time = time.time()
        records = [PointRecord(*p) for p in points]
        for record in records:
            check_feature_id(record.feature_id)
        logger.info("开始构建点索引，共 %d 个点...", len(records))

        if records:
            stream = ((i, (r.lat, r.lon, r.lat, r.lon), r.feature_id)
                      for i, r in enumerate(records))
            rtree_idx = index.Index(stream, properties=rtree_properties())
        else:
            # 空数据流无法批量加载
            rtree_idx = index.Index(properties=rtree_properties())

        # 构建完成后一次性替换
        self.rtree_idx = rtree_idx
        self.point_count = len(records)

        logger.info("点索引构建完成! 耗时: %.2f秒", time.time() - start_time)

    def _nearest_iter(self, coords, limit):
        if self.rtree_idx is None:
            raise IndexNotBuiltError()
        lat, lon = coords
        return self.rtree_idx.nearest((lat, lon, lat, lon),
                                      num_results=limit,
                                      objects='raw')

    def nearest(self, coords):
        """返回距离 coords 最近的点的要素ID"""
        for feature_id in self._nearest_iter(coords, 1):
            return feature_id
        raise NoResultError()

    def nearest_vec(self, coords, limit):
        """按距离从近到远返回最多 limit 个要素ID"""
        if self.rtree_idx is None:
            raise IndexNotBuiltError()
        if limit <= 0:
            return []
        # 距离相同时 rtree 可能返回多于 limit 个结果
        return list(islice(self._nearest_iter(coords, limit), limit))

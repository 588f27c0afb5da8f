# index_base.py
# created by:
#   @author: vlv-squid
#   @date: 2025-07-23
#

from typing import NamedTuple

# 纬度方向每度约 111 km，仅在赤道附近精确
KM_PER_DEGREE = 111.0

MAX_FEATURE_ID = 2**32 - 1


class SpatialIndexError(RuntimeError):
    """空间索引查询失败的基类"""


class IndexNotBuiltError(SpatialIndexError):
    """点索引尚未构建"""

    def __init__(self, message="点索引未构建，请先调用 build_point_index()"):
        super().__init__(message)


class NoResultError(SpatialIndexError):
    """索引已构建但查询无结果（例如空索引）"""

    def __init__(self, message="查询无结果"):
        super().__init__(message)


class PointRecord(NamedTuple):
    lat: float
    lon: float
    feature_id: int


class Segment(NamedTuple):
    start: tuple
    end: tuple
    feature_id: int


def check_feature_id(feature_id):
    """要素 ID 必须是 32 位无符号整数"""
    if isinstance(feature_id, bool) or not isinstance(feature_id, int):
        raise ValueError(f"要素ID必须是整数: {feature_id!r}")
    if not 0 <= feature_id <= MAX_FEATURE_ID:
        raise ValueError(f"要素ID超出 32 位无符号整数范围: {feature_id}")
    return feature_id


def km_to_degrees(radius_km, km_per_degree=KM_PER_DEGREE):
    return radius_km / km_per_degree


def squared_euclidean_distance(p1, p2):
    """(lat, lon) 平面上的欧氏距离平方，非大地线距离"""
    dx = p1[0] - p2[0]
    dy = p1[1] - p2[1]
    return dx * dx + dy * dy

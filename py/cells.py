# cells.py
# created by:
#   @author: vlv-squid
#   @date: 2025-07-28
#
# S2 层级单元格的坐标转换与圆形区域覆盖。
# 单元格 ID 使用 64 位整数（CellId.id()）。
#

import s2sphere

# S2 叶子单元格层级
LEAF_LEVEL = 30
MAX_LEVEL = 30


def degrees_to_cell(lat, lon):
    """经纬度（度）转换为叶子单元格 ID"""
    return s2sphere.CellId.from_lat_lng(
        s2sphere.LatLng.from_degrees(lat, lon)).id()


def ancestor(cell, level):
    """单元格在指定层级上的祖先，覆盖该单元格的全部区域"""
    return s2sphere.CellId(cell).parent(level).id()


def cell_level(cell):
    return s2sphere.CellId(cell).level()


def contains(cell, other):
    """cell 是否包含 other（同一单元格也算包含）"""
    return s2sphere.CellId(cell).contains(s2sphere.CellId(other))


def cap_covering(lat, lon, radius_deg, min_level, max_level, max_cells):
    """
    用 RegionCoverer 覆盖以 (lat, lon) 为中心、半径 radius_deg（度）的球冠。

    层级限定在 [min_level, max_level]，单元格数一般不超过 max_cells；
    min_level 过细时可能超过 max_cells。
    """
    if radius_deg < 0:
        return []

    center = s2sphere.LatLng.from_degrees(lat, lon).to_point()
    cap = s2sphere.Cap.from_axis_angle(center,
                                       s2sphere.Angle.from_degrees(radius_deg))

    coverer = s2sphere.RegionCoverer()
    coverer.min_level = min_level
    coverer.max_level = max_level
    coverer.max_cells = max_cells

    return [cell.id() for cell in coverer.get_covering(cap)]

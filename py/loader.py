# loader.py
# created by:
#   @author: vlv-squid
#   @date: 2025-08-04
#

import json
import logging
import time
from dataclasses import dataclass

from shapely.geometry import shape

from index_base import PointRecord

logger = logging.getLogger(__name__)


@dataclass
class LoadSummary:
    points: int = 0
    shapes: int = 0
    skipped: int = 0


def _latlon(coords):
    # GeoJSON 坐标顺序为 (lon, lat)
    return [(c[1], c[0]) for c in coords]


def _rings(polygon):
    rings = [polygon.exterior]
    rings.extend(polygon.interiors)
    return [_latlon(ring.coords) for ring in rings]


def _feature_id(feature, position, id_property):
    if id_property is not None:
        return int(feature['properties'][id_property])
    if feature.get('id') is not None:
        return int(feature['id'])
    return position


def load_features(world, geojson, id_property=None, build_points=True):
    """
    把 GeoJSON FeatureCollection 中的要素加载到 world。

    点要素写入单元格索引并用于构建点索引，线要素和多边形边界写入线段索引。
    """
    start_time = time.time()
    features = geojson.get('features', [])
    logger.info("开始加载要素，共 %d 个...", len(features))

    summary = LoadSummary()
    points = []
    for position, feature in enumerate(features):
        if not feature.get('geometry'):
            summary.skipped += 1
            continue
        try:
            fid = _feature_id(feature, position, id_property)
        except (KeyError, TypeError, ValueError):
            logger.warning("要素缺少有效ID %s, 位置: %d", id_property, position)
            summary.skipped += 1
            continue
        geom = shape(feature['geometry'])
        if geom.is_empty:
            summary.skipped += 1
            continue

        if geom.geom_type == 'Point':
            parts = [geom]
        elif geom.geom_type == 'MultiPoint':
            parts = list(geom.geoms)
        else:
            parts = None

        if parts is not None:
            for p in parts:
                world.insert((p.y, p.x), fid)
                points.append(PointRecord(p.y, p.x, fid))
            summary.points += 1
        elif geom.geom_type == 'LineString':
            world.insert_shape(_latlon(geom.coords), fid)
            summary.shapes += 1
        elif geom.geom_type == 'MultiLineString':
            world.insert_shapes([_latlon(g.coords) for g in geom.geoms], fid)
            summary.shapes += 1
        elif geom.geom_type == 'Polygon':
            world.insert_shapes(_rings(geom), fid)
            summary.shapes += 1
        elif geom.geom_type == 'MultiPolygon':
            world.insert_shapes(
                [ring for g in geom.geoms for ring in _rings(g)], fid)
            summary.shapes += 1
        else:
            logger.warning("不支持的几何类型 %s, 要素ID: %d", geom.geom_type, fid)
            summary.skipped += 1

    if build_points and points:
        world.build_point_index(points)

    logger.info("要素加载完成! 耗时: %.2f秒, 点: %d, 线/面: %d, 跳过: %d",
                time.time() - start_time, summary.points, summary.shapes,
                summary.skipped)
    return summary


def load_geojson_file(world, path, id_property=None, build_points=True):
    with open(path, encoding='utf-8') as f:
        geojson = json.load(f)
    return load_features(world, geojson, id_property, build_points)

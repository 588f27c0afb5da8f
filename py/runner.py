# runner.py
# created by:
#   @author: vlv-squid
#   @date: 2025-07-23
#

import argparse
import logging
import random
from typing import Dict

from config import WorldConfig
from index_base import PointRecord
from index_tester import IndexTester
from loader import load_geojson_file
from world import World

logger = logging.getLogger(__name__)

# 对比的层级范围
LEVEL_RANGES = {
    "S2 5-8": (5, 8),
    "S2 7-10": (7, 10),
    "S2 9-12": (9, 12),
}


def random_points(center, spread_deg, count, seed=0):
    rng = random.Random(seed)
    lat, lon = center
    return [
        PointRecord(lat + rng.uniform(-spread_deg, spread_deg),
                    lon + rng.uniform(-spread_deg, spread_deg), i)
        for i in range(count)
    ]


def build_worlds(points, data_path=None, max_cells=8):
    worlds: Dict[str, World] = {}
    for name, (min_level, max_level) in LEVEL_RANGES.items():
        logger.info("构建 %s ...", name)
        world = World.from_config(
            WorldConfig(min_level=min_level,
                        max_level=max_level,
                        max_cells=max_cells))
        if data_path:
            load_geojson_file(world, data_path)
        else:
            for p in points:
                world.insert((p.lat, p.lon), p.feature_id)
            world.build_point_index(points)
        worlds[name] = world
    return worlds


def main(argv=None):
    parser = argparse.ArgumentParser(description="World 空间索引性能测试")
    parser.add_argument("--data", help="GeoJSON 数据文件，不指定时使用随机点")
    parser.add_argument("--count", type=int, default=10000)
    parser.add_argument("--lat", type=float, default=26.45)
    parser.add_argument("--lon", type=float, default=103.28)
    parser.add_argument("--radius-km", type=float, default=2.0)
    parser.add_argument("--max-cells", type=int, default=8)
    parser.add_argument("--visualize", action="store_true")
    parser.add_argument("--out-dir", default="./png")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s")

    center = (args.lat, args.lon)
    points = [] if args.data else random_points(center, 0.1, args.count)
    worlds = build_worlds(points, args.data, args.max_cells)

    tester = IndexTester(center, args.radius_km, args.max_cells)
    return tester.run_performance_test(worlds,
                                       points,
                                       visualize=args.visualize,
                                       out_dir=args.out_dir)


if __name__ == "__main__":
    main()

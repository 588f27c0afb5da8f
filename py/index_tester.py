# index_tester.py
# created by:
#   @author: vlv-squid
#   @date: 2025-07-23
#

import logging
import time

from index_base import SpatialIndexError
from visualization import Visualizer

logger = logging.getLogger(__name__)


class IndexTester:

    def __init__(self, center, radius_km, max_cells=None):
        self.center = center
        self.radius_km = radius_km
        self.max_cells = max_cells

    def _timed(self, name, label, func):
        start_time = time.time()
        try:
            result = func()
        except SpatialIndexError as e:
            logger.warning("[%s] %s 失败: %s", name, label, e)
            result = None
        duration = (time.time() - start_time) * 1000
        logger.info("[%s] %s 耗时: %.2fms", name, label, duration)
        return result

    def run_performance_test(self, worlds, points=(), visualize=False,
                             out_dir="./png"):
        """对每个 World 运行半径、最近点和最近线段查询"""
        logger.info("===== 性能测试开始 =====")

        report = {}
        for name, world in worlds.items():
            within = self._timed(
                name, "within_radius", lambda: world.within_radius(
                    self.center, self.radius_km, self.max_cells))
            nearest = self._timed(name, "nearest",
                                  lambda: world.nearest(self.center))
            nearest_shape = self._timed(
                name, "nearest_shape", lambda: world.nearest_shape(self.center))
            logger.info("[%s] 半径内要素数: %d", name, len(within))

            report[name] = {
                'within_radius': within,
                'nearest': nearest,
                'nearest_shape': nearest_shape,
            }
            if visualize:
                Visualizer.visualize_results(world, points, within,
                                             self.center, self.radius_km,
                                             name, out_dir)

        logger.info("===== 性能测试结束 =====")
        return report

# visualization.py
# created by:
#   @author: vlv-squid
#   @date: 2025-07-23
#

import logging
import os

import matplotlib.pyplot as plt
from matplotlib.patches import Circle

from index_base import km_to_degrees

logger = logging.getLogger(__name__)


class Visualizer:

    @staticmethod
    def visualize_results(world, points, results, center, radius_km,
                          query_name, out_dir="./png"):
        """可视化查询结果，返回保存的图片路径"""

        fig, ax = plt.subplots(figsize=(12, 8))

        # 绘制查询半径（按每度 111 km 换算）
        lat, lon = center
        radius_deg = km_to_degrees(radius_km, world.config.km_per_degree)
        ax.add_patch(
            Circle((lon, lat),
                   radius_deg,
                   fill=False,
                   color='red',
                   linewidth=2))
        ax.plot(lon, lat, 'r+', markersize=10)

        results = set(results)

        for segment in world.shape_index.segments:
            (lat1, lon1), (lat2, lon2) = segment.start, segment.end
            if segment.feature_id in results:
                ax.plot([lon1, lon2], [lat1, lat2], 'r-', linewidth=2)
            else:
                ax.plot([lon1, lon2], [lat1, lat2],
                        color='gray',
                        linewidth=0.5,
                        alpha=0.3)

        # 高亮显示结果要素
        for p in points:
            if p.feature_id in results:
                ax.plot(p.lon, p.lat, 'ro', markersize=6)
            else:
                ax.plot(p.lon, p.lat, 'o', color='gray', markersize=2, alpha=0.3)

        ax.set_title(f"Spatial Query Results ({len(results)} features)")
        ax.set_xlabel('Longitude')
        ax.set_ylabel('Latitude')
        ax.set_aspect('equal', adjustable='datalim')
        ax.grid(True)
        plt.tight_layout()

        os.makedirs(out_dir, exist_ok=True)
        outpath = os.path.join(out_dir, query_name + ".png")
        plt.savefig(outpath)
        plt.close(fig)
        logger.info("可视化结果已保存为 %s", outpath)
        return outpath

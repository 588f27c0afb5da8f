# config.py
# created by:
#   @author: vlv-squid
#   @date: 2025-08-01
#

from dataclasses import dataclass

from cells import MAX_LEVEL
from index_base import KM_PER_DEGREE


@dataclass(frozen=True)
class WorldConfig:
    """
    World 的构建参数。

    Attributes:
        min_level: 单元格索引的最粗层级
        max_level: 单元格索引的最细层级
        max_cells: within_radius 默认的最大覆盖单元格数
        km_per_degree: 公里与度的换算系数
    """

    min_level: int = 9
    max_level: int = 12
    max_cells: int = 8
    km_per_degree: float = KM_PER_DEGREE

    def __post_init__(self):
        for name in ('min_level', 'max_level'):
            level = getattr(self, name)
            if isinstance(level, bool) or not isinstance(level, int):
                raise ValueError(f"{name} 必须是整数: {level!r}")
            if not 0 <= level <= MAX_LEVEL:
                raise ValueError(f"{name} 必须在 [0, {MAX_LEVEL}] 之间: {level}")
        if self.min_level > self.max_level:
            raise ValueError(
                f"min_level ({self.min_level}) 不能大于 max_level ({self.max_level})")
        if self.max_cells < 1:
            raise ValueError(f"max_cells 必须 >= 1: {self.max_cells}")
        if self.km_per_degree <= 0:
            raise ValueError(f"km_per_degree 必须 > 0: {self.km_per_degree}")

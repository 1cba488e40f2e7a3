"""
球面多边形面积
多边形各边为连接顶点的大圆弧，面积由逐边球面角盈累加得到
"""
import logging
from typing import List, Optional, Sequence

import numpy as np

from .angles import Distance, nan_tolerant, to_radians
from .coordinate import EARTH_RADIUS, Coordinate
from .navigation import NavUtils

logger = logging.getLogger(__name__)

# 绕极点一圈的航向变化总和接近 0°，普通闭合多边形为 ±360°
POLE_ENCLOSURE_THRESHOLD = 90.0


def spherical_excess(v1: Coordinate, v2: Coordinate) -> float:
    """
    一条边延伸到赤道所成梯形的球面角盈（Karney方法）

    tan(E/2) = tan(Δλ/2)·(tan(φ1/2) + tan(φ2/2)) / (1 + tan(φ1/2)·tan(φ2/2))

    Returns:
        角盈（球面度，带符号）
    """
    phi1 = to_radians(v1.latitude)
    phi2 = to_radians(v2.latitude)
    dlambda = to_radians(v2.longitude - v1.longitude)
    with nan_tolerant():
        return 2 * np.arctan2(np.tan(dlambda / 2) * (np.tan(phi1 / 2) + np.tan(phi2 / 2)),
                              1 + np.tan(phi1 / 2) * np.tan(phi2 / 2))


def _turn(from_bearing: float, to_bearing: float) -> float:
    """两个航向之间的转角，归一化到 -180..+180°"""
    return np.fmod(to_bearing - from_bearing + 540, 360) - 180


def is_pole_enclosed(polygon: Sequence[Coordinate]) -> bool:
    """
    判断闭合多边形是否包围极点

    沿多边形累加每条边内部以及顶点处的航向变化，总和绝对值小于 90° 即视为包围极点。
    某条边本身穿过极点时结果不可靠，例如 (85,90), (85,0), (85,-90)。

    Args:
        polygon: 首尾相同的顶点序列

    Returns:
        是否包围极点
    """
    total = 0.0
    with nan_tolerant():
        prev_bearing = NavUtils.calculate_bearing(polygon[0], polygon[1])
        for v in range(len(polygon) - 1):
            init_bearing = NavUtils.calculate_bearing(polygon[v], polygon[v + 1])
            final_bearing = NavUtils.final_bearing(polygon[v], polygon[v + 1])
            total += _turn(prev_bearing, init_bearing)
            total += _turn(init_bearing, final_bearing)
            prev_bearing = final_bearing
        init_bearing = NavUtils.calculate_bearing(polygon[0], polygon[1])
        total += _turn(prev_bearing, init_bearing)
    return bool(np.abs(total) < POLE_ENCLOSURE_THRESHOLD)


def polygon_area(polygon: Sequence[Coordinate], radius: Distance = EARTH_RADIUS) -> Optional[float]:
    """
    计算球面多边形面积

    Args:
        polygon: 顶点列表（至少3个）；最后一个顶点与第一个相同时不会重复闭合
        radius: 地球半径（米）

    Returns:
        面积（radius 单位的平方，恒为非负）；顶点不足3个时返回 None
    """
    if len(polygon) < 3:
        logger.debug("polygon_area: need at least 3 vertices, got %d", len(polygon))
        return None

    # 闭合多边形
    vertices: List[Coordinate] = list(polygon)
    if vertices[0] != vertices[-1]:
        vertices.append(vertices[0])

    excess = 0.0  # 球面角盈（球面度）
    for v in range(len(vertices) - 1):
        excess += spherical_excess(vertices[v], vertices[v + 1])

    if is_pole_enclosed(vertices):
        excess = np.abs(excess) - 2 * np.pi

    with nan_tolerant():
        return float(np.abs(excess * radius * radius))

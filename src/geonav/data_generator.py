"""
航线数据生成工具
按大圆或恒向线对航路采样生成轨迹，并汇总各航段的距离和航向
"""
import numpy as np
import pandas as pd
from typing import List, Optional, Sequence, Tuple, Union

from .config import TRACK_MODES, GeoNavConfig
from .coordinate import EARTH_RADIUS, Coordinate
from .navigation import NavUtils
from .rhumb import RhumbUtils

Waypoint = Union[Coordinate, Tuple[float, float]]


def _as_coordinates(waypoints: Sequence[Waypoint]) -> List[Coordinate]:
    """航路点统一转换为 Coordinate，接受 (lat, lon) 元组"""
    return [wp if isinstance(wp, Coordinate) else Coordinate.from_tuple(wp) for wp in waypoints]


def sample_leg(start: Coordinate, end: Coordinate, num_points: int = 100,
               mode: str = "great_circle", radius: float = EARTH_RADIUS) -> pd.DataFrame:
    """
    对单个航段等间距采样

    Args:
        start: 航段起点
        end: 航段终点
        num_points: 采样点数（含两端，至少2）
        mode: great_circle（大圆）或 rhumb（恒向线）
        radius: 地球半径（米）

    Returns:
        包含 lat, lon, fraction, distance_m 列的DataFrame
    """
    if num_points < 2:
        raise ValueError(f"num_points must be at least 2, got {num_points}")
    if mode not in TRACK_MODES:
        raise ValueError(
            f"Unknown track mode '{mode}'.\n"
            f"Available modes: {', '.join(TRACK_MODES)}"
        )

    fractions = np.linspace(0.0, 1.0, num_points)

    if mode == "great_circle":
        leg_distance = NavUtils.haversine_distance(start, end, radius)
        points = [NavUtils.intermediate_point(start, end, frac) for frac in fractions]
    else:
        leg_distance = RhumbUtils.rhumb_distance(start, end, radius)
        bearing = RhumbUtils.rhumb_bearing(start, end)
        points = [RhumbUtils.rhumb_destination(start, frac * leg_distance, bearing, radius)
                  for frac in fractions]

    return pd.DataFrame({
        'lat': [p.latitude for p in points],
        'lon': [p.longitude for p in points],
        'fraction': fractions,
        'distance_m': fractions * leg_distance,
    })


def generate_route_track(waypoints: Sequence[Waypoint],
                         config: Optional[GeoNavConfig] = None) -> pd.DataFrame:
    """
    生成整条航路的采样轨迹

    Args:
        waypoints: 航路点列表（Coordinate 或 (lat, lon) 元组）
        config: 采样配置，为None时使用默认配置

    Returns:
        包含 leg, lat, lon, fraction, distance_m, route_distance_m 列的DataFrame；
        相邻航段的衔接点只保留一次
    """
    if config is None:
        config = GeoNavConfig()
    coords = _as_coordinates(waypoints)
    if len(coords) < 2:
        raise ValueError(f"A route needs at least 2 waypoints, got {len(coords)}")

    frames = []
    offset = 0.0
    for i in range(len(coords) - 1):
        leg = sample_leg(coords[i], coords[i + 1],
                         num_points=config.track.points_per_leg,
                         mode=config.track.mode,
                         radius=config.earth.radius_m)
        leg.insert(0, 'leg', i)
        leg['route_distance_m'] = offset + leg['distance_m']
        if i > 0:
            leg = leg.iloc[1:]
        frames.append(leg)
        offset += leg['distance_m'].iloc[-1]

    return pd.concat(frames, ignore_index=True)


def route_summary(waypoints: Sequence[Waypoint], radius: float = EARTH_RADIUS) -> pd.DataFrame:
    """
    汇总航路各航段

    Args:
        waypoints: 航路点列表（Coordinate 或 (lat, lon) 元组）
        radius: 地球半径（米）

    Returns:
        每个航段一行：起止经纬度、大圆距离、初始/终止航向、恒向线距离和航向
    """
    coords = _as_coordinates(waypoints)
    if len(coords) < 2:
        raise ValueError(f"A route needs at least 2 waypoints, got {len(coords)}")

    rows = []
    for i in range(len(coords) - 1):
        p1, p2 = coords[i], coords[i + 1]
        rows.append({
            'leg': i,
            'from_lat': p1.latitude,
            'from_lon': p1.longitude,
            'to_lat': p2.latitude,
            'to_lon': p2.longitude,
            'distance_m': NavUtils.haversine_distance(p1, p2, radius),
            'initial_bearing': NavUtils.calculate_bearing(p1, p2),
            'final_bearing': NavUtils.final_bearing(p1, p2),
            'rhumb_distance_m': RhumbUtils.rhumb_distance(p1, p2, radius),
            'rhumb_bearing': RhumbUtils.rhumb_bearing(p1, p2),
        })
    return pd.DataFrame(rows)

"""
导航数学工具库
提供大圆航线计算、距离、航向、交点、偏航距离等导航功能
"""
import logging
from typing import Optional, Tuple

import numpy as np

from .angles import (Degrees, Distance, nan_tolerant, normalize_bearing,
                     normalize_longitude, sign, to_degrees, to_radians)
from .coordinate import EARTH_RADIUS, Coordinate, GreatCirclePath, PathSegment

logger = logging.getLogger(__name__)


class NavUtils:
    """导航工具类（大圆模型）"""
    R_EARTH = EARTH_RADIUS  # 地球半径（米）

    @staticmethod
    def haversine_distance(start: Coordinate, end: Coordinate,
                           radius: Distance = EARTH_RADIUS) -> Distance:
        """
        计算两点间的大圆距离（Haversine公式）

        Args:
            start: 起点
            end: 终点
            radius: 地球半径（米）

        Returns:
            距离（与 radius 同单位）
        """
        phi1, lambda1 = to_radians(start.latitude), to_radians(start.longitude)
        phi2, lambda2 = to_radians(end.latitude), to_radians(end.longitude)
        dphi = phi2 - phi1
        dlambda = lambda2 - lambda1

        with nan_tolerant():
            a = np.sin(dphi / 2) * np.sin(dphi / 2) + \
                np.cos(phi1) * np.cos(phi2) * np.sin(dlambda / 2) * np.sin(dlambda / 2)
            c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
        return float(radius * c)

    @staticmethod
    def calculate_bearing(start: Coordinate, end: Coordinate) -> Degrees:
        """
        计算从起点到终点的初始航向角

        Args:
            start: 起点
            end: 终点

        Returns:
            航向角（度，0-360）；重合点等退化情况不做特殊处理
        """
        phi1 = to_radians(start.latitude)
        phi2 = to_radians(end.latitude)
        dlambda = to_radians(end.longitude - start.longitude)

        with nan_tolerant():
            y = np.sin(dlambda) * np.cos(phi2)
            x = np.cos(phi1) * np.sin(phi2) - \
                np.sin(phi1) * np.cos(phi2) * np.cos(dlambda)
            theta = np.arctan2(y, x)
            return float(normalize_bearing(to_degrees(theta)))

    @staticmethod
    def final_bearing(start: Coordinate, end: Coordinate) -> Degrees:
        """
        计算到达终点时的航向角

        等于从终点返回起点的初始航向取反。
        """
        with nan_tolerant():
            return float(np.fmod(NavUtils.calculate_bearing(end, start) + 180, 360))

    @staticmethod
    def midpoint(start: Coordinate, end: Coordinate) -> Coordinate:
        """
        计算两点间大圆航线的中点

        Returns:
            中点坐标
        """
        phi1, lambda1 = to_radians(start.latitude), to_radians(start.longitude)
        phi2 = to_radians(end.latitude)
        dlambda = to_radians(end.longitude - start.longitude)

        with nan_tolerant():
            bx = np.cos(phi2) * np.cos(dlambda)
            by = np.cos(phi2) * np.sin(dlambda)

            x = np.sqrt((np.cos(phi1) + bx) * (np.cos(phi1) + bx) + by * by)
            y = np.sin(phi1) + np.sin(phi2)
            phi3 = np.arctan2(y, x)
            lambda3 = lambda1 + np.arctan2(by, np.cos(phi1) + bx)

            return Coordinate(to_degrees(phi3), normalize_longitude(to_degrees(lambda3)))

    @staticmethod
    def intermediate_point(start: Coordinate, end: Coordinate, fraction: float) -> Coordinate:
        """
        计算大圆航线上的中间点

        Args:
            start: 起点
            end: 终点
            fraction: 比例（0-1，0为起点，1为终点）

        Returns:
            中间点坐标
        """
        phi1, lambda1 = to_radians(start.latitude), to_radians(start.longitude)
        phi2, lambda2 = to_radians(end.latitude), to_radians(end.longitude)

        with nan_tolerant():
            # 角度距离
            dphi = phi2 - phi1
            dlambda = lambda2 - lambda1
            a = np.sin(dphi / 2) * np.sin(dphi / 2) + \
                np.cos(phi1) * np.cos(phi2) * np.sin(dlambda / 2) * np.sin(dlambda / 2)
            d = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))

            if d == 0:
                return Coordinate(start.latitude, normalize_longitude(start.longitude))

            a = np.sin((1 - fraction) * d) / np.sin(d)
            b = np.sin(fraction * d) / np.sin(d)

            x = a * np.cos(phi1) * np.cos(lambda1) + b * np.cos(phi2) * np.cos(lambda2)
            y = a * np.cos(phi1) * np.sin(lambda1) + b * np.cos(phi2) * np.sin(lambda2)
            z = a * np.sin(phi1) + b * np.sin(phi2)

            phi_i = np.arctan2(z, np.sqrt(x * x + y * y))
            lambda_i = np.arctan2(y, x)

            return Coordinate(to_degrees(phi_i), normalize_longitude(to_degrees(lambda_i)))

    @staticmethod
    def destination_point(origin: Coordinate, distance: Distance, bearing: Degrees,
                          radius: Distance = EARTH_RADIUS) -> Coordinate:
        """
        沿给定初始航向飞行指定距离后的到达点

        Args:
            origin: 起点
            distance: 飞行距离（与 radius 同单位）
            bearing: 初始航向（度）
            radius: 地球半径（米）

        Returns:
            到达点坐标
        """
        with nan_tolerant():
            delta = np.float64(distance) / radius  # 角度距离
            theta = to_radians(bearing)
            phi1, lambda1 = to_radians(origin.latitude), to_radians(origin.longitude)

            sin_phi2 = np.sin(phi1) * np.cos(delta) + np.cos(phi1) * np.sin(delta) * np.cos(theta)
            phi2 = np.arcsin(sin_phi2)
            y = np.sin(theta) * np.sin(delta) * np.cos(phi1)
            x = np.cos(delta) - np.sin(phi1) * sin_phi2
            lambda2 = lambda1 + np.arctan2(y, x)

            return Coordinate(to_degrees(phi2), normalize_longitude(to_degrees(lambda2)))

    @staticmethod
    def intersection(path1: GreatCirclePath, path2: GreatCirclePath) -> Optional[Coordinate]:
        """
        计算两条大圆航线（起点 + 初始航向）的交点

        Args:
            path1: 第一条航线
            path2: 第二条航线

        Returns:
            交点坐标；起点重合、航线共线（无穷多交点）或交点不确定时返回 None
        """
        phi1, lambda1 = to_radians(path1.coordinate.latitude), to_radians(path1.coordinate.longitude)
        phi2, lambda2 = to_radians(path2.coordinate.latitude), to_radians(path2.coordinate.longitude)
        theta13 = to_radians(path1.bearing)
        theta23 = to_radians(path2.bearing)
        dphi = phi2 - phi1
        dlambda = lambda2 - lambda1

        with nan_tolerant():
            # 两起点间的角度距离
            delta12 = 2 * np.arcsin(np.sqrt(
                np.sin(dphi / 2) * np.sin(dphi / 2) +
                np.cos(phi1) * np.cos(phi2) * np.sin(dlambda / 2) * np.sin(dlambda / 2)))
            if delta12 == 0:
                logger.debug("intersection: coincident origins %s", path1.coordinate)
                return None

            # 两起点间的初始/终止航向
            theta_a = np.arccos((np.sin(phi2) - np.sin(phi1) * np.cos(delta12)) /
                                (np.sin(delta12) * np.cos(phi1)))
            if np.isnan(theta_a):
                theta_a = 0.0  # 舍入误差保护
            theta_b = np.arccos((np.sin(phi1) - np.sin(phi2) * np.cos(delta12)) /
                                (np.sin(delta12) * np.cos(phi2)))

            if np.sin(lambda2 - lambda1) > 0:
                theta12 = theta_a
                theta21 = 2 * np.pi - theta_b
            else:
                theta12 = 2 * np.pi - theta_a
                theta21 = theta_b

            alpha1 = np.fmod(theta13 - theta12 + np.pi, 2 * np.pi) - np.pi  # 角 2-1-3
            alpha2 = np.fmod(theta21 - theta23 + np.pi, 2 * np.pi) - np.pi  # 角 1-2-3

            # 等价于 sin(α1) == 0 且 sin(α2) == 0；sin(nπ) 的浮点结果不为 0，所以用截断余数判断
            if np.fmod(alpha1, np.pi) == 0 and np.fmod(alpha2, np.pi) == 0:
                logger.debug("intersection: collinear paths, infinite intersections")
                return None
            # NaN 也走这里
            if not np.sin(alpha1) * np.sin(alpha2) >= 0:
                logger.debug("intersection: ambiguous intersection")
                return None

            alpha3 = np.arccos(-np.cos(alpha1) * np.cos(alpha2) +
                               np.sin(alpha1) * np.sin(alpha2) * np.cos(delta12))
            delta13 = np.arctan2(np.sin(delta12) * np.sin(alpha1) * np.sin(alpha2),
                                 np.cos(alpha2) + np.cos(alpha1) * np.cos(alpha3))
            phi3 = np.arcsin(np.sin(phi1) * np.cos(delta13) +
                             np.cos(phi1) * np.sin(delta13) * np.cos(theta13))
            dlambda13 = np.arctan2(np.sin(theta13) * np.sin(delta13) * np.cos(phi1),
                                   np.cos(delta13) - np.sin(phi1) * np.sin(phi3))
            lambda3 = lambda1 + dlambda13

            return Coordinate(to_degrees(phi3), normalize_longitude(to_degrees(lambda3)))

    @staticmethod
    def cross_track_distance(point: Coordinate, segment: PathSegment,
                             radius: Distance = EARTH_RADIUS) -> Distance:
        """
        计算点到大圆航线的偏航距离

        Args:
            point: 目标点
            segment: 航段（起点、终点）
            radius: 地球半径（米）

        Returns:
            偏航距离（负值在航线左侧，正值在右侧）
        """
        with nan_tolerant():
            delta13 = NavUtils.haversine_distance(segment.start, point, radius) / np.float64(radius)
            theta13 = to_radians(NavUtils.calculate_bearing(segment.start, point))
            theta12 = to_radians(NavUtils.calculate_bearing(segment.start, segment.end))

            delta = np.arcsin(np.sin(delta13) * np.sin(theta13 - theta12))
            return float(delta * radius)

    @staticmethod
    def along_track_distance(point: Coordinate, segment: PathSegment,
                             radius: Distance = EARTH_RADIUS) -> Distance:
        """
        计算点在航线上的沿航迹距离

        从点向大圆航线作垂线，返回航段起点到垂足的距离。

        Args:
            point: 目标点
            segment: 航段（起点、终点）
            radius: 地球半径（米）

        Returns:
            沿航迹距离（垂足在起点后方时为负）
        """
        with nan_tolerant():
            delta13 = NavUtils.haversine_distance(segment.start, point, radius) / np.float64(radius)
            theta13 = to_radians(NavUtils.calculate_bearing(segment.start, point))
            theta12 = to_radians(NavUtils.calculate_bearing(segment.start, segment.end))

            delta_xt = np.arcsin(np.sin(delta13) * np.sin(theta13 - theta12))
            delta_at = np.arccos(np.cos(delta13) / np.abs(np.cos(delta_xt)))

            return float(delta_at * sign(np.cos(theta12 - theta13)) * radius)

    @staticmethod
    def max_latitude(coordinate: Coordinate, bearing: Degrees) -> Degrees:
        """
        沿给定航向的大圆航线能到达的最高纬度（Clairaut公式）

        结果与经度无关；取负即为南半球的最低纬度。

        Args:
            coordinate: 航线上任一点
            bearing: 该点处的航向（度）

        Returns:
            最高纬度（度）
        """
        theta = to_radians(bearing)
        phi = to_radians(coordinate.latitude)

        with nan_tolerant():
            phi_max = np.arccos(np.abs(np.sin(theta) * np.cos(phi)))
            return float(to_degrees(phi_max))

    @staticmethod
    def crossing_parallels(coordinate1: Coordinate, coordinate2: Coordinate,
                           latitude: Degrees) -> Optional[Tuple[Degrees, Degrees]]:
        """
        计算过两点的大圆与给定纬线相交的两个经度

        Args:
            coordinate1: 大圆上第一个点
            coordinate2: 大圆上第二个点
            latitude: 纬度（度）

        Returns:
            (经度1, 经度2) 元组；大圆到达不了该纬度时返回 None
        """
        phi = to_radians(latitude)
        phi1, lambda1 = to_radians(coordinate1.latitude), to_radians(coordinate1.longitude)
        phi2, lambda2 = to_radians(coordinate2.latitude), to_radians(coordinate2.longitude)
        dlambda = lambda2 - lambda1

        with nan_tolerant():
            x = np.sin(phi1) * np.cos(phi2) * np.cos(phi) * np.sin(dlambda)
            y = np.sin(phi1) * np.cos(phi2) * np.cos(phi) * np.cos(dlambda) - \
                np.cos(phi1) * np.sin(phi2) * np.cos(phi)
            z = np.cos(phi1) * np.cos(phi2) * np.sin(phi) * np.sin(dlambda)

            if z * z > x * x + y * y:
                logger.debug("crossing_parallels: great circle never reaches latitude %s", latitude)
                return None

            lambda_m = np.arctan2(-y, x)  # 最高纬度处的经度
            dlambda_i = np.arccos(z / np.sqrt(x * x + y * y))  # 从 λm 到交点的经差

            lambda_i1 = lambda1 + lambda_m - dlambda_i
            lambda_i2 = lambda1 + lambda_m + dlambda_i

            return (float(normalize_longitude(to_degrees(lambda_i1))),
                    float(normalize_longitude(to_degrees(lambda_i2))))

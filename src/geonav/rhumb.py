"""
恒向线（Rhumb line）计算
在墨卡托投影的"拉伸"平面上计算恒向线距离、航向、到达点和中点
"""
import numpy as np

from .angles import (Degrees, Distance, nan_tolerant, normalize_bearing,
                     normalize_longitude, to_degrees, to_radians)
from .coordinate import EARTH_RADIUS, Coordinate

# 东西向航线上 Δψ→0，q = Δφ/Δψ 成为 0/0，低于此阈值改用 cos(φ1)
PSI_EPSILON = 10e-12


def _delta_psi(phi1, phi2):
    """墨卡托投影下的纬度差（等角纬度差）"""
    return np.log(np.tan(phi2 / 2 + np.pi / 4) / np.tan(phi1 / 2 + np.pi / 4))


def _stretch_factor(dphi, dpsi, phi1):
    """拉伸系数 q"""
    return dphi / dpsi if np.abs(dpsi) > PSI_EPSILON else np.cos(phi1)


class RhumbUtils:
    """恒向线工具类"""

    @staticmethod
    def rhumb_distance(start: Coordinate, end: Coordinate,
                       radius: Distance = EARTH_RADIUS) -> Distance:
        """
        计算两点间的恒向线距离

        Args:
            start: 起点
            end: 终点
            radius: 地球半径（米）

        Returns:
            距离（与 radius 同单位）
        """
        phi1 = to_radians(start.latitude)
        phi2 = to_radians(end.latitude)
        dphi = phi2 - phi1
        dlambda = to_radians(abs(end.longitude - start.longitude))
        # 经差超过 180° 时走跨越反子午线的较短恒向线
        if dlambda > np.pi:
            dlambda -= 2 * np.pi

        with nan_tolerant():
            dpsi = _delta_psi(phi1, phi2)
            q = _stretch_factor(dphi, dpsi, phi1)

            # 拉伸平面上的勾股定理
            delta = np.sqrt(dphi * dphi + q * q * dlambda * dlambda)
            return float(delta * radius)

    @staticmethod
    def rhumb_bearing(start: Coordinate, end: Coordinate) -> Degrees:
        """
        计算恒向线航向

        Returns:
            航向角（度，0-360）
        """
        phi1 = to_radians(start.latitude)
        phi2 = to_radians(end.latitude)
        dlambda = to_radians(end.longitude - start.longitude)
        if dlambda > np.pi:
            dlambda -= 2 * np.pi
        if dlambda < -np.pi:
            dlambda += 2 * np.pi

        with nan_tolerant():
            dpsi = _delta_psi(phi1, phi2)
            theta = np.arctan2(dlambda, dpsi)
            return float(normalize_bearing(to_degrees(theta)))

    @staticmethod
    def rhumb_destination(origin: Coordinate, distance: Distance, bearing: Degrees,
                          radius: Distance = EARTH_RADIUS) -> Coordinate:
        """
        沿恒向线以固定航向飞行指定距离后的到达点

        Args:
            origin: 起点
            distance: 飞行距离（与 radius 同单位）
            bearing: 航向（度）
            radius: 地球半径（米）

        Returns:
            到达点坐标
        """
        with nan_tolerant():
            delta = np.float64(distance) / radius  # 角度距离
            phi1, lambda1 = to_radians(origin.latitude), to_radians(origin.longitude)
            theta = to_radians(bearing)

            dphi = delta * np.cos(theta)
            phi2 = phi1 + dphi

            # 越过极点时把纬度折回
            if np.abs(phi2) > np.pi / 2:
                phi2 = np.pi - phi2 if phi2 > 0 else -np.pi - phi2

            dpsi = _delta_psi(phi1, phi2)
            q = _stretch_factor(dphi, dpsi, phi1)

            dlambda = delta * np.sin(theta) / q
            lambda2 = lambda1 + dlambda

            return Coordinate(to_degrees(phi2), normalize_longitude(to_degrees(lambda2)))

    @staticmethod
    def rhumb_midpoint(start: Coordinate, end: Coordinate) -> Coordinate:
        """
        计算恒向线中点

        Returns:
            中点坐标
        """
        phi1, lambda1 = to_radians(start.latitude), to_radians(start.longitude)
        phi2, lambda2 = to_radians(end.latitude), to_radians(end.longitude)

        if np.abs(lambda2 - lambda1) > np.pi:
            lambda1 += 2 * np.pi  # 跨越反子午线

        with nan_tolerant():
            phi3 = (phi1 + phi2) / 2
            f1 = np.tan(np.pi / 4 + phi1 / 2)
            f2 = np.tan(np.pi / 4 + phi2 / 2)
            f3 = np.tan(np.pi / 4 + phi3 / 2)
            lambda3 = ((lambda2 - lambda1) * np.log(f3) + lambda1 * np.log(f2) -
                       lambda2 * np.log(f1)) / np.log(f2 / f1)

            if not np.isfinite(lambda3):
                lambda3 = (lambda1 + lambda2) / 2  # 沿纬线航行

            return Coordinate(to_degrees(phi3), normalize_longitude(to_degrees(lambda3)))

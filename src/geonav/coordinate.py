"""
坐标值对象
经纬度坐标、大圆航线描述以及坐标的文本形式
"""
from dataclasses import dataclass
from typing import Optional, Tuple

from .angles import Degrees, Distance

# 地球平均半径（米）
EARTH_RADIUS: Distance = 6371e3


@dataclass(frozen=True)
class Coordinate:
    """
    不可变的经纬度坐标（度）

    不限制取值范围：越界的纬度/经度照常参与计算，校验由调用方负责。
    相等与哈希按两个浮点字段精确比较。
    """
    latitude: Degrees  # 纬度
    longitude: Degrees  # 经度

    def __post_init__(self) -> None:
        # frozen dataclass 只能用 object.__setattr__
        object.__setattr__(self, 'latitude', float(self.latitude))
        object.__setattr__(self, 'longitude', float(self.longitude))

    def __str__(self) -> str:
        return f"{self.latitude},{self.longitude}"

    @classmethod
    def from_string(cls, text: str) -> Optional['Coordinate']:
        """
        解析 "lat,lon" 形式的文本

        Args:
            text: 以单个逗号分隔的两个数值

        Returns:
            坐标；格式不符时返回 None
        """
        components = text.split(',')
        if len(components) != 2:
            return None
        try:
            latitude = float(components[0])
            longitude = float(components[1])
        except ValueError:
            return None
        return cls(latitude, longitude)

    @classmethod
    def from_tuple(cls, point: Tuple[float, float]) -> 'Coordinate':
        """从 (lat, lon) 元组构造"""
        return cls(point[0], point[1])

    def to_tuple(self) -> Tuple[float, float]:
        """转换为 (lat, lon) 元组"""
        return self.latitude, self.longitude


@dataclass(frozen=True)
class GreatCirclePath:
    """由起点和初始航向定义的大圆航线"""
    coordinate: Coordinate  # 起点
    bearing: Degrees  # 初始航向（度）


@dataclass(frozen=True)
class PathSegment:
    """由起点和终点定义的大圆航段"""
    start: Coordinate
    end: Coordinate

"""
配置管理
地球模型参数和航迹采样参数，支持从YAML文件加载
"""
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .coordinate import EARTH_RADIUS

logger = logging.getLogger(__name__)

TRACK_MODES = ("great_circle", "rhumb")


@dataclass
class EarthConfig:
    """地球模型"""
    radius_m: float = EARTH_RADIUS  # 球体半径（米）

    def __post_init__(self):
        if not self.radius_m > 0:
            raise ValueError(f"Earth radius must be positive, got {self.radius_m}")


@dataclass
class TrackConfig:
    """航迹采样参数"""
    points_per_leg: int = 100  # 每段航线的采样点数（含两端）
    mode: str = "great_circle"  # great_circle 或 rhumb

    def __post_init__(self):
        if self.points_per_leg < 2:
            raise ValueError(f"points_per_leg must be at least 2, got {self.points_per_leg}")
        if self.mode not in TRACK_MODES:
            raise ValueError(
                f"Unknown track mode '{self.mode}'.\n"
                f"Available modes: {', '.join(TRACK_MODES)}"
            )


@dataclass
class GeoNavConfig:
    """完整配置"""
    earth: EarthConfig = field(default_factory=EarthConfig)
    track: TrackConfig = field(default_factory=TrackConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GeoNavConfig":
        """
        从字典构造配置，缺失的字段取默认值

        Args:
            data: 配置字典（earth / track 两节）

        Returns:
            配置对象
        """
        earth_data = data.get("earth") or {}
        track_data = data.get("track") or {}
        return cls(
            earth=EarthConfig(
                radius_m=float(earth_data.get("radius_m", EARTH_RADIUS)),
            ),
            track=TrackConfig(
                points_per_leg=int(track_data.get("points_per_leg", 100)),
                mode=track_data.get("mode", "great_circle"),
            ),
        )

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "GeoNavConfig":
        """
        从YAML文件加载配置

        Raises:
            FileNotFoundError: 文件不存在
            ValueError: 配置值非法
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping, got {type(data).__name__}")

        config = cls.from_dict(data)
        logger.info("Loaded configuration from %s", path)
        return config

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_yaml(self, path: Union[str, Path]) -> None:
        """保存配置到YAML文件"""
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(self.to_dict(), f, sort_keys=False)


def load_config(path: Optional[Union[str, Path]] = None) -> GeoNavConfig:
    """
    便捷函数：加载配置

    Args:
        path: YAML文件路径，为None时返回默认配置

    Returns:
        配置对象
    """
    if path is None:
        return GeoNavConfig()
    return GeoNavConfig.from_yaml(path)

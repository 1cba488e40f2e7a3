"""
角度工具
度/弧度转换、符号函数、经度与航向归一化
"""
import numpy as np

Degrees = float
Radians = float
Distance = float


def to_radians(degrees: Degrees) -> Radians:
    """度转弧度"""
    return np.float64(degrees) * np.pi / 180


def to_degrees(radians: Radians) -> Degrees:
    """弧度转度"""
    return np.float64(radians) * 180 / np.pi


def sign(value: float) -> float:
    """
    符号函数

    Returns:
        -1.0（负数）、0.0（零）或 1.0（正数）
    """
    if value < 0:
        return -1.0
    elif value == 0:
        return 0.0
    return 1.0


def normalize_longitude(longitude: Degrees) -> Degrees:
    """
    经度归一化到 -180..+180°

    必须先加 540 再取截断余数，才能正确处理三角运算误差导致的略微越界值。
    np.fmod 与 C 的 fmod 一致（余数与被除数同号），不能换成 Python 的 %。
    """
    return np.fmod(np.float64(longitude) + 540, 360) - 180


def normalize_bearing(bearing: Degrees) -> Degrees:
    """航向归一化到 0..360°"""
    return np.fmod(np.float64(bearing) + 360, 360)


def nan_tolerant():
    """
    屏蔽 numpy 的 invalid/divide/overflow 警告

    退化输入（重合点、对跖点、极点）下 acos 越界或 0/0 的结果按 IEEE 754
    以 NaN/inf 传播，而不是抛异常，调用方据此判断。
    """
    return np.errstate(invalid="ignore", divide="ignore", over="ignore")

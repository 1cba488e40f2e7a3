"""
航路报告示例
对几条示例航线输出航段汇总、大圆/恒向线对比和航线交点
"""
import sys
from pathlib import Path

# 添加项目根目录到路径
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from geonav.area import polygon_area
from geonav.config import GeoNavConfig, TrackConfig
from geonav.coordinate import Coordinate, GreatCirclePath
from geonav.data_generator import generate_route_track, route_summary
from geonav.navigation import NavUtils


def print_route_report(name: str, waypoints: list):
    """
    打印单条航线的报告

    Args:
        name: 航线名称
        waypoints: 航路点列表，每个点为(lat, lon)元组
    """
    print(f"\n{'='*80}")
    print(f"Route Report: {name}")
    print(f"{'='*80}")

    summary = route_summary(waypoints)
    print(summary[['leg', 'distance_m', 'initial_bearing', 'final_bearing',
                   'rhumb_distance_m', 'rhumb_bearing']].to_string(index=False, float_format='%.1f'))

    gc_total = summary['distance_m'].sum()
    rhumb_total = summary['rhumb_distance_m'].sum()
    print(f"\nGreat-circle distance: {gc_total/1000:.1f} km")
    print(f"Rhumb-line distance:   {rhumb_total/1000:.1f} km")
    print(f"Rhumb penalty:         {(rhumb_total - gc_total)/1000:.1f} km")

    # 大圆航线最高纬度
    origin = Coordinate.from_tuple(waypoints[0])
    max_lat = NavUtils.max_latitude(origin, summary['initial_bearing'].iloc[0])
    print(f"Max latitude on first leg's great circle: {max_lat:.2f}°")

    track = generate_route_track(waypoints, GeoNavConfig(track=TrackConfig(points_per_leg=50)))
    print(f"Sampled track points: {len(track)}")


def main():
    """主函数：生成示例报告"""

    # 示例1：短程航线（北京-上海）
    print_route_report("PEK-PVG", [
        (40.0799, 116.6031),  # 北京首都机场
        (38.5, 118.0),  # 中间航路点
        (31.1443, 121.8083),  # 上海浦东机场
    ])

    # 示例2：跨太平洋航线（北京-洛杉矶），跨越反子午线
    print_route_report("PEK-LAX", [
        (40.0799, 116.6031),
        (33.9416, -118.4085),
    ])

    # 示例3：两条航线的交点
    print(f"\n{'='*80}")
    print("Path Intersection: STN 108.547° x CDG 32.435°")
    print(f"{'='*80}")
    stn = GreatCirclePath(Coordinate(51.8853, 0.2545), 108.547)
    cdg = GreatCirclePath(Coordinate(49.0034, 2.5735), 32.435)
    crossing = NavUtils.intersection(stn, cdg)
    print(f"Intersection: {crossing}")

    # 示例4：三角形区域面积
    triangle = [Coordinate(1, 1), Coordinate(2, 1), Coordinate(1, 2)]
    print(f"Triangle area: {polygon_area(triangle)/1e6:.1f} km²")


if __name__ == "__main__":
    main()

#!/usr/bin/env python
# coding: utf-8
"""
グラフ縦軸の範囲計算

縦軸の下限・上限・目盛りを決め、週別表示に足りるデータがあるかを判定する。
描画時は値を下限からのオフセット（値 - 下限）で表し、目盛りラベルで元に戻す。
"""

import math

import numpy as np
import pandas as pd

from weightcal.analytics.aggregation import metric_values
from weightcal.models import Metric, PlottedPoint

DEFAULT_LOWER_BOUND = 50
DEFAULT_UPPER_BOUND = 200

# 週平均を出すのに必要な月内の記録日数
MIN_DAYS_FOR_WEEKLY_VIEW = 12


def _valid_values(values):
    return [v for v in (values or []) if v is not None and not pd.isna(v)]


def lower_bound(values, default=DEFAULT_LOWER_BOUND):
    """
    縦軸の下限を計算

    floor(|max(default, floor(min(values)))| / 5) * 5

    Parameters
    ----------
    values : list of float or None
        値のリスト（Noneを含んでよい）
    default : float
        値がない場合の下限

    Returns
    -------
    float
        5の倍数に丸めた下限

    Examples
    --------
    >>> lower_bound([])
    50
    >>> lower_bound([72.3, 68.1])
    65
    """
    valid = _valid_values(values)
    if not valid:
        return default
    floored = max(default, math.floor(min(valid)))
    return math.floor(abs(floored) / 5) * 5


def upper_bound(values, default=DEFAULT_UPPER_BOUND):
    """
    縦軸の上限を計算（max(default, max(values))）

    Examples
    --------
    >>> upper_bound([])
    200
    >>> upper_bound([210.0, 195.0])
    210.0
    """
    valid = _valid_values(values)
    if not valid:
        return default
    return max(default, max(valid))


def count_readings(records, month: int, metric: Metric) -> int:
    """月内で指定メトリクスに値がある日数（存在しない日は数えない）"""
    return len(metric_values(records, metric, month=month))


def has_enough_data_for_weekly_view(records, month: int, metric: Metric,
                                    threshold=MIN_DAYS_FOR_WEEKLY_VIEW) -> bool:
    """
    週別表示に十分なデータがあるか

    記録の少ない週平均は誤解を招くため、threshold日未満なら日別表示に切り替える。

    Parameters
    ----------
    records : list of DayRecord or None
    month : int
        対象月（0-11）
    metric : Metric
        朝・夜の体重
    threshold : int
        必要な記録日数

    Returns
    -------
    bool
        記録日数 >= threshold
    """
    return count_readings(records, month, metric) >= threshold


def axis_ticks(lower, upper, step) -> list[float]:
    """
    目盛り位置を計算（下限からのオフセット値）

    Parameters
    ----------
    lower : float
        下限
    upper : float
        上限
    step : float
        目盛り幅（正の値）

    Returns
    -------
    list of float
        0, step, 2*step, ... （lower + tick <= upper の範囲）
    """
    if step <= 0:
        raise ValueError(f"目盛り幅は正の値で指定してください: {step}")
    if upper < lower:
        return []
    # 浮動小数点の誤差で上限の目盛りが落ちないように微小値を足す
    count = int(math.floor((upper - lower) / step + 1e-9)) + 1
    return (np.arange(count) * step).tolist()


def offset_points(points, lower) -> list[PlottedPoint]:
    """全ポイントから下限を引く（描画用）"""
    return [PlottedPoint(p.x, p.y - lower) for p in points]


def tick_label(value, lower) -> float:
    """オフセット値を元の値に戻す（目盛りラベル用）"""
    return value + lower

#!/usr/bin/env python
# coding: utf-8
"""
体重データの集計ライブラリ

日別レコードからグラフ用の系列（日別・月内の週別・年内の月別）を生成する。

- 値がない日（None）は「記録なし」として扱い、0とはみなさない
- 記録が1件もないバケットは出力に含めない（0埋めしない）
- 平均値は丸めずに返す（表示時にフォーマットする）
"""

import pandas as pd

from weightcal.calendar_utils import is_valid_day, month_length, to_calendar_month
from weightcal.models import Metric, PlottedPoint, records_to_frame

DAYS_PER_WEEK = 7


def _is_existing_day(year, month, day) -> bool:
    return 0 <= month <= 11 and is_valid_day(year, month, day)


def drop_nonexistent_days(df: pd.DataFrame) -> pd.DataFrame:
    """
    暦に存在しない日（4月31日など）の行を除外

    ファイルに残った古い行が集計・軸範囲に混ざらないよう、表示前に必ず通す。
    """
    if df.empty:
        return df
    mask = [_is_existing_day(y, m, d) for y, m, d in zip(df['year'], df['month'], df['day'])]
    return df[mask]


def _metric_frame(records, metric: Metric) -> pd.DataFrame:
    """指定メトリクスに値がある、存在する日のレコードだけのDataFrameを返す"""
    df = drop_nonexistent_days(records_to_frame(records))
    return df[df[metric.column].notna()]


def _to_points(series: pd.Series) -> list[PlottedPoint]:
    """インデックスをx、値をyとするポイントのリストに変換（x昇順）"""
    series = series.sort_index()
    return [PlottedPoint(int(x), float(y)) for x, y in series.items()]


def metric_values(records, metric: Metric, month=None) -> list[float]:
    """
    指定メトリクスの値（Noneを除く）を取得

    Parameters
    ----------
    records : list of DayRecord or None
    metric : Metric
        朝・夜の体重
    month : int, optional
        月（0-11）。指定時はその月のみ

    Returns
    -------
    list of float
    """
    df = _metric_frame(records, metric)
    if month is not None:
        df = df[df['month'] == month]
    return df[metric.column].tolist()


def by_day(records, month: int, metric: Metric) -> list[PlottedPoint]:
    """
    日別の系列を生成（平均なし）

    Parameters
    ----------
    records : list of DayRecord or None
        年単位または月単位のレコード
    month : int
        対象月（0-11）
    metric : Metric
        朝・夜の体重

    Returns
    -------
    list of PlottedPoint
        x=日。値がない日は含まない
    """
    df = _metric_frame(records, metric)
    df = df[df['month'] == month]
    if df.empty:
        return []
    # 同一日が重複した場合は後勝ち
    series = df.drop_duplicates(subset=['day'], keep='last').set_index('day')[metric.column]
    return _to_points(series)


def week_windows(year: int, month: int) -> list[tuple[int, int, int]]:
    """
    月を1日始まりの7日ごとの区間に分割

    暦の週ではなく月内の固定長区間。最終区間は7日未満になりうる。

    Parameters
    ----------
    year : int
        年
    month : int
        月（0-11）

    Returns
    -------
    list of tuple
        (週番号, 開始日, 日数) のリスト。週番号は1始まり

    Examples
    --------
    >>> week_windows(2024, 1)  # 2024年2月（29日）
    [(1, 1, 7), (2, 8, 7), (3, 15, 7), (4, 22, 7), (5, 29, 1)]
    """
    length = month_length(year, month)
    windows = []
    for week_start in range(1, length + 1, DAYS_PER_WEEK):
        size = min(length - week_start + 1, DAYS_PER_WEEK)
        index = (week_start - 1) // DAYS_PER_WEEK + 1
        windows.append((index, week_start, size))
    return windows


def by_week(records, year: int, month: int, metric: Metric) -> list[PlottedPoint]:
    """
    月内の7日区間ごとの平均系列を生成

    Parameters
    ----------
    records : list of DayRecord or None
    year : int
        年（月の日数の計算に使用）
    month : int
        対象月（0-11）
    metric : Metric
        朝・夜の体重

    Returns
    -------
    list of PlottedPoint
        x=週番号（1始まり）。記録のない区間は含まない
    """
    df = _metric_frame(records, metric)
    df = df[(df['year'] == year) & (df['month'] == month)]
    if df.empty:
        return []

    points = []
    for index, week_start, size in week_windows(year, month):
        in_window = (df['day'] >= week_start) & (df['day'] < week_start + size)
        values = df.loc[in_window, metric.column]
        if len(values) > 0:
            points.append(PlottedPoint(index, float(values.sum() / len(values))))
    return points


def by_month(records, year: int, metric: Metric) -> list[PlottedPoint]:
    """
    年内の月ごとの平均系列を生成

    Parameters
    ----------
    records : list of DayRecord or None
    year : int
        対象年
    metric : Metric
        朝・夜の体重

    Returns
    -------
    list of PlottedPoint
        x=月（1-12）。記録のない月は含まない
    """
    df = _metric_frame(records, metric)
    df = df[df['year'] == year]
    if df.empty:
        return []

    monthly = df.groupby('month')[metric.column].mean()
    monthly.index = [to_calendar_month(int(m)) for m in monthly.index]
    return _to_points(monthly)


def calc_weight_stats(records, metrics=None):
    """
    期間の体重統計を計算

    Parameters
    ----------
    records : list of DayRecord
        日昇順のレコード
    metrics : list of Metric, optional
        計算するメトリクス（Noneの場合は朝・夜の両方）

    Returns
    -------
    dict
        メトリクス名ごとの統計 {metric.column: {first, last, change, mean, days}}
        値がないメトリクスは含まない
    """
    if metrics is None:
        metrics = list(Metric)

    df = drop_nonexistent_days(records_to_frame(records)).sort_values(['year', 'month', 'day'])
    stats = {}
    for metric in metrics:
        vals = df[metric.column].dropna()
        if len(vals) >= 1:
            stats[metric.column] = {
                'first': vals.iloc[0],
                'last': vals.iloc[-1],
                'change': vals.iloc[-1] - vals.iloc[0] if len(vals) > 1 else 0,
                'mean': vals.mean(),
                'days': len(vals),
            }
    return stats

#!/usr/bin/env python
# coding: utf-8
"""
体重推移グラフの描画

ChartViewの描画用ポイント（値 - 下限）をプロットし、
縦軸の目盛りラベルは下限を足して元の値で表示する。
"""

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from weightcal.analytics.axis import tick_label
from weightcal.calendar_utils import from_calendar_month, month_name, to_calendar_month
from weightcal.models import Granularity, Metric

# 朝・夜の線の色
METRIC_COLORS = {
    Metric.MORNING: '#3FB8A2',
    Metric.EVENING: '#663FB8',
}

X_AXIS_LABELS = {
    Granularity.DAILY: 'Day',
    Granularity.WEEKLY: 'Week',
    Granularity.MONTHLY: 'Month',
}

# 目盛りが多すぎる場合に間引く上限
MAX_Y_TICKS = 40


def chart_title(view):
    """
    グラフのタイトル

    Examples
    --------
    'Morning weight 2024-03 (weekly)'
    """
    metric_label = 'Morning' if view.metric is Metric.MORNING else 'Evening'
    if view.granularity is Granularity.MONTHLY:
        period = f"{view.year}"
    else:
        period = f"{view.year}-{to_calendar_month(view.month):02d}"
    return f"{metric_label} weight {period} ({view.granularity.value})"


def x_tick_labels(view):
    """x軸のラベル（月別の場合は月名の略称）"""
    if view.granularity is Granularity.MONTHLY:
        return [month_name(from_calendar_month(p.x))[:3] for p in view.points]
    return [p.label for p in view.points]


def thin_ticks(ticks, max_ticks=MAX_Y_TICKS):
    """目盛りをmax_ticks個以下に間引く（先頭は必ず残す）"""
    if len(ticks) <= max_ticks:
        return list(ticks)
    stride = -(-len(ticks) // max_ticks)
    return list(ticks[::stride])


def plot_chart_view(view, save_path, title=None):
    """
    ChartViewを折れ線グラフとして保存

    Parameters
    ----------
    view : ChartView
        Controller.chart_view() の結果
    save_path : Path
        保存先パス（PNG）
    title : str, optional
        タイトル（Noneの場合はchart_titleで生成）

    Returns
    -------
    bool
        描画したポイントがあればTrue
    """
    points = view.offset_points
    xs = [p.x for p in points]
    ys = [p.y for p in points]

    fig, ax = plt.subplots(figsize=(10, 5))

    color = METRIC_COLORS[view.metric]
    ax.plot(xs, ys, 'o-', color=color, linewidth=2, markersize=6,
            label='Morning' if view.metric is Metric.MORNING else 'Evening')

    ticks = thin_ticks(view.ticks)
    ax.set_yticks(ticks)
    ax.set_yticklabels([f"{tick_label(t, view.lower_bound):g}" for t in ticks])
    if ticks:
        ax.set_ylim(0, ticks[-1] + view.axis_step)

    ax.set_xticks(xs)
    ax.set_xticklabels(x_tick_labels(view))
    ax.set_xlabel(X_AXIS_LABELS[view.granularity])
    ax.set_ylabel('kg')
    ax.set_title(title or chart_title(view))
    ax.grid(axis='y', alpha=0.3)
    if points:
        ax.legend(loc='upper left')

    plt.tight_layout()
    plt.savefig(save_path, dpi=150, bbox_inches='tight')
    plt.close(fig)

    return bool(points)

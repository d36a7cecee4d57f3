#!/usr/bin/env python
# coding: utf-8
"""
Jinja2カスタムフィルタ

レポートテンプレート用のフォーマット関数を提供
"""

import pandas as pd

from weightcal.analytics.steps import StepStatus, step_status
from weightcal.calendar_utils import month_name

STEP_BADGES = {
    StepStatus.REACHED: '🟢',
    StepStatus.MISSED: '🔴',
    StepStatus.NONE: '',
}


def format_change(value, unit='', positive_is_good=True):
    """
    変化量をフォーマット（良い変化は太字）

    Parameters
    ----------
    value : float
        変化量
    unit : str
        単位（'kg'など）
    positive_is_good : bool
        プラスが良い変化かどうか（体重の減量中はFalse）

    Returns
    -------
    str
        フォーマットされた変化量

    Examples
    --------
    >>> format_change(-1.3, 'kg', positive_is_good=False)
    '**-1.30kg**'
    >>> format_change(0, 'kg')
    '±0kg'
    """
    if value is None or pd.isna(value):
        return "-"
    if value == 0:
        return f"±0{unit}"

    sign = '+' if value > 0 else ''
    formatted = f"{sign}{value:.2f}{unit}"

    is_good = (value > 0 and positive_is_good) or (value < 0 and not positive_is_good)
    if is_good:
        return f"**{formatted}**"
    return formatted


def number_format(value, decimals=1):
    """
    数値をフォーマット（NaN・None対応）

    Examples
    --------
    >>> number_format(72.345, 1)
    '72.3'
    >>> number_format(None, 1)
    '-'
    """
    if value is None or pd.isna(value):
        return '-'
    return f"{value:.{decimals}f}"


def steps_badge(steps, target):
    """
    歩数に目標達成の印を付ける

    Examples
    --------
    >>> steps_badge(9000, 8000)
    '🟢 9000'
    >>> steps_badge(None, 8000)
    '-'
    """
    status = step_status(steps, target)
    if status is StepStatus.NONE:
        return '-'
    return f"{STEP_BADGES[status]} {steps}"


def month_label(month):
    """0始まりの月を月名に変換（例: 0 -> 'January'）"""
    return month_name(month)

#!/usr/bin/env python
# coding: utf-8
"""
月インデックス変換ユーティリティ

アプリ内部の月は 0-11（0始まり）で扱う。
calendar / datetime / pandas は 1-12 を要求するので、変換は必ずここを通す。
"""

import calendar
from datetime import date
from typing import Optional

WEEKDAY_NAMES = ['Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat', 'Sun']
MONTH_NAMES = [
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December',
]


def to_calendar_month(month: int) -> int:
    """
    0始まりの月を1始まりに変換

    Parameters
    ----------
    month : int
        月（0-11）

    Returns
    -------
    int
        月（1-12）

    Raises
    ------
    ValueError
        範囲外の月が渡された場合
    """
    if not 0 <= month <= 11:
        raise ValueError(f"月は0-11で指定してください: {month}")
    return month + 1


def from_calendar_month(month: int) -> int:
    """1始まりの月（1-12）を0始まり（0-11）に変換"""
    if not 1 <= month <= 12:
        raise ValueError(f"月は1-12で指定してください: {month}")
    return month - 1


def month_length(year: int, month: int) -> int:
    """
    月の日数を取得

    Parameters
    ----------
    year : int
        年
    month : int
        月（0-11）

    Returns
    -------
    int
        日数（28-31）
    """
    return calendar.monthrange(year, to_calendar_month(month))[1]


def is_valid_day(year: int, month: int, day: int) -> bool:
    """日付がその月の範囲内か（月は0始まり）"""
    return 1 <= day <= month_length(year, month)


def to_date(year: int, month: int, day: int) -> date:
    """(year, 0始まりの月, day) を date に変換"""
    return date(year, to_calendar_month(month), day)


def weekday_name(year: int, month: int, day: int) -> str:
    """曜日の略称（Mon, Tue, ...）"""
    return WEEKDAY_NAMES[to_date(year, month, day).weekday()]


def month_name(month: int) -> str:
    """0始まりの月から英語の月名を取得"""
    return MONTH_NAMES[to_calendar_month(month) - 1]


def current_year_month(today: Optional[date] = None) -> tuple[int, int]:
    """今日の (year, 0始まりの月)"""
    today = today or date.today()
    return today.year, from_calendar_month(today.month)

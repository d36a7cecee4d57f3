"""
入力値の変換ユーティリティ

フォームやコマンドラインの文字列を体重・歩数に変換する。
数値として解釈できない入力は例外にせず「値なし」（None）として扱う。
"""

import math

import pandas as pd

from weightcal.models import Field


def _to_number(value):
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip().replace(',', '.')
        if not value:
            return None
    number = pd.to_numeric(value, errors='coerce')
    if pd.isna(number) or math.isinf(number):
        return None
    return float(number)


def parse_weight(value):
    """
    体重を変換

    Examples
    --------
    >>> parse_weight('72.4')
    72.4
    >>> parse_weight('72,4')
    72.4
    >>> parse_weight('abc') is None
    True
    """
    number = _to_number(value)
    if number is None or number < 0:
        return None
    return number


def parse_steps(value):
    """
    歩数を変換（小数は切り捨て、負の値はNone）

    Examples
    --------
    >>> parse_steps('8500')
    8500
    >>> parse_steps('-3') is None
    True
    """
    number = _to_number(value)
    if number is None or number < 0:
        return None
    return int(number)


def parse_field_value(field, value):
    """フィールドに応じて値を変換"""
    if Field(field) is Field.STEPS:
        return parse_steps(value)
    return parse_weight(value)

#!/usr/bin/env python
# coding: utf-8
"""
データモデル

日別レコード、集計結果のポイント、設定値、各種選択肢の列挙型を定義。
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import pandas as pd

KEY_COLUMNS = ['year', 'month', 'day']
VALUE_COLUMNS = ['morning_weight', 'evening_weight', 'steps']
ENTRY_COLUMNS = KEY_COLUMNS + VALUE_COLUMNS

DEFAULT_TARGET_STEPS = 0
DEFAULT_CHART_STEP = 0.5
MIN_CHART_STEP = 0.1


class Metric(Enum):
    """集計対象の体重（朝・夜）"""
    MORNING = 'morning_weight'
    EVENING = 'evening_weight'

    @property
    def column(self):
        return self.value


class Field(Enum):
    """日別レコードの編集可能なフィールド"""
    MORNING_WEIGHT = 'morning_weight'
    EVENING_WEIGHT = 'evening_weight'
    STEPS = 'steps'

    @property
    def column(self):
        return self.value


class Granularity(Enum):
    """グラフの集計単位"""
    DAILY = 'daily'
    WEEKLY = 'weekly'
    MONTHLY = 'monthly'


class Tab(Enum):
    """画面（タブ）"""
    CALENDAR = 'calendar'
    CHART = 'chart'
    SETTINGS = 'settings'


@dataclass
class DayRecord:
    """
    1日分の記録

    (year, month, day) が自然キー。monthは0始まり（0-11）。
    """
    year: int
    month: int
    day: int
    morning_weight: Optional[float] = None
    evening_weight: Optional[float] = None
    steps: Optional[int] = None

    @property
    def key(self):
        return (self.year, self.month, self.day)

    def value(self, metric: Metric) -> Optional[float]:
        return getattr(self, metric.column)

    def is_blank(self) -> bool:
        return all(getattr(self, col) is None for col in VALUE_COLUMNS)


@dataclass(frozen=True)
class PlottedPoint:
    """グラフの1点（x: 日・週番号・月番号、y: 値）"""
    x: int
    y: float

    @property
    def label(self) -> str:
        return str(self.x)


@dataclass
class Settings:
    """ユーザー設定（目標歩数・グラフ目盛り幅）"""
    target_steps: int = DEFAULT_TARGET_STEPS
    chart_step: float = DEFAULT_CHART_STEP

    def __post_init__(self):
        self.target_steps = clamp_target_steps(self.target_steps)
        self.chart_step = clamp_chart_step(self.chart_step)


def clamp_target_steps(value) -> int:
    """目標歩数を0以上に丸める"""
    return max(0, int(value))


def clamp_chart_step(value) -> float:
    """目盛り幅を0.1以上に丸める"""
    return max(MIN_CHART_STEP, float(value))


def _none_if_missing(value):
    if value is None or pd.isna(value):
        return None
    return value


def records_to_frame(records) -> pd.DataFrame:
    """
    DayRecordのリストをDataFrameに変換

    欠損値はNaN（歩数は<NA>）のまま保持し、0では埋めない。

    Parameters
    ----------
    records : list of DayRecord or None

    Returns
    -------
    DataFrame
        ENTRY_COLUMNSを持つDataFrame（空の場合も列は揃える）
    """
    rows = [
        {
            'year': r.year,
            'month': r.month,
            'day': r.day,
            'morning_weight': r.morning_weight,
            'evening_weight': r.evening_weight,
            'steps': r.steps,
        }
        for r in (records or [])
    ]
    df = pd.DataFrame(rows, columns=ENTRY_COLUMNS)
    return normalize_frame(df)


def normalize_frame(df: pd.DataFrame) -> pd.DataFrame:
    """エントリーテーブルの型を揃える"""
    df = df.copy()
    for col in KEY_COLUMNS:
        df[col] = df[col].astype('int64')
    for col in ['morning_weight', 'evening_weight']:
        df[col] = pd.to_numeric(df[col], errors='coerce').astype('float64')
    df['steps'] = pd.to_numeric(df['steps'], errors='coerce').astype('Int64')
    return df[ENTRY_COLUMNS]


def frame_to_records(df: pd.DataFrame) -> list[DayRecord]:
    """DataFrameをDayRecordのリストに変換（欠損値はNone）"""
    records = []
    for row in df.itertuples(index=False):
        morning = _none_if_missing(row.morning_weight)
        evening = _none_if_missing(row.evening_weight)
        steps = _none_if_missing(row.steps)
        records.append(DayRecord(
            year=int(row.year),
            month=int(row.month),
            day=int(row.day),
            morning_weight=float(morning) if morning is not None else None,
            evening_weight=float(evening) if evening is not None else None,
            steps=int(steps) if steps is not None else None,
        ))
    return records

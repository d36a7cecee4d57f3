#!/usr/bin/env python
# coding: utf-8
"""
日別レコードのストア

(year, month, day) を自然キーとするテーブルをCSV（pandas）で保持する。
csv_pathを省略するとメモリ上のみで動作する。

- 1プロセスにつき1インスタンスを生成し、コントローラーに渡して使う
- すべての更新はロック内で行い、ファイル書き込み成功後にメモリ上のテーブルを差し替える
- 書き込み後、(year, month) をリスナーに通知する
"""

import logging
import threading
from pathlib import Path

import numpy as np
import pandas as pd

from weightcal.calendar_utils import is_valid_day, month_length, to_calendar_month
from weightcal.models import (
    ENTRY_COLUMNS,
    KEY_COLUMNS,
    Field,
    frame_to_records,
    normalize_frame,
    records_to_frame,
)
from weightcal.utils import csv_utils

logger = logging.getLogger(__name__)


class DuplicateEntryError(ValueError):
    """同じ (year, month, day) のレコードが既に存在する"""


def _validate_key(year, month, day):
    if not is_valid_day(year, month, day):
        raise ValueError(f"存在しない日付です: year={year}, month={month}, day={day}")


def _storage_value(field: Field, value):
    """フィールド値をテーブル格納用に変換（Noneは欠損値）"""
    if value is None:
        return pd.NA if field is Field.STEPS else np.nan
    if field is Field.STEPS:
        steps = int(value)
        if steps < 0:
            raise ValueError(f"歩数は0以上で指定してください: {value}")
        return steps
    return float(value)


class EntryStore:
    """日別レコードのストア"""

    def __init__(self, csv_path=None):
        """
        Parameters
        ----------
        csv_path : str or Path, optional
            保存先CSV。Noneの場合はメモリ上のみ
        """
        self.csv_path = Path(csv_path) if csv_path is not None else None
        self._lock = threading.RLock()
        self._listeners = []
        self._df = self._load()

    def _load(self):
        if self.csv_path is None:
            return records_to_frame([])
        df = csv_utils.read_csv_table(self.csv_path, ENTRY_COLUMNS)
        df = csv_utils.dedupe_by_columns(df, KEY_COLUMNS, sort_by=KEY_COLUMNS)
        logger.debug(f"Loaded {len(df)} entries from {self.csv_path}")
        return normalize_frame(df)

    def _commit(self, df):
        """新しいテーブルを保存してから差し替える（失敗時は何も変更しない）"""
        df = normalize_frame(df)
        if self.csv_path is not None:
            try:
                csv_utils.write_csv_atomic(df, self.csv_path)
            except OSError as e:
                logger.error(f"Failed to write entries to {self.csv_path}: {e}")
                raise
        self._df = df

    def _notify(self, year, month):
        for listener in list(self._listeners):
            listener(year, month)

    def _mask(self, year, month=None, day=None):
        df = self._df
        mask = df['year'] == year
        if month is not None:
            mask &= df['month'] == month
        if day is not None:
            mask &= df['day'] == day
        return mask

    # ------------------------------------------------------------------
    # 読み込み
    # ------------------------------------------------------------------
    def get_by_year_month(self, year, month):
        """指定月のレコード（日昇順）"""
        with self._lock:
            df = self._df[self._mask(year, month)]
        return frame_to_records(df.sort_values('day'))

    def get_by_year(self, year):
        """指定年のレコード（月・日昇順）"""
        with self._lock:
            df = self._df[self._mask(year)]
        return frame_to_records(df.sort_values(['month', 'day']))

    def exists_by_key(self, year, month, day):
        with self._lock:
            return bool(self._mask(year, month, day).any())

    def exists_for_month(self, year, month):
        with self._lock:
            return bool(self._mask(year, month).any())

    def __len__(self):
        with self._lock:
            return len(self._df)

    # ------------------------------------------------------------------
    # 書き込み
    # ------------------------------------------------------------------
    def upsert_field(self, year, month, day, field, value):
        """
        1フィールドを更新（レコードがなければ作成）

        他のフィールドは変更しない。

        Parameters
        ----------
        year, month, day : int
            自然キー（monthは0-11）
        field : Field or str
            更新するフィールド
        value : float, int or None
            新しい値（Noneで消去）
        """
        field = Field(field)
        _validate_key(year, month, day)
        stored = _storage_value(field, value)

        with self._lock:
            mask = self._mask(year, month, day)
            if mask.any():
                df = self._df.copy()
                df.loc[mask, field.column] = stored
            else:
                row = self._blank_row(year, month, day)
                row[field.column] = None if value is None else stored
                df = self._append_rows([row])
            self._commit(df)
        logger.debug(f"Upserted {field.column}={value} for {year}-{month}-{day}")
        self._notify(year, month)

    def insert_blank(self, year, month, day):
        """
        空のレコードを追加

        Raises
        ------
        DuplicateEntryError
            既にレコードが存在する場合
        """
        _validate_key(year, month, day)
        with self._lock:
            if self._mask(year, month, day).any():
                raise DuplicateEntryError(f"レコードが既に存在します: {year}-{month}-{day}")
            self._commit(self._append_rows([self._blank_row(year, month, day)]))
        self._notify(year, month)

    def ensure_month(self, year, month):
        """
        月のレコードがなければ全日分の空レコードを作成

        存在チェックと一括追加を同じロック内で行うため、同時に呼ばれても重複しない。

        Returns
        -------
        int
            追加したレコード数（既に存在する場合は0）
        """
        with self._lock:
            if self._mask(year, month).any():
                return 0
            days = month_length(year, month)
            rows = [self._blank_row(year, month, day) for day in range(1, days + 1)]
            self._commit(self._append_rows(rows))
        logger.info(f"Materialized {days} days for {year}-{to_calendar_month(month):02d}")
        self._notify(year, month)
        return days

    @staticmethod
    def _blank_row(year, month, day):
        row = {col: None for col in ENTRY_COLUMNS}
        row.update({'year': year, 'month': month, 'day': day})
        return row

    def _append_rows(self, rows):
        new = normalize_frame(pd.DataFrame(rows, columns=ENTRY_COLUMNS))
        if self._df.empty:
            return new
        return pd.concat([self._df, new], ignore_index=True)

    # ------------------------------------------------------------------
    # 変更通知
    # ------------------------------------------------------------------
    def subscribe(self, listener):
        """変更通知を登録（listener(year, month) が書き込み後に呼ばれる）"""
        self._listeners.append(listener)

    def unsubscribe(self, listener):
        if listener in self._listeners:
            self._listeners.remove(listener)

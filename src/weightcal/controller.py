#!/usr/bin/env python
# coding: utf-8
"""
アプリケーションコントローラー

表示状態（年・月・タブ・集計単位・朝夜）を保持し、
ストアと集計ライブラリの間を仲介する。

- 書き込みは1スレッドのExecutorで順番に実行（発行順に適用される）
- 派生データ（グラフ系列）は次に読まれたときに再計算する
- ストア・設定の変更通知でキャッシュを破棄する
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from weightcal.analytics import aggregation, axis
from weightcal.analytics.steps import step_status
from weightcal.calendar_utils import current_year_month, is_valid_day, month_length, to_calendar_month, weekday_name
from weightcal.models import Field, Granularity, Metric, PlottedPoint, Tab
from weightcal.storage.preferences import CHART_STEP, TARGET_STEPS
from weightcal.utils.input_parsing import parse_field_value

logger = logging.getLogger(__name__)


@dataclass
class ChartView:
    """グラフ描画に必要なデータ一式"""
    year: int
    month: int
    metric: Metric
    requested_granularity: Granularity
    granularity: Granularity
    points: list[PlottedPoint]
    lower_bound: float
    upper_bound: float
    axis_step: float
    ticks: list[float] = field(default_factory=list)

    @property
    def offset_points(self) -> list[PlottedPoint]:
        """下限を引いた描画用ポイント"""
        return axis.offset_points(self.points, self.lower_bound)

    @property
    def tick_labels(self) -> list[float]:
        return [axis.tick_label(t, self.lower_bound) for t in self.ticks]

    @property
    def fell_back_to_daily(self) -> bool:
        return self.granularity is not self.requested_granularity


class Controller:
    """画面状態とデータ操作のコントローラー"""

    def __init__(self, entry_store, preference_store, today=None, executor=None):
        """
        Parameters
        ----------
        entry_store : EntryStore
            日別レコードのストア（プロセスで1つ）
        preference_store : PreferenceStore
            ユーザー設定ストア
        today : date, optional
            初期表示する日付（Noneなら今日）
        executor : Executor, optional
            書き込み用Executor（Noneなら1スレッドのThreadPoolExecutor）
        """
        self.entry_store = entry_store
        self.preference_store = preference_store
        self.year, self.month = current_year_month(today)
        self.tab = Tab.CALENDAR
        self.granularity = Granularity.DAILY
        self.metric = Metric.MORNING

        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix='weightcal-writer')
        self._pending = []
        self._pending_lock = threading.Lock()
        self._chart_cache = None
        self._generation = 0

        self.entry_store.subscribe(self._on_entries_changed)
        self.preference_store.subscribe(self._on_preference_changed)

    # ------------------------------------------------------------------
    # 状態遷移
    # ------------------------------------------------------------------
    def select_tab(self, tab):
        self.tab = Tab(tab)

    def select_granularity(self, granularity):
        self.granularity = Granularity(granularity)
        self._invalidate()

    def select_metric(self, metric):
        self.metric = Metric(metric)
        self._invalidate()

    def select_month(self, month):
        """表示月を変更し、その月のレコード作成を予約する（monthは0-11）"""
        to_calendar_month(month)
        self.month = month
        self._invalidate()
        return self._submit(self.ensure_month_materialized, self.year, month)

    def select_year(self, year):
        self.year = int(year)
        self._invalidate()
        return self._submit(self.ensure_month_materialized, self.year, self.month)

    def select_period(self, year, month):
        """年と月をまとめて変更し、その月のレコード作成だけを予約する"""
        to_calendar_month(month)
        self.year = int(year)
        self.month = month
        self._invalidate()
        return self._submit(self.ensure_month_materialized, self.year, month)

    # ------------------------------------------------------------------
    # 書き込み
    # ------------------------------------------------------------------
    def ensure_month_materialized(self, year, month):
        """
        月のレコードがなければ全日分の空レコードを作成（冪等）

        Returns
        -------
        int
            作成したレコード数
        """
        return self.entry_store.ensure_month(year, month)

    def update_field(self, year, month, day, field, value):
        """
        1日分の1フィールドを更新（なければ作成）

        書き込みはバックグラウンドで実行し、発行順に適用される。
        数値に変換できない値はNoneとして書き込む。

        Returns
        -------
        Future
            書き込みの完了を表すFuture

        Raises
        ------
        ValueError
            存在しない日付の場合
        """
        field = Field(field)
        if not is_valid_day(year, month, day):
            raise ValueError(f"存在しない日付です: year={year}, month={month}, day={day}")
        parsed = parse_field_value(field, value)
        return self._submit(self.entry_store.upsert_field, year, month, day, field, parsed)

    def update_field_from_text(self, day, field, text):
        """選択中の年月の1日分をテキスト入力から更新"""
        return self.update_field(self.year, self.month, day, field, text)

    def _submit(self, fn, *args):
        future = self._executor.submit(fn, *args)
        with self._pending_lock:
            self._pending.append(future)
        future.add_done_callback(self._on_write_done)
        return future

    def _on_write_done(self, future):
        error = future.exception()
        if error is not None:
            # 失敗した書き込みはflush()で例外を送出するまで残す
            logger.error(f"Write failed: {error}")
            return
        self._forget(future)

    def _forget(self, future):
        with self._pending_lock:
            if future in self._pending:
                self._pending.remove(future)

    def flush(self):
        """
        未完了の書き込みをすべて待つ

        失敗した書き込みがあれば、全件待った後に最初の例外を送出する。
        """
        with self._pending_lock:
            pending = list(self._pending)
        errors = []
        for future in pending:
            error = future.exception()
            self._forget(future)
            if error is not None:
                errors.append(error)
        if errors:
            raise errors[0]

    def close(self):
        """書き込みを完了させて購読を解除"""
        try:
            self.flush()
        finally:
            self.entry_store.unsubscribe(self._on_entries_changed)
            self.preference_store.unsubscribe(self._on_preference_changed)
            if self._owns_executor:
                self._executor.shutdown(wait=True)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    # ------------------------------------------------------------------
    # 読み込み
    # ------------------------------------------------------------------
    def month_entries(self):
        """
        選択中の月のレコード（日昇順）

        月の日数を超える日（前に表示した長い月の名残など）は除外する。
        """
        records = self.entry_store.get_by_year_month(self.year, self.month)
        length = month_length(self.year, self.month)
        return [r for r in records if 1 <= r.day <= length]

    def calendar_rows(self):
        """
        カレンダー編集画面用の行データ

        Returns
        -------
        list of dict
            {day, weekday, morning_weight, evening_weight, steps, step_status}
        """
        target = self.get_target_steps()
        return [
            {
                'day': r.day,
                'weekday': weekday_name(self.year, self.month, r.day),
                'morning_weight': r.morning_weight,
                'evening_weight': r.evening_weight,
                'steps': r.steps,
                'step_status': step_status(r.steps, target),
            }
            for r in self.month_entries()
        ]

    def chart_view(self) -> ChartView:
        """現在の選択状態のグラフデータ（キャッシュがなければ再計算）"""
        cache = self._chart_cache
        key = (self.year, self.month, self.metric, self.granularity)
        if cache is not None and cache[0] == key:
            return cache[1]
        generation = self._generation
        view = self._build_chart_view()
        # 計算中に変更通知があった場合はキャッシュしない
        if generation == self._generation:
            self._chart_cache = (key, view)
        return view

    def _build_chart_view(self) -> ChartView:
        records = self.entry_store.get_by_year(self.year)
        values = aggregation.metric_values(records, self.metric)
        lower = axis.lower_bound(values)
        upper = axis.upper_bound(values)

        granularity = self.granularity
        if granularity is Granularity.WEEKLY and not axis.has_enough_data_for_weekly_view(
                records, self.month, self.metric):
            logger.debug("Not enough readings for weekly view, falling back to daily")
            granularity = Granularity.DAILY

        if granularity is Granularity.DAILY:
            points = aggregation.by_day(records, self.month, self.metric)
        elif granularity is Granularity.WEEKLY:
            points = aggregation.by_week(records, self.year, self.month, self.metric)
        else:
            points = aggregation.by_month(records, self.year, self.metric)

        step = self.get_chart_step()
        return ChartView(
            year=self.year,
            month=self.month,
            metric=self.metric,
            requested_granularity=self.granularity,
            granularity=granularity,
            points=points,
            lower_bound=lower,
            upper_bound=upper,
            axis_step=step,
            ticks=axis.axis_ticks(lower, upper, step),
        )

    # ------------------------------------------------------------------
    # 設定
    # ------------------------------------------------------------------
    def get_target_steps(self) -> int:
        return self.preference_store.get(TARGET_STEPS)

    def set_target_steps(self, steps) -> int:
        return self.preference_store.set(TARGET_STEPS, steps)

    def get_chart_step(self) -> float:
        return self.preference_store.get(CHART_STEP)

    def set_chart_step(self, step) -> float:
        return self.preference_store.set(CHART_STEP, step)

    # ------------------------------------------------------------------
    # 変更通知
    # ------------------------------------------------------------------
    def _invalidate(self):
        self._generation += 1
        self._chart_cache = None

    def _on_entries_changed(self, year, month):
        if year == self.year:
            self._invalidate()

    def _on_preference_changed(self, key, value):
        self._invalidate()


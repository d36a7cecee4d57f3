"""
データ集計・計算モジュール

日別レコードからグラフ系列・軸範囲・歩数統計を計算（ストレージ非依存）
"""

from . import aggregation
from . import axis
from . import steps

"""
グラフ描画モジュール
"""

from .line_chart import chart_title, plot_chart_view

__all__ = ['chart_title', 'plot_chart_view']

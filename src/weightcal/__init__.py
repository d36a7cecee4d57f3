"""
体重カレンダー

日別の体重（朝・夜）と歩数を記録し、日次・週次・月次の推移を集計する。
"""

__version__ = '0.1.0'

"""
スクリプト共通の引数処理ユーティリティ
"""
from datetime import date, datetime
from pathlib import Path
from typing import Optional, Tuple

from weightcal import config
from weightcal.calendar_utils import from_calendar_month, to_calendar_month
from weightcal.models import Granularity, Metric


def add_storage_args(parser):
    """
    保存先の引数を追加

    Parameters
    ----------
    parser : ArgumentParser
        argparseパーサー
    """
    parser.add_argument(
        '--entries',
        type=Path,
        default=config.ENTRIES_CSV,
        help='日別データのCSV'
    )
    parser.add_argument(
        '--settings',
        type=Path,
        default=config.SETTINGS_JSON,
        help='設定ファイル（JSON）'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='詳細ログを出力'
    )


def add_period_args(parser):
    """
    表示期間の引数を追加

    Parameters
    ----------
    parser : ArgumentParser
        argparseパーサー
    """
    parser.add_argument(
        '--month',
        type=str,
        default='current',
        help='月番号（1-12）または "current" で今月を指定'
    )
    parser.add_argument(
        '--year',
        type=int,
        default=None,
        help='年（デフォルト: 今年）'
    )


def add_chart_args(parser):
    """グラフ用の引数（朝夜・集計単位）を追加"""
    parser.add_argument(
        '--metric',
        choices=[m.name.lower() for m in Metric],
        default='morning',
        help='朝（morning）または夜（evening）の体重'
    )
    parser.add_argument(
        '--granularity',
        choices=[g.value for g in Granularity],
        default=Granularity.DAILY.value,
        help='集計単位'
    )


def parse_period_args(args, today: Optional[date] = None) -> Tuple[int, int]:
    """
    年・月の引数を解析

    Parameters
    ----------
    args : argparse.Namespace
        パース済み引数
    today : date, optional
        基準日（Noneの場合は今日）

    Returns
    -------
    tuple
        (year, month) のタプル。monthは0始まり（0-11）

    Raises
    ------
    ValueError
        月の指定が不正な場合
    """
    now = today or datetime.now().date()
    year = args.year or now.year

    if args.month is None or args.month.lower() == 'current':
        return year, from_calendar_month(now.month)

    try:
        month = int(args.month)
    except ValueError:
        raise ValueError(f"月は1-12または 'current' で指定してください: {args.month}")
    return year, from_calendar_month(month)


def parse_chart_args(args) -> Tuple[Metric, Granularity]:
    """朝夜・集計単位の引数を列挙型に変換"""
    return Metric[args.metric.upper()], Granularity(args.granularity)


def determine_output_dir(base_dir: Path, report_type: str, year: int, month: int) -> Path:
    """
    出力ディレクトリを決定

    Parameters
    ----------
    base_dir : Path
        レポートのベースディレクトリ
    report_type : str
        レポートタイプ（'calendar', 'chart'）
    year : int
        年
    month : int
        月（0-11）

    Returns
    -------
    Path
        出力ディレクトリパス（例: reports/calendar/2024-03）
    """
    return base_dir / report_type / f'{year}-{to_calendar_month(month):02d}'

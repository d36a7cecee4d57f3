#!/usr/bin/env python
# coding: utf-8
"""
体重・歩数の記録スクリプト

Usage:
    python record_entry.py [--date YYYY-MM-DD] [--morning <kg>] [--evening <kg>] [--steps <N>]

数値として解釈できない値は空欄として記録する。空文字（--morning ""）で値を消去。
"""

import sys
from pathlib import Path
from datetime import datetime

project_root = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(project_root / 'src'))

from weightcal import config
from weightcal.calendar_utils import from_calendar_month
from weightcal.controller import Controller
from weightcal.models import Field
from weightcal.storage import EntryStore, PreferenceStore
from weightcal.utils.report_args import add_storage_args

FIELD_ARGS = [
    ('morning', Field.MORNING_WEIGHT),
    ('evening', Field.EVENING_WEIGHT),
    ('steps', Field.STEPS),
]


def main():
    import argparse

    parser = argparse.ArgumentParser(description='体重・歩数の記録')
    parser.add_argument('--date', type=str, default=None, help='日付（YYYY-MM-DD、デフォルト: 今日）')
    parser.add_argument('--morning', type=str, default=None, help='朝の体重（kg）')
    parser.add_argument('--evening', type=str, default=None, help='夜の体重（kg）')
    parser.add_argument('--steps', type=str, default=None, help='歩数')
    add_storage_args(parser)
    args = parser.parse_args()

    config.setup_logging(args.verbose)

    try:
        target = datetime.strptime(args.date, '%Y-%m-%d').date() if args.date else datetime.now().date()
    except ValueError:
        print(f"日付の形式が不正です: {args.date}")
        return 1

    updates = [(field, getattr(args, name)) for name, field in FIELD_ARGS if getattr(args, name) is not None]
    if not updates:
        print("--morning, --evening, --steps のいずれかを指定してください")
        return 1

    year, month, day = target.year, from_calendar_month(target.month), target.day

    store = EntryStore(args.entries)
    preferences = PreferenceStore(args.settings)
    with Controller(store, preferences, today=target) as controller:
        controller.ensure_month_materialized(year, month)
        for field, value in updates:
            controller.update_field(year, month, day, field, value)

    record = next(r for r in store.get_by_year_month(year, month) if r.day == day)
    print(f"{target:%Y-%m-%d}: 朝={record.morning_weight} 夜={record.evening_weight} 歩数={record.steps}")
    print(f"保存先: {args.entries}")
    return 0


if __name__ == '__main__':
    exit(main())

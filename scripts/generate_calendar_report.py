#!/usr/bin/env python
# coding: utf-8
"""
月間カレンダーレポート生成スクリプト

表示する月のレコードがなければ全日分の空レコードを作成してから出力する。

Usage:
    python generate_calendar_report.py [--month <N|current>] [--year <YYYY>]
"""

import sys
from pathlib import Path

project_root = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(project_root / 'src'))

from weightcal import config
from weightcal.analytics.aggregation import calc_weight_stats
from weightcal.analytics.steps import calc_steps_stats
from weightcal.controller import Controller
from weightcal.storage import EntryStore, PreferenceStore
from weightcal.templates import CalendarReportRenderer
from weightcal.utils.report_args import (
    add_period_args,
    add_storage_args,
    determine_output_dir,
    parse_period_args,
)


def main():
    import argparse

    parser = argparse.ArgumentParser(description='Weight Calendar Month Report')
    parser.add_argument('--output', type=Path, default=None, help='出力ディレクトリ')
    add_period_args(parser)
    add_storage_args(parser)
    args = parser.parse_args()

    config.setup_logging(args.verbose)

    try:
        year, month = parse_period_args(args)
    except ValueError as e:
        print(e)
        return 1

    store = EntryStore(args.entries)
    preferences = PreferenceStore(args.settings)
    with Controller(store, preferences) as controller:
        controller.select_period(year, month)
        controller.flush()

        records = controller.month_entries()
        target_steps = controller.get_target_steps()
        context = {
            'year': year,
            'month': month,
            'rows': controller.calendar_rows(),
            'target_steps': target_steps,
            'weight_stats': calc_weight_stats(records),
            'steps_stats': calc_steps_stats(records, target_steps),
        }

    print(f'Data: {len(records)} days')

    output_dir = args.output or determine_output_dir(config.REPORTS_DIR, 'calendar', year, month)
    output_dir.mkdir(parents=True, exist_ok=True)

    renderer = CalendarReportRenderer()
    report = renderer.render_month_report(context)

    report_path = output_dir / 'REPORT.md'
    with open(report_path, 'w', encoding='utf-8') as f:
        f.write(report)

    print(f'Report: {report_path}')
    return 0


if __name__ == '__main__':
    exit(main())

#!/usr/bin/env python
# coding: utf-8
"""
体重推移グラフレポート生成スクリプト

Usage:
    python generate_chart_report.py [--month <N|current>] [--year <YYYY>]
                                    [--metric morning|evening]
                                    [--granularity daily|weekly|monthly]
"""

import sys
from pathlib import Path

project_root = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(project_root / 'src'))

from weightcal import config
from weightcal.analytics.axis import MIN_DAYS_FOR_WEEKLY_VIEW
from weightcal.charts import chart_title, plot_chart_view
from weightcal.charts.line_chart import X_AXIS_LABELS
from weightcal.controller import Controller
from weightcal.models import Tab
from weightcal.storage import EntryStore, PreferenceStore
from weightcal.templates import CalendarReportRenderer
from weightcal.utils.report_args import (
    add_chart_args,
    add_period_args,
    add_storage_args,
    determine_output_dir,
    parse_chart_args,
    parse_period_args,
)


def main():
    import argparse

    parser = argparse.ArgumentParser(description='Weight Chart Report')
    parser.add_argument('--output', type=Path, default=None, help='出力ディレクトリ')
    add_period_args(parser)
    add_chart_args(parser)
    add_storage_args(parser)
    args = parser.parse_args()

    config.setup_logging(args.verbose)

    try:
        year, month = parse_period_args(args)
    except ValueError as e:
        print(e)
        return 1
    metric, granularity = parse_chart_args(args)

    store = EntryStore(args.entries)
    preferences = PreferenceStore(args.settings)
    with Controller(store, preferences) as controller:
        controller.select_tab(Tab.CHART)
        controller.select_period(year, month)
        controller.flush()
        controller.select_metric(metric)
        controller.select_granularity(granularity)
        view = controller.chart_view()

    if view.fell_back_to_daily:
        print(f'Not enough data for weekly view (< {MIN_DAYS_FOR_WEEKLY_VIEW} days), showing daily values')
    print(f'Points: {len(view.points)}')

    output_dir = args.output or determine_output_dir(config.REPORTS_DIR, 'chart', year, month)
    img_dir = output_dir / 'img'
    img_dir.mkdir(parents=True, exist_ok=True)

    image_name = f'{metric.name.lower()}_{view.granularity.value}.png'
    title = chart_title(view)
    plot_chart_view(view, img_dir / image_name, title=title)

    renderer = CalendarReportRenderer()
    report = renderer.render_chart_report({
        'title': title,
        'view': view,
        'chart_image': f'img/{image_name}',
        'x_label': X_AXIS_LABELS[view.granularity],
        'min_days': MIN_DAYS_FOR_WEEKLY_VIEW,
    })

    report_path = output_dir / 'REPORT.md'
    with open(report_path, 'w', encoding='utf-8') as f:
        f.write(report)

    print(f'Report: {report_path}')
    return 0


if __name__ == '__main__':
    exit(main())

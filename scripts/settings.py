#!/usr/bin/env python
# coding: utf-8
"""
ユーザー設定の表示・変更スクリプト

Usage:
    python settings.py                       # 現在の設定を表示
    python settings.py --target-steps 8000   # 目標歩数を変更
    python settings.py --chart-step 0.5      # グラフ目盛り幅を変更
"""

import sys
from pathlib import Path

project_root = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(project_root / 'src'))

from weightcal import config
from weightcal.controller import Controller
from weightcal.models import Tab
from weightcal.storage import EntryStore, PreferenceStore
from weightcal.utils.input_parsing import parse_steps, parse_weight
from weightcal.utils.report_args import add_storage_args


def main():
    import argparse

    parser = argparse.ArgumentParser(description='設定の表示・変更')
    parser.add_argument('--target-steps', type=str, default=None, help='目標歩数（0以上）')
    parser.add_argument('--chart-step', type=str, default=None, help='グラフ目盛り幅（0.1以上）')
    add_storage_args(parser)
    args = parser.parse_args()

    config.setup_logging(args.verbose)

    store = EntryStore(args.entries)
    preferences = PreferenceStore(args.settings)
    with Controller(store, preferences) as controller:
        controller.select_tab(Tab.SETTINGS)
        if args.target_steps is not None:
            # 数値でない入力は0として扱う
            controller.set_target_steps(parse_steps(args.target_steps) or 0)
        if args.chart_step is not None:
            step = parse_weight(args.chart_step)
            if step is None:
                print(f"目盛り幅は数値で指定してください: {args.chart_step}")
                return 1
            controller.set_chart_step(step)

        print(f"目標歩数: {controller.get_target_steps()}")
        print(f"目盛り幅: {controller.get_chart_step()}")
    return 0


if __name__ == '__main__':
    exit(main())

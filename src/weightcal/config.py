#!/usr/bin/env python
# coding: utf-8
"""
設定・パス定義

データディレクトリは環境変数 WEIGHTCAL_DATA_DIR で上書き可能。
"""

import logging
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parents[2]

DATA_DIR = Path(os.environ.get('WEIGHTCAL_DATA_DIR', BASE_DIR / 'data'))
ENTRIES_CSV = DATA_DIR / 'entries.csv'
SETTINGS_JSON = DATA_DIR / 'settings.json'

REPORTS_DIR = BASE_DIR / 'reports'

LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'


def setup_logging(verbose=False):
    """
    スクリプト用のロギング設定

    Parameters
    ----------
    verbose : bool
        TrueならDEBUGレベルまで出力
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)

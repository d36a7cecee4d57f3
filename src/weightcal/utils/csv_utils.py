"""
CSV読み書き・重複除去ユーティリティ
"""

import os
import tempfile
from pathlib import Path

import pandas as pd


def read_csv_table(csv_path: Path, columns: list[str]) -> pd.DataFrame:
    """
    CSVを読み込む（ファイルがなければ空のDataFrame）

    Args:
        csv_path: CSVのパス
        columns: 期待する列名リスト（空の場合もこの列を持つ）

    Returns:
        DataFrame（columnsの順に並べたもの）
    """
    if not csv_path.exists():
        return pd.DataFrame(columns=columns)

    df = pd.read_csv(csv_path)
    missing = set(columns) - set(df.columns)
    if missing:
        raise ValueError(
            f"{csv_path}: 必須カラムがありません: {', '.join(sorted(missing))}"
        )
    return df[columns]


def dedupe_by_columns(df: pd.DataFrame, key_columns: list[str],
                      sort_by: list[str] | None = None) -> pd.DataFrame:
    """
    キー列で重複除去（後の行を優先）

    Args:
        df: 対象データ
        key_columns: 重複判定に使う列名リスト
        sort_by: ソートに使う列名リスト

    Returns:
        重複除去済みDataFrame
    """
    df = df.drop_duplicates(subset=key_columns, keep='last')
    if sort_by:
        df = df.sort_values(sort_by)
    return df.reset_index(drop=True)


def write_csv_atomic(df: pd.DataFrame, csv_path: Path) -> None:
    """
    CSVを一時ファイル経由で書き込み、置き換える

    書き込みに失敗した場合は既存ファイルを変更しない。

    Args:
        df: 書き込むデータ
        csv_path: 出力先
    """
    csv_path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=csv_path.parent, prefix=csv_path.name, suffix='.tmp')
    try:
        with os.fdopen(fd, 'w', encoding='utf-8', newline='') as f:
            df.to_csv(f, index=False)
        os.replace(tmp_name, csv_path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)
        raise

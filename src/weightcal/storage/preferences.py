#!/usr/bin/env python
# coding: utf-8
"""
ユーザー設定ストア

目標歩数（target_steps）とグラフ目盛り幅（chart_step）をJSONファイルに保存する。
json_pathを省略するとメモリ上のみで動作する。
"""

import json
import logging
import threading
from pathlib import Path

from weightcal.models import (
    DEFAULT_CHART_STEP,
    DEFAULT_TARGET_STEPS,
    Settings,
    clamp_chart_step,
    clamp_target_steps,
)

logger = logging.getLogger(__name__)

TARGET_STEPS = 'target_steps'
CHART_STEP = 'chart_step'

# キー: (デフォルト値, 値の丸め関数)
PREFERENCE_KEYS = {
    TARGET_STEPS: (DEFAULT_TARGET_STEPS, clamp_target_steps),
    CHART_STEP: (DEFAULT_CHART_STEP, clamp_chart_step),
}


def load_settings_file(json_path):
    """設定ファイルを読み込み（ファイルがなければ空のdict）"""
    if not json_path.exists():
        return {}
    try:
        with open(json_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"設定ファイルのJSONが不正です: {json_path}: {e}")
    if not isinstance(data, dict):
        raise ValueError(f"設定ファイルはオブジェクト形式である必要があります: {json_path}")
    return data


def save_settings_file(json_path, data):
    """設定をファイルに保存"""
    json_path.parent.mkdir(parents=True, exist_ok=True)
    with open(json_path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2)


class PreferenceStore:
    """ユーザー設定ストア"""

    def __init__(self, json_path=None):
        """
        Parameters
        ----------
        json_path : str or Path, optional
            保存先JSON。Noneの場合はメモリ上のみ
        """
        self.json_path = Path(json_path) if json_path is not None else None
        self._lock = threading.Lock()
        self._listeners = []
        self._values = {}
        if self.json_path is not None:
            stored = load_settings_file(self.json_path)
            for key, value in stored.items():
                if key in PREFERENCE_KEYS:
                    try:
                        self._values[key] = PREFERENCE_KEYS[key][1](value)
                    except (TypeError, ValueError) as e:
                        raise ValueError(f"設定値が不正です: {self.json_path}: {key}={value!r}: {e}")
                else:
                    logger.warning(f"Ignoring unknown preference key: {key}")

    def get(self, key):
        """
        設定値を取得（未設定ならデフォルト値）

        Raises
        ------
        KeyError
            未知のキー
        """
        default, _ = PREFERENCE_KEYS[key]
        with self._lock:
            return self._values.get(key, default)

    def set(self, key, value):
        """
        設定値を保存（範囲外の値は丸める）

        Returns
        -------
        int or float
            実際に保存した値
        """
        _, clamp = PREFERENCE_KEYS[key]
        value = clamp(value)
        with self._lock:
            new_values = dict(self._values)
            new_values[key] = value
            if self.json_path is not None:
                try:
                    save_settings_file(self.json_path, new_values)
                except OSError as e:
                    logger.error(f"Failed to save preferences to {self.json_path}: {e}")
                    raise
            self._values = new_values
        for listener in list(self._listeners):
            listener(key, value)
        return value

    def settings(self) -> Settings:
        """現在の設定をSettingsとして取得"""
        return Settings(
            target_steps=self.get(TARGET_STEPS),
            chart_step=self.get(CHART_STEP),
        )

    def subscribe(self, listener):
        """変更通知を登録（listener(key, value) が保存後に呼ばれる）"""
        self._listeners.append(listener)

    def unsubscribe(self, listener):
        if listener in self._listeners:
            self._listeners.remove(listener)

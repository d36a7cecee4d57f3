#!/usr/bin/env python
# coding: utf-8
"""
歩数の目標判定

目標歩数を超えた日は達成（緑）、それ以外は未達（赤）、未記録は色なし。
"""

from enum import Enum


class StepStatus(Enum):
    NONE = 'none'
    REACHED = 'reached'
    MISSED = 'missed'


def step_status(steps, target) -> StepStatus:
    """
    歩数の目標達成状態を判定

    Parameters
    ----------
    steps : int or None
        歩数
    target : int
        目標歩数

    Returns
    -------
    StepStatus
        steps > target なら REACHED
    """
    if steps is None:
        return StepStatus.NONE
    if steps > target:
        return StepStatus.REACHED
    return StepStatus.MISSED


def calc_steps_stats(records, target):
    """
    期間の歩数統計を計算

    Parameters
    ----------
    records : list of DayRecord
    target : int
        目標歩数

    Returns
    -------
    dict or None
        {days, reached_days, total_steps, avg_steps, target}
        歩数の記録がない場合はNone
    """
    steps = [r.steps for r in (records or []) if r.steps is not None]
    if not steps:
        return None

    total = sum(steps)
    return {
        'days': len(steps),
        'reached_days': sum(1 for s in steps if step_status(s, target) is StepStatus.REACHED),
        'total_steps': total,
        'avg_steps': total / len(steps),
        'target': target,
    }

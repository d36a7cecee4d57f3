"""
ストレージモジュール

日別レコード（CSV）とユーザー設定（JSON）の永続化を担当。
"""

from .entry_store import DuplicateEntryError, EntryStore
from .preferences import PreferenceStore

__all__ = ['DuplicateEntryError', 'EntryStore', 'PreferenceStore']

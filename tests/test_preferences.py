"""
Tests for the user preference store.
"""

import json

import pytest

from weightcal.models import Settings
from weightcal.storage import PreferenceStore
from weightcal.storage.preferences import CHART_STEP, TARGET_STEPS


class TestDefaults:
    def test_defaults(self, preference_store):
        assert preference_store.get(TARGET_STEPS) == 0
        assert preference_store.get(CHART_STEP) == 0.5
        assert preference_store.settings() == Settings(target_steps=0, chart_step=0.5)

    def test_unknown_key(self, preference_store):
        with pytest.raises(KeyError):
            preference_store.get('theme')


class TestSet:
    def test_returns_stored_value(self, preference_store):
        assert preference_store.set(TARGET_STEPS, 8000) == 8000
        assert preference_store.get(TARGET_STEPS) == 8000

    @pytest.mark.parametrize('value,expected', [(-100, 0), (0, 0), (12000, 12000)])
    def test_target_steps_clamped(self, preference_store, value, expected):
        assert preference_store.set(TARGET_STEPS, value) == expected

    @pytest.mark.parametrize('value,expected', [(0.0, 0.1), (-1, 0.1), (0.1, 0.1), (2.5, 2.5)])
    def test_chart_step_clamped(self, preference_store, value, expected):
        assert preference_store.set(CHART_STEP, value) == pytest.approx(expected)

    def test_notifies_listeners(self, preference_store):
        events = []
        preference_store.subscribe(lambda key, value: events.append((key, value)))
        preference_store.set(CHART_STEP, 0.05)
        assert events == [(CHART_STEP, 0.1)]

    def test_unsubscribe(self, preference_store):
        events = []
        listener = lambda key, value: events.append(key)  # noqa: E731
        preference_store.subscribe(listener)
        preference_store.unsubscribe(listener)
        preference_store.set(TARGET_STEPS, 1)
        assert events == []


class TestJsonFile:
    def test_round_trip(self, tmp_path):
        path = tmp_path / 'settings.json'
        store = PreferenceStore(path)
        store.set(TARGET_STEPS, 9000)
        store.set(CHART_STEP, 1.0)

        assert json.loads(path.read_text()) == {'target_steps': 9000, 'chart_step': 1.0}
        reloaded = PreferenceStore(path)
        assert reloaded.settings() == Settings(target_steps=9000, chart_step=1.0)

    def test_values_clamped_on_load(self, tmp_path):
        path = tmp_path / 'settings.json'
        path.write_text(json.dumps({'target_steps': -5, 'chart_step': 0.0}))
        store = PreferenceStore(path)
        assert store.get(TARGET_STEPS) == 0
        assert store.get(CHART_STEP) == pytest.approx(0.1)

    def test_unknown_keys_ignored(self, tmp_path):
        path = tmp_path / 'settings.json'
        path.write_text(json.dumps({'theme': 'dark', 'target_steps': 7000}))
        store = PreferenceStore(path)
        assert store.get(TARGET_STEPS) == 7000

    def test_missing_file_uses_defaults(self, tmp_path):
        store = PreferenceStore(tmp_path / 'missing.json')
        assert store.get(TARGET_STEPS) == 0

    @pytest.mark.parametrize('content', ['{not json', '[1, 2]'])
    def test_invalid_file(self, tmp_path, content):
        path = tmp_path / 'settings.json'
        path.write_text(content)
        with pytest.raises(ValueError):
            PreferenceStore(path)


class TestSettings:
    def test_clamps_on_construction(self):
        settings = Settings(target_steps=-1, chart_step=0)
        assert settings.target_steps == 0
        assert settings.chart_step == pytest.approx(0.1)


class TestInvalidStoredValues:
    @pytest.mark.parametrize('content', [{'target_steps': 'abc'}, {'chart_step': None}])
    def test_error_names_file(self, tmp_path, content):
        path = tmp_path / 'settings.json'
        path.write_text(json.dumps(content))
        with pytest.raises(ValueError, match='settings.json'):
            PreferenceStore(path)

"""Tests for voyage event activity, waiting and weather tagging (activity_classifier.py)."""
import pytest

from offshore_logistics.models.base import ActivityCategoryEnum
from offshore_logistics.modules.activity_classifier import (
    classify_activity,
    has_weather_marker,
    is_npt_eligible,
    is_waiting_event,
)


class TestClassifyActivity:
    @pytest.mark.parametrize("parent,event", [
        ("Cargo Ops", "Cargo Loading or Discharging"),
        ("Transit", "Steam Infield"),
        ("Maneuvering", "Set Up"),
        ("Cargo Ops", None),
        ("Standby - Close", ""),
    ])
    def test_productive(self, parent, event):
        assert classify_activity(parent, event) == ActivityCategoryEnum.PRODUCTIVE

    @pytest.mark.parametrize("parent,event", [
        ("Waiting on Weather", None),
        ("Waiting on Installation", "Rig not ready"),
        ("Waiting on Quay", None),
        ("Port or Supply Base closed", "Fog"),
    ])
    def test_non_productive(self, parent, event):
        assert classify_activity(parent, event) == ActivityCategoryEnum.NON_PRODUCTIVE
        assert is_npt_eligible(classify_activity(parent, event))

    @pytest.mark.parametrize("parent,event", [(None, "Steam Infield"), ("Transit", "Something odd"), ("Unknown", None)])
    def test_uncategorized(self, parent, event):
        assert classify_activity(parent, event) == ActivityCategoryEnum.UNCATEGORIZED
        assert not is_npt_eligible(classify_activity(parent, event))


class TestWaitingAndWeather:
    def test_waiting_on_installation(self):
        assert is_waiting_event("Waiting on Installation", None)
        assert is_waiting_event(None, "Waiting on Installation")

    def test_waiting_equivalents(self):
        assert is_waiting_event("Waiting on Rig", None)

    def test_not_waiting(self):
        assert not is_waiting_event("Cargo Ops", "Cargo Loading or Discharging")

    @pytest.mark.parametrize("text", ["Waiting on Weather", "WOW", "High wind", "Sea state too high", "Swell"])
    def test_weather_markers(self, text):
        assert has_weather_marker(text)

    @pytest.mark.parametrize("text", ["Waiting on Installation", "Window cleaning", "Windlass repair", None])
    def test_no_weather_marker(self, text):
        assert not has_weather_marker(text)

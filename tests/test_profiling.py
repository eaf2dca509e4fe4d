"""Tests for start_extension_profile / complete_extension_profile."""

from unittest.mock import patch

import pytest

from lintcore.errors import ExtensionProfileError
from lintcore.extensions.descriptor import PROFILE_IN_FLIGHT, ExtensionDescriptor
from lintcore.extensions.profiling import complete_extension_profile, start_extension_profile


def _ext() -> ExtensionDescriptor:
    return ExtensionDescriptor(name="rules", kind="syntactic-lint")


class TestProfiles:
    def test_start_records_in_flight(self) -> None:
        ext = _ext()
        record = start_extension_profile(ext, "walk")
        assert ext.profiles["walk"] is record
        assert record.task == "walk"
        assert record.length == PROFILE_IN_FLIGHT

    def test_complete_sets_length_and_keeps_start(self) -> None:
        ext = _ext()
        start = start_extension_profile(ext, "T").start
        record = complete_extension_profile(ext, "T")
        assert record.start == start
        assert record.length >= 0

    def test_length_is_elapsed_ms(self) -> None:
        ext = _ext()
        with patch("lintcore.extensions.profiling.time.time", side_effect=[10.0, 10.25]):
            start_extension_profile(ext, "T")
            complete_extension_profile(ext, "T")
        assert ext.profiles["T"].start == 10000.0
        assert ext.profiles["T"].length == pytest.approx(250.0)

    def test_restart_overwrites(self) -> None:
        ext = _ext()
        with patch("lintcore.extensions.profiling.time.time", side_effect=[1.0, 2.0]):
            start_extension_profile(ext, "T")
            start_extension_profile(ext, "T")
        assert list(ext.profiles) == ["T"]
        assert ext.profiles["T"].start == 2000.0

    def test_tasks_are_independent(self) -> None:
        ext = _ext()
        start_extension_profile(ext, "a")
        start_extension_profile(ext, "b")
        complete_extension_profile(ext, "a")
        assert ext.profiles["a"].length >= 0
        assert ext.profiles["b"].length == PROFILE_IN_FLIGHT


class TestProfileContract:
    """Completing without a start is a caller bug and raises."""

    def test_no_profiles_at_all(self) -> None:
        with pytest.raises(ExtensionProfileError, match="no started profiles"):
            complete_extension_profile(_ext(), "T")

    def test_task_never_started(self) -> None:
        ext = _ext()
        start_extension_profile(ext, "other")
        with pytest.raises(ExtensionProfileError, match="corresponding start"):
            complete_extension_profile(ext, "T")

    def test_is_an_assertion_error(self) -> None:
        with pytest.raises(AssertionError):
            complete_extension_profile(_ext(), "T")

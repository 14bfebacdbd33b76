"""
Tests for the test runner's argument handling.
"""
import sys

import pytest

from run_tests import SUITES, build_command


class TestBuildCommand:

    def test_defaults_to_whole_suite(self):
        command = build_command([])

        assert command[:3] == [sys.executable, "-m", "pytest"]
        assert "tests/" in command

    def test_selects_named_suites(self):
        command = build_command(["store", "api"])

        assert SUITES["store"] in command
        assert SUITES["api"] in command
        assert "tests/" not in command

    def test_passes_extra_arguments_through(self):
        command = build_command(["service", "--", "-k", "direct"])

        assert command[-2:] == ["-k", "direct"]
        assert SUITES["service"] in command

    def test_unknown_suite(self):
        with pytest.raises(SystemExit):
            build_command(["nope"])

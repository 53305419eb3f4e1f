#!/usr/bin/env python3
"""
Tests for the shell console.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

from pathlib import Path

import pytest

from flowdeploy.core.console import CommandError, Console


@pytest.mark.integration
class TestConsole:
    """Run real (trivial) shell commands."""

    def test_returns_stripped_output(self):
        assert Console(shellVerbose=False).sh("echo hello") == "hello"

    def test_non_zero_exit_raises_command_error(self):
        with pytest.raises(CommandError) as exc_info:
            Console(shellVerbose=False).sh("echo oops; exit 3")

        assert exc_info.value.returncode == 3
        assert exc_info.value.output.strip() == "oops"
        assert "exit code 3" in str(exc_info.value)

    def test_can_fail(self):
        assert Console(shellVerbose=False).sh("exit 2", canFail=True) == ""

    def test_secret_hides_command(self):
        with pytest.raises(CommandError) as exc_info:
            Console(shellVerbose=False).sh("exit 1", secret="login step")

        assert exc_info.value.command == "login step"

    def test_runs_in_working_directory(self, tmp_path):
        output = Console(shellVerbose=False, cwd=str(tmp_path)).sh("pwd")

        assert Path(output).resolve() == tmp_path.resolve()

    def test_live_output(self, capsys):
        output = Console(shellVerbose=False, live_output=True).sh("echo streamed", prefix="| ")

        assert output == "streamed"
        assert "| streamed" in capsys.readouterr().out

    def test_timeout(self):
        with pytest.raises(RuntimeError, match="timeout"):
            Console(shellVerbose=False).sh("sleep 5", timeout=0.2)

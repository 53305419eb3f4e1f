#!/usr/bin/env python3
"""Module to run console commands.

This module provides a class to run console commands.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""
# built-in modules
import subprocess
import typing


class CommandError(RuntimeError):
    """A shell command exited with a non-zero status.

    Attributes:
        command (str): The command as shown to the operator.
        returncode (int): The exit status of the command.
        output (str): The combined stdout/stderr of the command.
    """
    def __init__(self, command: str, returncode: int, output: str = "") -> None:
        super().__init__(
            "Subprocess '" + command + "' failed with exit code " + str(returncode)
        )
        self.command = command
        self.returncode = returncode
        self.output = output


class Console:
    """Class to run console commands.

    Attributes:
        shellVerbose (bool): The shell verbose flag.
        live_output (bool): The live output flag.
        cwd (str): The working directory commands run in.
    """
    def __init__(
            self,
            shellVerbose: bool=True,
            live_output: bool=False,
            cwd: typing.Optional[str]=None
        ) -> None:
        """Constructor of the Console class.

        Args:
            shellVerbose (bool): The shell verbose flag.
            live_output (bool): The live output flag.
            cwd (str): The working directory commands run in.
        """
        self.shellVerbose = shellVerbose
        self.live_output = live_output
        self.cwd = cwd

    def sh(
            self,
            command: str,
            canFail: bool=False,
            timeout: typing.Optional[int]=60,
            secret: typing.Union[bool, str]=False,
            prefix: str="",
            env: typing.Optional[typing.Dict[str, str]]=None,
            live_output: typing.Optional[bool]=None
        ) -> str:
        """Run shell command.

        Args:
            command (str): The shell command.
            canFail (bool): The flag to allow failure.
            timeout (int): The timeout in seconds, None to wait forever.
            secret (bool or str): Hide the command, or show this text instead.
            prefix (str): The prefix of the output.
            env (dict): The environment variables.
            live_output (bool): Overrides the console live output flag.

        Returns:
            str: The output of the shell command.

        Raises:
            CommandError: If the shell command fails.
            RuntimeError: If the shell command times out.
        """
        if live_output is None:
            live_output = self.live_output
        shown = command if not secret else (secret if isinstance(secret, str) else "***")

        # Print the command if shellVerbose is True
        if self.shellVerbose and not secret:
            print("> " + command, flush=True)

        # Run the shell command in BINARY mode to handle UTF-8 safely
        proc = subprocess.Popen(
            command,
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            shell=True,
            universal_newlines=False,
            bufsize=0,
            env=env,
            cwd=self.cwd,
        )

        # Get the output of the shell command
        try:
            if not live_output:
                raw_outs, errs = proc.communicate(timeout=timeout)
                outs = raw_outs.decode('utf-8', errors='replace')
            else:
                outs = []
                for raw_line in iter(proc.stdout.readline, b''):
                    line = raw_line.decode('utf-8', errors='replace')
                    print(prefix + line, end="")
                    outs.append(line)
                outs = "".join(outs)
                proc.stdout.close()
                proc.wait(timeout=timeout)
        except subprocess.TimeoutExpired as exc:
            proc.kill()
            raise RuntimeError("Console script timeout") from exc

        # Check for failure
        if proc.returncode != 0 and not canFail:
            raise CommandError(shown, proc.returncode, outs)

        return outs.strip()

"""
This module contains the IOInterface abstract base class and its implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import aiofiles


class IOInterface(ABC):
    """
    Abstract base class for an IO interface.

    This class defines the line-oriented input/output the command-line
    scorekeeper talks through.
    """

    @abstractmethod
    def output(self, message: str) -> None:
        """Output a message to the interface."""
        pass

    @abstractmethod
    def input(self, prompt: str) -> str:
        """Get input from the user with a prompt."""
        pass


class DummyIOInterface(IOInterface):
    """A dummy IO interface for simulation purposes. Does not perform any actual IO."""

    def output(self, message: str) -> None:
        pass

    def input(self, prompt: str) -> str:
        return ""


class TestIOInterface(IOInterface):
    """
    A test IO interface. Collects output messages and replays scripted input.

    Methods
    -------
    def output(self, message):
        Collect an output message.

    def input(self, prompt):
        Return the next scripted response.

    def add_input(self, *responses):
        Queue responses for later input() calls.
    """

    __test__ = False

    def __init__(self, responses=None):
        self.sent_messages = []
        self.prompts = []
        self.input_responses = list(responses or [])

    def output(self, message: str) -> None:
        self.sent_messages.append(message)

    def input(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.input_responses:
            return self.input_responses.pop(0)
        raise EOFError("No more scripted input")

    def add_input(self, *responses: str) -> None:
        self.input_responses.extend(responses)


class ConsoleIOInterface(IOInterface):
    """A console IO interface for interactive scorekeeping."""

    def output(self, message: str) -> None:
        print(message)

    def input(self, prompt: str) -> str:
        return input(prompt)


class LoggingIOInterface(IOInterface):
    """
    Mirrors another interface's output into a text file.

    Input is delegated unchanged; every output line, and every prompt with the
    answer given, is appended to ``log_file_path``.
    """

    def __init__(self, inner: IOInterface, log_file_path: str):
        self.inner = inner
        self.log_file_path = log_file_path

    def output(self, message: str) -> None:
        self.inner.output(message)
        with open(self.log_file_path, "a", encoding="utf-8") as log_file:
            log_file.write(message + "\n")

    def input(self, prompt: str) -> str:
        response = self.inner.input(prompt)
        with open(self.log_file_path, "a", encoding="utf-8") as log_file:
            log_file.write(f"{prompt}{response}\n")
        return response

    async def output_async(self, message: str) -> None:
        """Async version of output for use inside the event loop."""
        self.inner.output(message)
        async with aiofiles.open(
            self.log_file_path, mode="a", encoding="utf-8"
        ) as log_file:
            await log_file.write(message + "\n")

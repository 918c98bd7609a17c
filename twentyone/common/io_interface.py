"""
This module contains the IOInterface abstract base class and its implementations.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor

import aiofiles

from twentyone.common.action import Action

MAX_ATTEMPTS = 3


class IOInterface(ABC):
    """
    Abstract base class for an IO interface.

    This class defines the interface for input/output operations of the
    console table.
    """

    @abstractmethod
    def output(self, message: str) -> None:
        """Output a message to the interface."""

    @abstractmethod
    def input(self, prompt: str) -> str:
        """Get input from the user with a prompt."""

    @abstractmethod
    def get_player_action(self, player_name: str, valid_actions: list[Action]) -> Action:
        """Retrieve an action from a player."""


class TestIOInterface(IOInterface):
    """
    A test IO interface. Collects output messages and replays scripted input.
    """

    __test__ = False

    def __init__(self, player_actions=None, input_responses=None):
        self.sent_messages: list[str] = []
        self.player_actions: list[Action] = list(player_actions or [])
        self.input_responses: list[str] = list(input_responses or [])

    def output(self, message: str) -> None:
        self.sent_messages.append(message)

    def input(self, prompt: str) -> str:
        if self.input_responses:
            return self.input_responses.pop(0)
        return ""

    def add_player_action(self, action: Action):
        """Add a player action to the queue."""
        self.player_actions.append(action)

    def get_player_action(self, player_name: str, valid_actions: list[Action]) -> Action:
        if self.player_actions:
            return self.player_actions.pop(0)
        raise ValueError("No more actions left in TestIOInterface queue.")


class ConsoleIOInterface(IOInterface):
    """
    A console IO interface for interactive play.
    """

    def output(self, message: str) -> None:
        print(message)

    def input(self, prompt: str) -> str:
        return input(prompt)

    def get_player_action(self, player_name: str, valid_actions: list[Action]) -> Action:
        options = "/".join(f"[{a.value[0]}]{a.value[1:]}" for a in valid_actions)
        for _ in range(MAX_ATTEMPTS):
            try:
                action = Action.parse(self.input(f"{player_name}, {options}? "))
            except ValueError:
                action = None
            if action in valid_actions:
                return action
            self.output(
                f"Invalid action, valid actions are: {', '.join(a.value for a in valid_actions)}"
            )

        self.output("Too many invalid attempts, standing.")
        return Action.STAND if Action.STAND in valid_actions else valid_actions[0]


class LoggingIOInterface(IOInterface):
    """
    Appends output messages to a log file. Input is not supported; the player
    actions come from elsewhere.
    """

    def __init__(self, log_file_path: str):
        self.log_file_path = log_file_path

    def output(self, message: str) -> None:
        """Write an output message to the log file."""
        with open(self.log_file_path, "a", encoding="utf-8") as log_file:
            log_file.write(message + "\n")

    def input(self, prompt: str) -> str:
        self.output(f"[INPUT PROMPT] {prompt}")
        return ""

    def get_player_action(self, player_name: str, valid_actions: list[Action]) -> Action:
        return Action.STAND

    async def output_async(self, message: str) -> None:
        """Write an output message to the log file without blocking the loop."""
        async with aiofiles.open(
            self.log_file_path, mode="a", encoding="utf-8"
        ) as log_file:
            await log_file.write(message + "\n")


class AsyncIOInterfaceWrapper:
    """
    Runs the blocking calls of a synchronous IOInterface in a worker thread so
    they can be awaited from the console driver.
    """

    def __init__(self, io_interface: IOInterface):
        self.io_interface = io_interface
        self.executor = ThreadPoolExecutor(max_workers=1)

    async def output(self, message: str) -> None:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(self.executor, self.io_interface.output, message)

    async def input(self, prompt: str) -> str:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            self.executor, self.io_interface.input, prompt
        )

    async def get_player_action(
        self, player_name: str, valid_actions: list[Action]
    ) -> Action:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            self.executor,
            self.io_interface.get_player_action,
            player_name,
            valid_actions,
        )

    def close(self) -> None:
        self.executor.shutdown(wait=False)

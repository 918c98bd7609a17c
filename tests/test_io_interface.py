import asyncio

import pytest

from twentyone.common.action import Action
from twentyone.common.io_interface import (
    AsyncIOInterfaceWrapper,
    ConsoleIOInterface,
    LoggingIOInterface,
    TestIOInterface,
)

VALID_ACTIONS = [Action.HIT, Action.STAND]


@pytest.mark.parametrize(
    "text, action",
    [
        ("hit", Action.HIT),
        ("H", Action.HIT),
        (" stand ", Action.STAND),
        ("s", Action.STAND),
        ("STAND", Action.STAND),
    ],
)
def test_action_parse(text, action):
    assert Action.parse(text) is action


@pytest.mark.parametrize("text", ["", "double", "x", "hitt"])
def test_action_parse_rejects_unknown_input(text):
    with pytest.raises(ValueError):
        Action.parse(text)


def test_test_io_interface_methods():
    interface = TestIOInterface(
        player_actions=[Action.HIT, Action.STAND], input_responses=["y"]
    )

    interface.output("Test message")
    assert interface.sent_messages == ["Test message"]

    assert interface.input("Next round? ") == "y"
    assert interface.input("Next round? ") == ""

    assert interface.get_player_action("Ana", VALID_ACTIONS) is Action.HIT
    interface.add_player_action(Action.HIT)
    assert interface.get_player_action("Ana", VALID_ACTIONS) is Action.STAND
    assert interface.get_player_action("Ana", VALID_ACTIONS) is Action.HIT

    with pytest.raises(ValueError):
        interface.get_player_action("Ana", VALID_ACTIONS)


def test_console_io_interface_methods(mocker):
    interface = ConsoleIOInterface()

    # Mock the builtin input function
    mocker.patch("builtins.input", side_effect=["test_input", "hit", "s"])

    interface.output("Test message")
    assert interface.input("Enter something: ") == "test_input"
    assert interface.get_player_action("Ana", VALID_ACTIONS) is Action.HIT
    assert interface.get_player_action("Ana", VALID_ACTIONS) is Action.STAND


def test_console_io_interface_retries_invalid_input(mocker):
    interface = ConsoleIOInterface()
    mocker.patch("builtins.input", side_effect=["double", "h"])
    output = mocker.patch.object(interface, "output")

    assert interface.get_player_action("Ana", VALID_ACTIONS) is Action.HIT
    output.assert_called_once_with("Invalid action, valid actions are: hit, stand")


def test_console_io_interface_stands_after_too_many_attempts(mocker):
    interface = ConsoleIOInterface()
    mocker.patch("builtins.input", side_effect=["x", "y", "z"])
    output = mocker.patch.object(interface, "output")

    assert interface.get_player_action("Ana", VALID_ACTIONS) is Action.STAND
    output.assert_called_with("Too many invalid attempts, standing.")


def test_logging_io_interface_appends(tmp_path):
    log_file = tmp_path / "table.log"
    interface = LoggingIOInterface(str(log_file))

    interface.output("first")
    interface.output("second")
    assert interface.input("Name? ") == ""
    assert interface.get_player_action("Ana", VALID_ACTIONS) is Action.STAND

    assert log_file.read_text(encoding="utf-8").splitlines() == [
        "first",
        "second",
        "[INPUT PROMPT] Name? ",
    ]


@pytest.mark.asyncio
async def test_logging_io_interface_output_async(tmp_path):
    log_file = tmp_path / "table.log"
    interface = LoggingIOInterface(str(log_file))

    await interface.output_async("Ana hits (7♥).")
    await interface.output_async("Ana stands on 19.")

    assert log_file.read_text(encoding="utf-8").splitlines() == [
        "Ana hits (7♥).",
        "Ana stands on 19.",
    ]


@pytest.mark.asyncio
async def test_async_wrapper_delegates_to_the_wrapped_interface():
    interface = TestIOInterface(player_actions=[Action.HIT], input_responses=["n"])
    wrapper = AsyncIOInterfaceWrapper(interface)
    try:
        await wrapper.output("hello")
        assert await wrapper.input("Next round? ") == "n"
        assert await wrapper.get_player_action("Ana", VALID_ACTIONS) is Action.HIT
    finally:
        wrapper.close()

    assert interface.sent_messages == ["hello"]


def test_async_wrapper_propagates_errors():
    wrapper = AsyncIOInterfaceWrapper(TestIOInterface())

    async def ask():
        return await wrapper.get_player_action("Ana", VALID_ACTIONS)

    try:
        with pytest.raises(ValueError):
            asyncio.run(ask())
    finally:
        wrapper.close()

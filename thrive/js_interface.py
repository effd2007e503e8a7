"""Bridges between GUI JavaScript calls and the game process."""

import logging
from collections.abc import Callable, Sequence
from enum import IntEnum
from typing import Any, Protocol

_log = logging.getLogger(__name__)

CUSTOM_MESSAGE_NAME = "Custom"
VERSION_QUERY = "thriveVersion"

_SIMPLE_CALLS = (
    "startNewGame",
    "editorButtonClicked",
    "freebuildEditorButtonClicked",
    "finishEditingClicked",
    "killPlayerCellClicked",
    "exitToMenuClicked",
    "disconnectFromServer",
)


class SecurityLevel(IntEnum):
    """How much a GUI view is trusted to access."""

    BLOCKED = 0
    MINIMAL = 1
    NORMAL = 2
    ACCESS_ALL = 3


class JSCallError(Exception):
    """A JavaScript call was unknown or had invalid arguments."""


class QueryCallback(Protocol):
    """Receives the outcome of an asynchronous query."""

    def success(self, result: str) -> None: ...

    def failure(self, error_code: int, message: str) -> None: ...


class ThriveJSInterface:
    """Answers asynchronous queries made from the GUI."""

    ACCESS_DENIED_CODE = 1

    def __init__(self, version: str) -> None:
        self.version = version

    def process_query(
        self, caller_level: SecurityLevel, request: str, callback: QueryCallback
    ) -> bool:
        """Handle ``request``; return False if it is not ours."""
        if request == VERSION_QUERY:
            required = SecurityLevel.ACCESS_ALL
            if caller_level < required:
                callback.failure(
                    self.ACCESS_DENIED_CODE,
                    f"access denied: requires {required.name}",
                )
                return True
            callback.success(self.version)
            return True
        return False


Message = list[Any]


class ThriveJSHandler:
    """Turns native JavaScript calls into messages for the main process."""

    def __init__(self, send_message: Callable[[Message], Any]) -> None:
        self._send_message = send_message

    def execute(self, name: str, arguments: Sequence[Any] = ()) -> Message:
        """Handle a call named ``name``; return the message that was sent.

        Raises JSCallError for unknown names or invalid arguments.
        """
        if name in _SIMPLE_CALLS:
            message: Message = [name]
        elif name == "connectToServer":
            if not arguments or not isinstance(arguments[0], str):
                raise JSCallError("Invalid arguments passed, expected: string")
            message = [name, arguments[0]]
        elif name == "pause":
            if not arguments or not isinstance(arguments[0], bool):
                raise JSCallError("Invalid arguments passed, expected: bool")
            message = [name, arguments[0]]
        else:
            raise JSCallError(f"Unknown ThriveJSHandler function: {name}")

        self._send_message(message)
        return message


class ThriveJSMessageHandler:
    """Receives GUI messages in the main process and acts on the game."""

    def __init__(self, game: Any) -> None:
        self._game = game

    def on_process_message_received(self, message: Sequence[Any]) -> bool:
        """Dispatch ``message`` to the game; return False if it is not ours."""
        if not message:
            return False

        custom_type = message[0]
        game = self._game

        if custom_type == "startNewGame":
            _log.info("Got start game message from GUI process")
            game.start_new_game()
        elif custom_type == "editorButtonClicked":
            game.editor_button_clicked()
        elif custom_type == "freebuildEditorButtonClicked":
            game.enable_freebuild()
            game.editor_button_clicked()
        elif custom_type == "finishEditingClicked":
            game.finish_editing_clicked()
        elif custom_type == "killPlayerCellClicked":
            game.kill_player_cell_clicked()
        elif custom_type == "exitToMenuClicked":
            game.exit_to_menu_clicked()
        elif custom_type == "connectToServer":
            game.connect_to_server(message[1])
        elif custom_type == "disconnectFromServer":
            game.disconnect_from_server(True)
        elif custom_type == "pause":
            game.pause(bool(message[1]))
        else:
            return False
        return True
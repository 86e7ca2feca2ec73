from enum import Enum
from typing import Dict, Optional
from pydantic import BaseModel
from loguru import logger

from robot_console.services.api_client import ApiClient, ApiError, api_client


class CommandType(str, Enum):
    TURN_LEFT = "TURN_LEFT"
    TURN_RIGHT = "TURN_RIGHT"
    FORWARD = "FORWARD"
    BACKWARD = "BACKWARD"
    FOLLOW_LINE_MODE = "FOLLOW_LINE_MODE"
    TURN_LEFT_FOR_OBSTACLE_AVOID = "TURN_LEFT_FOR_OBSTACLE_AVOID"
    TURN_RIGHT_FOR_OBSTACLE_AVOID = "TURN_RIGHT_FOR_OBSTACLE_AVOID"
    STOP = "STOP"
    MANUAL = "MANUAL"
    AUTO = "AUTO"


DIRECTIONS = (CommandType.FORWARD, CommandType.BACKWARD, CommandType.TURN_LEFT, CommandType.TURN_RIGHT)

HOLD_KEYS = {
    "W": CommandType.FORWARD,
    "S": CommandType.BACKWARD,
    "A": CommandType.TURN_LEFT,
    "D": CommandType.TURN_RIGHT,
}

TAP_KEYS = {
    " ": CommandType.STOP,
    "Q": CommandType.AUTO,
    "E": CommandType.MANUAL,
}


class CommandResult(BaseModel):
    command: CommandType
    ok: bool
    message: str


class CommandSender:
    """
    Turns operator intents into robot commands.

    Movement is press-and-hold: a direction is sent once when pressed and
    STOP is sent when it is released. Requests go out immediately, one per
    intent, with no debouncing or queuing.
    """

    def __init__(self, client: Optional[ApiClient] = None):
        self.client = client or api_client
        self.pressed: Dict[CommandType, bool] = {direction: False for direction in DIRECTIONS}
        self.mode = CommandType.MANUAL
        self.logger = logger

    def send(self, command: CommandType) -> CommandResult:
        command = CommandType(command)
        try:
            self.client.post("commands/send", {"command": command.value})
        except ApiError as e:
            self.logger.error(f"Error sending command {command.value}: {e}")
            return CommandResult(command=command, ok=False, message=f"Failed to send command: {command.value}")
        self.logger.info(f"Command sent: {command.value}")
        return CommandResult(command=command, ok=True, message=f"Sent: {command.value}")

    def press(self, direction: CommandType) -> Optional[CommandResult]:
        """Start moving in a direction; repeated presses while held send nothing"""
        direction = CommandType(direction)
        if self.pressed.get(direction):
            return None
        self.pressed[direction] = True
        return self.send(direction)

    def release(self, direction: CommandType) -> Optional[CommandResult]:
        """Stop a held direction; releasing a direction that is not held sends nothing"""
        direction = CommandType(direction)
        if not self.pressed.get(direction):
            return None
        self.pressed[direction] = False
        return self.send(CommandType.STOP)

    def set_mode(self, mode: CommandType) -> Optional[CommandResult]:
        mode = CommandType(mode)
        if mode not in (CommandType.AUTO, CommandType.MANUAL):
            raise ValueError(f"Not a drive mode: {mode.value}")
        if mode == self.mode:
            return None
        self.mode = mode
        self.release_all()
        return self.send(mode)

    def stop(self) -> CommandResult:
        """Send STOP and forget every held direction"""
        self.release_all()
        return self.send(CommandType.STOP)

    def release_all(self):
        for direction in self.pressed:
            self.pressed[direction] = False

    def key_down(self, key: str) -> Optional[CommandResult]:
        key = key.upper()
        if key in HOLD_KEYS:
            return self.press(HOLD_KEYS[key])
        if key in TAP_KEYS:
            command = TAP_KEYS[key]
            if command == CommandType.STOP:
                return self.stop()
            return self.set_mode(command)
        return None

    def key_up(self, key: str) -> Optional[CommandResult]:
        key = key.upper()
        if key in HOLD_KEYS:
            return self.release(HOLD_KEYS[key])
        return None

    def is_pressed(self, direction: CommandType) -> bool:
        return self.pressed.get(CommandType(direction), False)

    def any_pressed(self) -> bool:
        return any(self.pressed.values())

"""Unit tests for the robot command sender."""

import pytest

from robot_console.services.api_client import ApiError
from robot_console.services.command_service import CommandSender, CommandType


@pytest.fixture()
def sender(mock_client):
    return CommandSender(client=mock_client)


def sent_commands(mock_client):
    return [call.args[1]["command"] for call in mock_client.post.call_args_list]


class TestSend:
    def test_posts_command(self, sender, mock_client):
        result = sender.send(CommandType.FOLLOW_LINE_MODE)

        mock_client.post.assert_called_once_with("commands/send", {"command": "FOLLOW_LINE_MODE"})
        assert result.ok
        assert result.message == "Sent: FOLLOW_LINE_MODE"

    def test_accepts_plain_strings(self, sender, mock_client):
        assert sender.send("STOP").command == CommandType.STOP

    def test_failure_returns_error_result(self, sender, mock_client):
        mock_client.post.side_effect = ApiError("offline")

        result = sender.send(CommandType.FORWARD)

        assert not result.ok
        assert result.message == "Failed to send command: FORWARD"

    def test_unknown_command(self, sender):
        with pytest.raises(ValueError):
            sender.send("JUMP")


class TestPressAndHold:
    def test_press_twice_sends_once(self, sender, mock_client):
        sender.press(CommandType.FORWARD)
        assert sender.press(CommandType.FORWARD) is None
        assert sent_commands(mock_client) == ["FORWARD"]
        assert sender.is_pressed(CommandType.FORWARD)

    def test_release_sends_stop(self, sender, mock_client):
        sender.press(CommandType.TURN_LEFT)
        sender.release(CommandType.TURN_LEFT)
        assert sent_commands(mock_client) == ["TURN_LEFT", "STOP"]
        assert not sender.is_pressed(CommandType.TURN_LEFT)

    def test_release_without_press_sends_nothing(self, sender, mock_client):
        assert sender.release(CommandType.BACKWARD) is None
        mock_client.post.assert_not_called()

    def test_stop_forgets_held_directions(self, sender, mock_client):
        sender.press(CommandType.FORWARD)
        sender.stop()
        assert sender.release(CommandType.FORWARD) is None
        assert sent_commands(mock_client) == ["FORWARD", "STOP"]

    def test_any_pressed(self, sender):
        assert not sender.any_pressed()
        sender.press(CommandType.TURN_RIGHT)
        assert sender.any_pressed()
        sender.release(CommandType.TURN_RIGHT)
        assert not sender.any_pressed()


class TestMode:
    def test_starts_in_manual(self, sender):
        assert sender.mode == CommandType.MANUAL

    def test_unchanged_mode_is_a_no_op(self, sender, mock_client):
        assert sender.set_mode(CommandType.MANUAL) is None
        mock_client.post.assert_not_called()

    def test_mode_change_is_sent_once(self, sender, mock_client):
        sender.set_mode(CommandType.AUTO)
        sender.set_mode(CommandType.AUTO)
        assert sent_commands(mock_client) == ["AUTO"]
        assert sender.mode == CommandType.AUTO

    def test_non_mode_command_is_rejected(self, sender):
        with pytest.raises(ValueError):
            sender.set_mode(CommandType.FORWARD)


class TestKeyboard:
    @pytest.mark.parametrize("key,command", [
        ("w", "FORWARD"), ("S", "BACKWARD"), ("a", "TURN_LEFT"), ("D", "TURN_RIGHT"),
    ])
    def test_hold_keys(self, sender, mock_client, key, command):
        sender.key_down(key)
        sender.key_down(key)
        sender.key_up(key)
        assert sent_commands(mock_client) == [command, "STOP"]

    def test_space_stops(self, sender, mock_client):
        sender.key_down("w")
        sender.key_down(" ")
        assert sent_commands(mock_client) == ["FORWARD", "STOP"]
        assert not sender.any_pressed()

    def test_mode_keys_update_mode(self, sender, mock_client):
        sender.key_down("q")
        assert sender.mode == CommandType.AUTO
        sender.key_down("E")
        assert sender.mode == CommandType.MANUAL
        assert sent_commands(mock_client) == ["AUTO", "MANUAL"]

    def test_mode_key_for_current_mode_sends_nothing(self, sender, mock_client):
        assert sender.key_down("e") is None
        mock_client.post.assert_not_called()

    def test_mode_key_forgets_held_directions(self, sender, mock_client):
        sender.key_down("w")
        sender.key_down("q")
        assert sender.key_up("w") is None
        assert sent_commands(mock_client) == ["FORWARD", "AUTO"]

    def test_unmapped_keys_are_ignored(self, sender, mock_client):
        assert sender.key_down("x") is None
        assert sender.key_up("q") is None
        mock_client.post.assert_not_called()

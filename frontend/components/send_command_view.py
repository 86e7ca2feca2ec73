import streamlit as st

from robot_console.display import COMMAND_LABELS, label
from robot_console.services.command_service import DIRECTIONS, CommandSender, CommandType


def get_sender():
    if "command_sender" not in st.session_state:
        st.session_state.command_sender = CommandSender()
    return st.session_state.command_sender


def show_result(result):
    if result is None:
        return
    st.session_state.last_command_result = result
    if result.ok:
        st.toast(f"✅ {label(COMMAND_LABELS, result.command.value)}")
    else:
        st.toast(f"❌ {result.message}")


def render_send_command():
    """Render the robot control page"""

    st.header("🕹️ Robot Control")

    sender = get_sender()

    render_mode_selector(sender)

    st.markdown("---")

    if sender.mode == CommandType.MANUAL:
        render_direction_pad(sender)
    else:
        st.info("🤖 The robot is driving itself. Switch to manual mode to steer.")

    st.markdown("---")
    render_special_commands(sender)

    result = st.session_state.get("last_command_result")
    if result is not None:
        if result.ok:
            st.success(result.message)
        else:
            st.error(result.message)


def render_mode_selector(sender):
    modes = [CommandType.MANUAL, CommandType.AUTO]
    mode = st.radio(
        "Drive mode",
        options=modes,
        index=modes.index(sender.mode),
        format_func=lambda m: label(COMMAND_LABELS, m.value),
        horizontal=True,
        key="drive_mode"
    )
    result = sender.set_mode(mode)
    if result is not None:
        show_result(result)
        clear_holds()


def clear_holds():
    for direction in DIRECTIONS:
        st.session_state.pop(f"hold_{direction.value}", None)


def leave_send_command():
    """Stop the robot when the operator leaves the page with a direction held"""
    sender = st.session_state.get("command_sender")
    if sender is not None and sender.any_pressed():
        show_result(sender.stop())
        clear_holds()


def render_direction_pad(sender):
    """Hold a direction by switching its toggle on; switching it off stops the robot"""
    st.subheader("Movement")
    st.caption("Switch a direction on to drive, off to stop.")

    _, up_col, _ = st.columns(3)
    left_col, stop_col, right_col = st.columns(3)
    _, down_col, _ = st.columns(3)

    placements = {
        CommandType.FORWARD: up_col,
        CommandType.TURN_LEFT: left_col,
        CommandType.TURN_RIGHT: right_col,
        CommandType.BACKWARD: down_col,
    }

    for direction, column in placements.items():
        with column:
            held = st.toggle(label(COMMAND_LABELS, direction.value), key=f"hold_{direction.value}")
            if held and not sender.is_pressed(direction):
                show_result(sender.press(direction))
            elif not held and sender.is_pressed(direction):
                show_result(sender.release(direction))

    with stop_col:
        if st.button("🛑 STOP", key="stop_button", type="primary", use_container_width=True):
            show_result(sender.stop())
            clear_holds()
            st.rerun()


def render_special_commands(sender):
    st.subheader("Special Commands")
    col1, col2, col3 = st.columns(3)

    with col1:
        if st.button(label(COMMAND_LABELS, "FOLLOW_LINE_MODE"), use_container_width=True):
            show_result(sender.send(CommandType.FOLLOW_LINE_MODE))
    with col2:
        if st.button(label(COMMAND_LABELS, "TURN_LEFT_FOR_OBSTACLE_AVOID"), use_container_width=True):
            show_result(sender.send(CommandType.TURN_LEFT_FOR_OBSTACLE_AVOID))
    with col3:
        if st.button(label(COMMAND_LABELS, "TURN_RIGHT_FOR_OBSTACLE_AVOID"), use_container_width=True):
            show_result(sender.send(CommandType.TURN_RIGHT_FOR_OBSTACLE_AVOID))

import streamlit as st

from robot_console.services.pagination_service import PageController, controller_for


def get_controller(resource):
    """Page controller of a screen, kept in session state and reloaded when the screen is entered"""
    key = f"pager_{resource}"
    if key not in st.session_state:
        st.session_state[key] = controller_for(resource)
    controller = st.session_state[key]

    if st.session_state.get("screen_entered"):
        st.session_state.screen_entered = False
        controller.refresh()
    else:
        controller.ensure_loaded()
    return controller


def render_pager(controller: PageController, key: str):
    """First / previous / next / last controls for a paginated screen"""
    page = controller.current_page
    total = controller.total_pages

    col1, col2, col3, col4, col5 = st.columns([1, 1, 2, 1, 1])

    with col1:
        if st.button("⏮️", key=f"{key}_first", disabled=page <= 1, use_container_width=True):
            change_page(controller, 1)
    with col2:
        if st.button("◀️", key=f"{key}_prev", disabled=page <= 1, use_container_width=True):
            change_page(controller, page - 1)
    with col3:
        st.markdown(
            f'<p style="text-align: center; margin-top: 0.4rem;">Page {page} of {total}</p>',
            unsafe_allow_html=True
        )
    with col4:
        if st.button("▶️", key=f"{key}_next", disabled=page >= total, use_container_width=True):
            change_page(controller, page + 1)
    with col5:
        if st.button("⏭️", key=f"{key}_last", disabled=page >= total, use_container_width=True):
            change_page(controller, total)


def change_page(controller: PageController, page):
    controller.load(page)
    st.rerun()


def render_refresh_button(controller: PageController, key: str):
    if st.button("🔄 Refresh", key=f"{key}_refresh"):
        controller.refresh()
        st.rerun()

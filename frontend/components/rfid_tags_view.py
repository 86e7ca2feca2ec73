import streamlit as st
import pandas as pd
from pydantic import ValidationError

from robot_console.display import format_datetime
from robot_console.services.api_client import ApiError
from robot_console.services.rfid_service import rfid_service
from components.pagination import get_controller, render_pager, render_refresh_button


def render_rfid_tags():
    """Render the RFID tag management page"""

    st.header("🪪 RFID Tags")

    controller = get_controller("rfid-tags")
    tags = controller.items

    with st.expander("➕ Add RFID Tag"):
        render_create_form(controller)

    if tags:
        df = pd.DataFrame([
            {
                'No.': controller.row_number(index),
                'UID': tag.uid,
                'Location': tag.location_name,
                'Description': tag.description,
                'Ref. Temp': f"{tag.reference_temperature:g}°C",
                'Ref. Humidity': f"{tag.reference_humidity:g}%",
                'Created': format_datetime(tag.created_at),
                'Updated': format_datetime(tag.updated_at)
            }
            for index, tag in enumerate(tags)
        ])
        st.dataframe(df, use_container_width=True, hide_index=True)

        st.markdown("---")
        render_tag_actions(controller, tags)
    else:
        st.info("No RFID tags registered.")

    render_pager(controller, key="rfid_tags")
    render_refresh_button(controller, key="rfid_tags")


def render_tag_form(key, tag=None):
    """Form fields shared by the create and edit forms; returns the raw values"""
    col1, col2 = st.columns(2)
    with col1:
        uid = st.text_input("UID", value=tag.uid if tag else "", key=f"{key}_uid")
        location_name = st.text_input("Location", value=tag.location_name if tag else "", key=f"{key}_location")
        description = st.text_input("Description", value=tag.description if tag else "", key=f"{key}_description")
    with col2:
        reference_temperature = st.number_input(
            "Reference temperature (°C)",
            value=tag.reference_temperature if tag else None,
            step=0.1, key=f"{key}_temperature"
        )
        reference_humidity = st.number_input(
            "Reference humidity (%)",
            value=tag.reference_humidity if tag else None,
            step=0.1, key=f"{key}_humidity"
        )

    return {
        "uid": uid,
        "location_name": location_name,
        "description": description,
        "reference_temperature": reference_temperature,
        "reference_humidity": reference_humidity,
    }


def render_create_form(controller):
    with st.form("rfid_create_form", clear_on_submit=True):
        form = render_tag_form("rfid_create")
        submitted = st.form_submit_button("💾 Save", type="primary")

    if submitted:
        try:
            rfid_service.create_tag(form)
        except ValidationError:
            st.warning("Please fill in all fields")
            return
        except ApiError:
            st.error("❌ Could not add the RFID tag. Please try again.")
            return

        st.toast("✅ RFID tag added")
        controller.refresh()
        st.rerun()


def render_tag_actions(controller, tags):
    """Edit or delete the tag selected from the current page"""
    selected = st.selectbox(
        "Select a tag to edit or delete",
        options=range(len(tags)),
        format_func=lambda index: tags[index].label,
        key="rfid_selected"
    )
    tag = tags[selected]

    edit_tab, delete_tab = st.tabs(["✏️ Edit", "🗑️ Delete"])

    with edit_tab:
        with st.form(f"rfid_edit_form_{tag.id}"):
            form = render_tag_form(f"rfid_edit_{tag.id}", tag)
            submitted = st.form_submit_button("💾 Update", type="primary")

        if submitted:
            try:
                changes = rfid_service.update_tag(tag, form)
            except ValidationError:
                st.warning("Please fill in all fields")
                return
            except ApiError:
                st.error("❌ Could not update the RFID tag. Please try again.")
                return

            if not changes:
                st.info("Nothing changed.")
                return
            st.toast("✅ RFID tag updated")
            controller.refresh()
            st.rerun()

    with delete_tab:
        st.write(f"Delete **{tag.label}**? This cannot be undone.")
        confirmed = st.checkbox("I understand", key=f"rfid_delete_confirm_{tag.id}")
        if st.button("🗑️ Delete", key=f"rfid_delete_{tag.id}", disabled=not confirmed):
            try:
                rfid_service.delete_tag(tag.id)
            except ApiError:
                st.error("❌ Could not delete the RFID tag. Please try again.")
                return

            st.toast("🗑️ RFID tag deleted")
            controller.refresh()
            st.rerun()

import streamlit as st
import pandas as pd
import plotly.express as px
from pydantic import ValidationError

from robot_console.display import WORK_PLAN_STATUS_COLORS, WORK_PLAN_STATUS_LABELS, format_datetime, label
from robot_console.services.api_client import ApiError
from robot_console.services.rfid_service import rfid_service
from robot_console.services.work_plan_service import work_plan_service
from components.pagination import get_controller, render_pager, render_refresh_button


def render_work_plans():
    """Render the work plan page"""

    st.header("📋 Work Plans")

    controller = get_controller("work-plans")
    plans = controller.items

    with st.expander("➕ Create Work Plan", expanded=st.session_state.get("work_plan_form_open", False)):
        render_create_form(controller, plans)

    if plans:
        render_plans_table(controller, plans)
        render_status_chart(plans)

        st.markdown("---")
        render_plan_details(controller, plans)
    else:
        st.info("No work plans yet.")

    render_pager(controller, key="work_plans")
    render_refresh_button(controller, key="work_plans")


def render_plans_table(controller, plans):
    def color_status(val):
        for code, color in WORK_PLAN_STATUS_COLORS.items():
            if val == label(WORK_PLAN_STATUS_LABELS, code):
                return f'color: {color}; font-weight: bold'
        return ''

    df = pd.DataFrame([
        {
            'No.': controller.row_number(index),
            'Description': plan.description,
            'Status': label(WORK_PLAN_STATUS_LABELS, plan.status),
            'Progress': f"{plan.progress:g}%",
            'Locations': len(plan.items),
            'Temp ±': f"{plan.temp_threshold:g}°C",
            'Humidity ±': f"{plan.hum_threshold:g}%",
            'Max violations': plan.violation_count,
            'Created': format_datetime(plan.created_at)
        }
        for index, plan in enumerate(plans)
    ])
    st.dataframe(df.style.map(color_status, subset=['Status']), use_container_width=True, hide_index=True)


def render_status_chart(plans):
    status_counts = pd.Series([plan.status for plan in plans]).value_counts()
    fig = px.bar(
        x=[label(WORK_PLAN_STATUS_LABELS, status) for status in status_counts.index],
        y=status_counts.values,
        color=list(status_counts.index),
        color_discrete_map=WORK_PLAN_STATUS_COLORS,
        title="Work Plan Status on This Page",
        labels={'x': 'Status', 'y': 'Plans'}
    )
    fig.update_layout(showlegend=False)
    st.plotly_chart(fig, use_container_width=True)


def render_plan_details(controller, plans):
    """Locations of the selected plan, with delete for finished plans"""
    selected = st.selectbox(
        "Plan details",
        options=range(len(plans)),
        format_func=lambda index: f"{plans[index].description} ({label(WORK_PLAN_STATUS_LABELS, plans[index].status)})",
        key="work_plan_selected"
    )
    plan = plans[selected]

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Progress", f"{plan.progress:g}%")
    with col2:
        st.metric("Locations", len(plan.items))
    with col3:
        st.metric("Updated", format_datetime(plan.updated_at, with_seconds=False))

    if plan.items:
        df = pd.DataFrame([
            {
                'UID': item.rfid_tag.uid,
                'Location': item.rfid_tag.location_name,
                'Readings': item.measurement_frequency,
                'Ref. Temp': f"{item.rfid_tag.reference_temperature:g}°C",
                'Ref. Humidity': f"{item.rfid_tag.reference_humidity:g}%"
            }
            for item in plan.items
        ])
        st.dataframe(df, use_container_width=True, hide_index=True)

    if plan.is_deletable:
        confirmed = st.checkbox("Confirm deletion", key=f"work_plan_delete_confirm_{plan.id}")
        if st.button("🗑️ Delete Plan", key=f"work_plan_delete_{plan.id}", disabled=not confirmed):
            try:
                work_plan_service.delete_plan(plan.id)
            except ApiError:
                st.error("❌ Could not delete the work plan. Please try again.")
                return
            st.toast("🗑️ Work plan deleted")
            controller.refresh()
            st.rerun()
    else:
        st.caption("Only completed, failed or not-received plans can be deleted.")


def render_create_form(controller, plans):
    try:
        tags = rfid_service.list_all_tags()
    except ApiError:
        st.error("❌ Could not load RFID tags.")
        return

    if not tags:
        st.info("Register an RFID tag before creating a work plan.")
        return

    tag_labels = {tag.id: f"#{tag.id} {tag.label}" for tag in tags}
    label_ids = {text: tag_id for tag_id, text in tag_labels.items()}

    template_index = st.selectbox(
        "Start from",
        options=[None] + list(range(len(plans))),
        format_func=lambda index: "New plan" if index is None else f"Re-apply: {plans[index].description}",
        key="work_plan_template"
    )
    template = work_plan_service.template_from(None if template_index is None else plans[template_index])

    with st.form("work_plan_create_form"):
        description = st.text_input("Description", value=template["description"])

        items_df = pd.DataFrame([
            {
                'Location': tag_labels.get(row["rfid_tag_id"]),
                'Readings': row["measurement_frequency"]
            }
            for row in template["items"]
        ])
        edited = st.data_editor(
            items_df,
            num_rows="dynamic",
            use_container_width=True,
            hide_index=True,
            key=f"work_plan_items_{template_index}",
            column_config={
                'Location': st.column_config.SelectboxColumn("Location", options=list(label_ids), required=True),
                'Readings': st.column_config.NumberColumn("Readings", min_value=1, step=1, required=True)
            }
        )

        col1, col2, col3 = st.columns(3)
        with col1:
            temp_threshold = st.number_input("Temperature threshold (°C)", value=template["temp_threshold"], step=0.5)
        with col2:
            hum_threshold = st.number_input("Humidity threshold (%)", value=template["hum_threshold"], step=0.5)
        with col3:
            violation_count = st.number_input(
                "Max violations", value=template["violation_count"], min_value=0, step=1
            )

        submitted = st.form_submit_button("🚀 Create Plan", type="primary")

    if submitted:
        st.session_state.work_plan_form_open = True
        form = {
            "description": description,
            "items": [
                {
                    "rfid_tag_id": label_ids.get(row.get('Location')),
                    "measurement_frequency": None if pd.isna(row.get('Readings')) else int(row.get('Readings'))
                }
                for row in edited.to_dict("records")
            ],
            "temp_threshold": temp_threshold,
            "hum_threshold": hum_threshold,
            "violation_count": violation_count,
        }
        try:
            work_plan_service.create_plan(form)
        except ValidationError:
            st.warning("Please fill in all fields and add at least one location")
            return
        except ApiError:
            st.error("❌ Could not create the work plan. Please try again.")
            return

        st.session_state.work_plan_form_open = False
        st.toast("✅ Work plan created")
        controller.refresh()
        st.rerun()

import html

import streamlit as st

from tracker.config import get_config
from tracker.logging_setup import setup_logging
from tracker.models import Priority, StatusFilter
from tracker.state import TrackerState
from tracker.tasks_repo import TaskNotFoundError
from tracker.theme import set_theme, task_colors
from tracker.view_filter import counts

config = get_config()
setup_logging(config.log_level)

if "tracker" not in st.session_state:
    st.session_state.tracker = TrackerState.from_config(config)
state: TrackerState = st.session_state.tracker
# Pick up writes from other sessions on the same database.
state.refresh()

_GONE = "That task was deleted in another window."

# Form widget defaults
st.session_state.setdefault("pending_text", state.pending_text)
st.session_state.setdefault("pending_due_date", None)
st.session_state.setdefault("pending_priority", state.pending_priority.value)

set_theme(state.dark_mode, page_title=config.page_title)

PRIORITIES = [p.value for p in Priority]


# ----- Callbacks (run before the rerun, so widget keys may be reset here) -----
def _add_task():
    due = st.session_state.pending_due_date
    state.pending_text = st.session_state.pending_text
    state.pending_due_date = due.isoformat() if due else ""
    state.pending_priority = Priority.parse(st.session_state.pending_priority)
    if state.create() is not None:
        st.session_state.pending_text = state.pending_text
        st.session_state.pending_due_date = None
        st.session_state.pending_priority = state.pending_priority.value


def _toggle_task(task_id):
    try:
        state.toggle(task_id)
    except TaskNotFoundError:
        st.toast(_GONE)


def _delete_task(task_id):
    # Only reachable from the confirmation popover.
    try:
        state.delete(task_id, confirmed=True)
    except TaskNotFoundError:
        st.toast(_GONE)


def _set_search():
    state.set_search_term(st.session_state.search_term)


# ----- Header -----
head_cols = st.columns([6, 1])
with head_cols[0]:
    st.title(config.page_title)
with head_cols[1]:
    st.button(
        "🌞" if state.dark_mode else "🌙",
        key="theme-toggle",
        help="Toggle dark mode",
        on_click=state.toggle_theme,
    )

# ----- Add form -----
st.text_input("Task", key="pending_text", placeholder="Enter a task", label_visibility="collapsed")
st.date_input("Due date", key="pending_due_date", format="YYYY-MM-DD")
st.selectbox("Priority", PRIORITIES, key="pending_priority")
st.button("Add Task", key="add-task", on_click=_add_task, use_container_width=True)

# ----- Search & filter -----
st.text_input(
    "Search",
    key="search_term",
    placeholder="Search tasks...",
    label_visibility="collapsed",
    on_change=_set_search,
)

totals = counts(state.tasks.all())
filter_cols = st.columns(len(StatusFilter))
for col, option in zip(filter_cols, StatusFilter):
    with col:
        st.button(
            f"{option.value} ({totals[option]})",
            key=f"filter-{option.value}",
            type="primary" if state.status_filter is option else "secondary",
            on_click=state.set_status_filter,
            args=(option,),
            use_container_width=True,
        )

# ----- Task list -----
rows = state.visible_rows()
if not rows:
    st.caption("No tasks to show.")

for position, task in rows:
    bg, fg = task_colors(task.priority, task.completed)
    done_cls = " tt-task-done" if task.completed else ""
    # Follow the stored value, which another session may have changed.
    st.session_state[f"done-{task.id}"] = task.completed
    row_cols = st.columns([1, 8, 2])
    with row_cols[0]:
        st.checkbox(
            "Done",
            key=f"done-{task.id}",
            label_visibility="collapsed",
            on_change=_toggle_task,
            args=(task.id,),
        )
    with row_cols[1]:
        st.markdown(
            f"<div class='tt-task{done_cls}' style='background:{bg};color:{fg};'>"
            f"{html.escape(task.text)}"
            f"<div class='tt-meta'>#{position + 1} &middot; Due: {html.escape(task.due_date or 'N/A')} | "
            f"<span class='tt-badge'>{task.priority.value}</span></div></div>",
            unsafe_allow_html=True,
        )
    with row_cols[2]:
        with st.popover("Delete"):
            st.markdown("**Are you sure you want to delete this task?**")
            st.button(
                "Yes, delete",
                key=f"confirm-delete-{task.id}",
                type="primary",
                on_click=_delete_task,
                args=(task.id,),
            )

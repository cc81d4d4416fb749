# app.py
# Streamlit front end for the DFA visualizer
import streamlit as st

from dfa_visualizer import config
from dfa_visualizer.controller import DFAController
from dfa_visualizer.engine import drive
from dfa_visualizer.errors import AutomatonError
from dfa_visualizer.render import Visualizer, trace_table

config.configure_logging()

#STREAMLIT USER INTERFACE
st.set_page_config(
    layout="wide",
    page_title="DFA Visualizer",
    initial_sidebar_state="expanded"
)
st.title("DFA visualization tool")

# Initialize session state
if 'controller' not in st.session_state: st.session_state.controller = DFAController()
if 'spec_text' not in st.session_state: st.session_state.spec_text = ""
if 'last_verdict' not in st.session_state: st.session_state.last_verdict = None
if 'last_input' not in st.session_state: st.session_state.last_input = ""

controller = st.session_state.controller


def report(action):
    """Run a controller action and show any engine error instead of raising."""
    try:
        action()
    except AutomatonError as e:
        st.error(f"**Error:** {e}")
        return False
    st.session_state.last_verdict = None
    return True


def load_default():
    st.session_state.spec_text = config.DEFAULT_SPEC
    report(controller.load_default)


def build_from_spec():
    report(lambda: controller.import_specification(st.session_state.spec_text))


def sync_spec_text():
    st.session_state.spec_text = controller.export_specification()


busy = controller.is_run_in_progress()

# --- Sidebar (Left Column) ---
with st.sidebar:
    st.header("1. Edit Automaton")
    col_a, col_b = st.columns(2)
    if col_a.button("Reset DFA", key="reset", disabled=busy):
        if report(controller.reset_automaton): sync_spec_text()
    if col_b.button("Undo", key="undo", disabled=busy or not controller.can_undo):
        if report(controller.undo): sync_spec_text()
    if col_a.button("Add new state", key="add_state", disabled=busy):
        if report(lambda: controller.add_state(False)): sync_spec_text()
    if col_b.button("Add accepting state", key="add_accepting_state", disabled=busy):
        if report(lambda: controller.add_state(True)): sync_spec_text()
    if st.button("Make start state accepting", key="start_accepting", disabled=busy):
        if report(controller.make_start_accepting): sync_spec_text()

    model = controller.model
    state_ids = [state.id for state in model.states]
    first_node = st.selectbox("Pick state 1:", state_ids, format_func=model.label, key="first_node")
    second_node = st.selectbox("Pick state 2:", state_ids, format_func=model.label, key="second_node")
    symbol = st.radio("Transition symbol", list(model.alphabet), horizontal=True, key="symbol")
    if st.button("Add transition", key="add_transition", disabled=busy or symbol is None):
        if report(lambda: controller.add_transition(first_node, second_node, symbol)): sync_spec_text()
    first_accepting = model.state(first_node).accepting if first_node in model else False
    toggle_label = "Make state 1 non-accepting" if first_accepting else "Make state 1 accepting"
    if st.button(toggle_label, key="toggle_accepting", disabled=busy):
        if report(lambda: controller.set_accepting(first_node, not first_accepting)): sync_spec_text()

    st.markdown("---") # Separator

    st.header("2. Test String")
    alphabet_text = ", ".join(controller.model.alphabet)
    input_string = st.text_input(f"Input string ({alphabet_text}):", key="input_string")
    animate = st.checkbox("Animate String Check", key="animate", disabled=busy)
    check_button = st.button("Check string", key="check", disabled=busy)
    reset_animation_button = st.button("Reset Animations", key="reset_animation")

# --- Main Area ---
col_diagram, col_results = st.columns(2)

with col_diagram:
    st.subheader("Automaton Structure")
    diagram = st.empty()
    diagram.graphviz_chart(Visualizer(controller.projection()).render())

with col_results:
    st.subheader("Simulation Results")
    if reset_animation_button:
        st.session_state.last_verdict = None

    if check_button:
        symbols = controller.tokenize(input_string)
        unknown = sorted({s for s in symbols if s not in controller.model.alphabet})
        if unknown:
            st.error(f"Symbols {', '.join(unknown)} are not part of the alphabet.")
        elif animate:
            try:
                run = controller.check_string_animated(input_string)
            except AutomatonError as e:
                st.error(f"**Error:** {e}")
            else:
                progress = st.empty()
                visualizer = Visualizer(run.projection)

                def show(frame):
                    diagram.graphviz_chart(visualizer.render(frame))
                    progress.caption(f"Animating... Step {frame.consumed}/{len(run.symbols)}")

                drive(run, show, delay=config.FRAME_DELAY_SECONDS)
                st.session_state.last_verdict = run.verdict
                st.session_state.last_input = input_string
        else:
            st.session_state.last_verdict = controller.check_string_batch(input_string)
            st.session_state.last_input = input_string

    verdict = st.session_state.last_verdict
    if verdict is not None:
        model = controller.model
        shown = st.session_state.last_input
        if verdict.accepted:
            st.success(f"**Result:** Sequence '{shown}' is **Accepted**.")
        else:
            st.error(f"**Result:** Sequence '{shown}' is **Rejected**.")
            st.caption(verdict.describe(model))
        if verdict.steps:
            st.markdown("##### Execution Trace")
            st.table(trace_table(model, verdict))
        st.write(f"**End:** Finished in state **`{model.label(verdict.state)}`**.")
    else:
        st.info("Build or load an automaton, then click 'Check string'.")

# --- Specification import/export ---
st.markdown("---")
st.subheader("Import DFA Specification")
st.text_area(
    "DFA specification",
    key="spec_text",
    height=300,
    placeholder="Paste DFA specification here in the format: SPEC_DFA = { ... }",
)
col_build, col_default, col_export = st.columns(3)
col_build.button("Build DFA from Specification", key="build", on_click=build_from_spec, disabled=busy)
col_default.button("Load Default DFA", key="load_default", on_click=load_default, disabled=busy)
col_export.download_button(
    "Export specification",
    data=controller.export_specification(),
    file_name="spec_dfa.py",
    mime="text/x-python",
    key="export",
)

import math, os, sys

_REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if _REPO_ROOT not in sys.path:
    sys.path.insert(0, _REPO_ROOT)

import logging
import streamlit as st
import matplotlib.pyplot as plt

from gradient_field.config import AXIS_RANGE
from gradient_field.core.builtins import BUILTIN_FUNCTIONS, get_builtin
from gradient_field.core.model import build_user_function, switch_user_formula
from gradient_field.core.types import CompileError
from gradient_field.core.types import Point
from gradient_field.algebra.parsing import allowed_names
from gradient_field.logging_config import setup_logging
from gradient_field.plotting import plot_field
from gradient_field.solvers.field import probe

setup_logging(logging.INFO)

# -------------------- Page --------------------
st.set_page_config(page_title="Gradient Field Explorer", layout="wide")
st.markdown("<h1 style='text-align:center'>Gradient Field Explorer</h1>", unsafe_allow_html=True)

# -------------------- Session state --------------------
def init_state():
    if "active_id" not in st.session_state:
        st.session_state.active_id = BUILTIN_FUNCTIONS[0].id
    if "custom_formula" not in st.session_state:
        st.session_state.custom_formula = "sin(x) * y"
    if "custom_fn" not in st.session_state:
        st.session_state.custom_fn = None
    if "point" not in st.session_state:
        st.session_state.point = Point(1.0, 1.0)

init_state()

CUSTOM = "custom"
choices = [f.id for f in BUILTIN_FUNCTIONS] + [CUSTOM]
labels = {f.id: f.name for f in BUILTIN_FUNCTIONS}
labels[CUSTOM] = "Custom function"

# -------------------- Sidebar --------------------
with st.sidebar:
    st.markdown("### Function")
    st.session_state.active_id = st.radio("Surface", choices, format_func=labels.get,
                                          index=choices.index(st.session_state.active_id))
    show_heatmap = st.checkbox("Heatmap", value=True)
    show_vectors = st.checkbox("Vector field", value=True)

    if st.session_state.active_id == CUSTOM:
        formula = st.text_input("f(x, y) =", value=st.session_state.custom_formula)
        st.caption("Allowed names: " + ", ".join(sorted(allowed_names())) + ". Use ^ for powers.")
        previous = st.session_state.custom_fn
        if previous is None:
            # nothing valid yet: no surface to fall back on
            try:
                active, compile_error = build_user_function(formula), None
            except CompileError as exc:
                active, compile_error = None, exc
        else:
            active, compile_error = switch_user_formula(previous, formula)
        if compile_error is None:
            st.session_state.custom_formula = formula
            st.session_state.custom_fn = active
        else:
            st.error(str(compile_error))
    else:
        active = get_builtin(st.session_state.active_id)

    st.markdown("### Point")
    px = st.slider("x", -AXIS_RANGE, AXIS_RANGE, float(st.session_state.point.x), 0.1)
    py = st.slider("y", -AXIS_RANGE, AXIS_RANGE, float(st.session_state.point.y), 0.1)
    st.session_state.point = Point(px, py)

if active is None:
    st.info("Enter a valid formula to draw the custom surface.")
    st.stop()

# -------------------- Main --------------------
left, right = st.columns([1.4, 0.6])

with left:
    fig, ax = plt.subplots(figsize=(6, 6))
    plot_field(active, st.session_state.point, ax=ax,
               show_heatmap=show_heatmap, show_vectors=show_vectors)
    st.pyplot(fig)
    plt.close(fig)

with right:
    st.markdown(f"**{active.name}**")
    st.markdown(active.description)
    if hasattr(active, "compiled"):
        st.latex(r"f(x, y) = " + active.compiled.latex())
    else:
        st.code(active.formula)
    p = probe(active, st.session_state.point)
    c1, c2 = st.columns(2)
    c1.metric("x", f"{p.point.x:.2f}")
    c2.metric("y", f"{p.point.y:.2f}")
    st.metric("f(x, y)", "undefined" if math.isnan(p.value) else f"{p.value:.4f}")
    c3, c4 = st.columns(2)
    c3.metric("∂f/∂x", f"{p.gradient.dx:.4f}")
    c4.metric("∂f/∂y", f"{p.gradient.dy:.4f}")
    st.metric("|∇f|", f"{p.magnitude:.4f}")

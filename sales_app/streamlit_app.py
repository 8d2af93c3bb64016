import streamlit as st

from sales_app.utils.chart import ChartCanvas
from sales_app.utils.config import MODES, load_settings
from sales_app.utils.glossary import MODEL_TOOLTIPS
from sales_app.utils.insights import describe_model, fit_quality

APP_TITLE = "Ice Cream Sales Predictor"

st.set_page_config(page_title=APP_TITLE, layout="centered")

SETTINGS = load_settings()

# Rebuilt when the configured dataset changes mid-session
if "predictor" not in st.session_state or st.session_state.predictor.samples != SETTINGS.samples:
    st.session_state.predictor = SETTINGS.build_predictor(st.session_state.get("mode"))
predictor = st.session_state.predictor

# ---- Sidebar / model mode ----
with st.sidebar:
    st.markdown(f"### {APP_TITLE}")
    st.caption("NumPy + Altair + Streamlit")
    mode = st.radio(
        "Coefficients",
        MODES,
        index=MODES.index(SETTINGS.mode),
        key="mode",
        help=f"computed: {MODEL_TOOLTIPS['computed']}\n\nfixed: {MODEL_TOOLTIPS['fixed']}",
    )
    st.write(f"**Samples:** `{len(SETTINGS.samples)}`")

st.title(APP_TITLE)
st.write("Enter a temperature to predict the number of ice cream cones you might sell.")

# ---- Input ----
def _on_edit():
    st.session_state.predictor.edit_input(st.session_state.temperature)

left, right = st.columns([3, 1], vertical_alignment="bottom")
with left:
    st.text_input(
        "Temperature (°C)",
        key="temperature",
        placeholder="Enter Temperature (°C)",
        on_change=_on_edit,
    )
with right:
    clicked = st.button("Predict Sales", key="predict", type="primary")

# ---- Chart (placeholder reserved above the results) ----
canvas = ChartCanvas(
    st.empty(),
    x_title=SETTINGS.x_label,
    y_title=SETTINGS.y_label,
    title=SETTINGS.title,
)
with predictor.subscribed(canvas.redraw):
    predictor.set_coefficients(SETTINGS.coefficients_for(mode), mode=mode)

if clicked:
    predictor.predict(st.session_state.temperature)

coef = predictor.coefficients
if not coef.is_usable:
    st.warning("No usable model: every temperature in the dataset is the same, so the slope is undefined.")

if predictor.error_message:
    st.error(predictor.error_message)
elif predictor.prediction_text is not None:
    st.success(f"Predicted Ice Cream Sales: {predictor.prediction_text}")

# ---- Model details ----
st.subheader("Model Details")
st.write("Based on historical data, the linear regression model is:" if mode == "computed"
         else "Using hand-set coefficients, the linear regression model is:")
st.markdown(f"**{coef.equation()}**")
st.markdown("\n".join(f"- {line}" for line in describe_model(coef)))

fq = fit_quality(SETTINGS.samples.temperatures, SETTINGS.samples.sales, coef)
c1, c2, c3 = st.columns(3)
c1.metric("Slope", f"{coef.slope:.2f}", help=MODEL_TOOLTIPS["Slope"])
c2.metric("Intercept", f"{coef.intercept:.2f}", help=MODEL_TOOLTIPS["Intercept"])
c3.metric("R² (fit quality)", f"{fq.r2:.3f}", help=MODEL_TOOLTIPS["R²"])

st.caption("Tip: open the Model Details page in the sidebar for fitted values and residuals.")

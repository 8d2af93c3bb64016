import numpy as np
import pandas as pd
import streamlit as st

from sales_app.utils.config import load_settings
from sales_app.utils.glossary import MODEL_TOOLTIPS
from sales_app.utils.insights import fit_quality

st.set_page_config(page_title="Model Details", layout="wide")

SETTINGS = load_settings()
st.title("Model Details")

# Same coefficients as the predictor page when it has run in this session
predictor = st.session_state.get("predictor")
if predictor is None:
    predictor = SETTINGS.build_predictor()
coef = predictor.coefficients

st.caption(f"Mode: `{predictor.mode}`. {MODEL_TOOLTIPS[predictor.mode]}")

if not coef.is_usable:
    st.warning("No usable model: the temperatures in the dataset have zero variance.")
    st.stop()

# -------- Controls --------
zcut = st.slider("Outlier threshold (|z|)", 1.0, 3.0, 2.0, step=0.1)

# -------- Fitted values --------
x = np.asarray(predictor.samples.temperatures, dtype=float)
y = np.asarray(predictor.samples.sales, dtype=float)
fq = fit_quality(x, y, coef)

df_model = pd.DataFrame({
    "temperature": x,
    "sales": y,
    "y_hat": fq.y_hat,
    "resid": fq.resid,
    "z_resid": fq.z,
})
df_model["is_outlier"] = np.abs(df_model["z_resid"]) > zcut

# -------- KPIs --------
k1, k2, k3, k4 = st.columns(4)
k1.metric("Samples", f"{len(df_model):,}")
k2.metric("R² (fit quality)", f"{fq.r2:.3f}", help=MODEL_TOOLTIPS["R²"])
k3.metric("Residual σ", f"{fq.sigma:.2f}")
k4.metric("Outliers flagged", f"{int(df_model['is_outlier'].sum()):,}")

st.markdown(f"**{coef.equation()}**")
st.caption(
    "Residual = actual − fitted. Outliers = |standardized residual| > threshold. "
    "With hand-set coefficients R² can fall below zero."
)

# -------- Table & download --------
st.subheader("Samples, fitted values and residuals")
st.dataframe(df_model.round(4), use_container_width=True)
st.download_button(
    "Download as CSV",
    data=df_model.to_csv(index=False).encode("utf-8"),
    file_name="ice_cream_regression.csv",
    mime="text/csv",
)

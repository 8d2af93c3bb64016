# Centralized tooltip/help text used across the app.

MODEL_TOOLTIPS = {
    "OLS": "Ordinary least squares: the line minimizing the sum of squared vertical deviations.",
    "Slope": "Extra cones sold per 1°C increase in temperature.",
    "Intercept": "Theoretical sales at 0°C (an extrapolation, not an observation).",
    "R²": "Share of variation in sales explained by the fitted line.",
    "computed": "Coefficients are fitted on the historical dataset shown in the chart.",
    "fixed": "Coefficients are hand-set constants; the chart still shows the historical dataset.",
}

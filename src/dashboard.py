"""
Streamlit Dashboard for the Claim Severity Analysis

Shows the exploratory charts, the Gamma GLM coefficients and the largest
percentage effects. Run with ``streamlit run src/dashboard.py``.
"""

import streamlit as st

import config
import severity_pipeline
import severity_plots

# Page Configuration
st.set_page_config(page_title="Claim Severity Lab", layout="wide")

st.title("Insurance Claim Severity Analysis")
st.markdown(
    "Explores how claim cost behaves and fits a **Gamma GLM with a log link** "
    "to estimate how policyholder, vehicle and coverage characteristics "
    "relate to expected severity."
)
st.markdown("---")


# ============================================================================
# CACHED FUNCTIONS - Heavy lifting happens here
# ============================================================================


@st.cache_resource
def load_and_fit():
    """
    Runs the analysis pipeline. Cached so the model is only fitted once.
    """
    with st.spinner("Loading claims and fitting the severity GLM..."):
        result = severity_pipeline.run_severity_analysis(config.AnalysisConfig())
    return result


result = load_and_fit()
df_model = result["model_data"]
fit = result["fit"]
effects = result["effects"]
cfg = config.AnalysisConfig()

# ============================================================================
# SIDEBAR
# ============================================================================

st.sidebar.header("Report Settings")
n_effects = st.sidebar.slider(
    "Effects to show",
    min_value=1,
    max_value=max(len(effects), 2),
    value=min(config.TOP_EFFECTS, max(len(effects), 1)),
    help="Number of terms shown, ranked by absolute percentage effect",
)

# ============================================================================
# KEY METRICS DISPLAY
# ============================================================================

st.subheader("Key Figures")

col1, col2, col3, col4 = st.columns(4)

with col1:
    st.metric(label="Claims Modeled", value=f"{fit.nobs:,}")

with col2:
    st.metric(
        label="Mean Severity",
        value=f"${df_model[config.TARGET].mean():,.0f}",
        help="Average total claim amount in the modeling dataset",
    )

with col3:
    st.metric(
        label="Dispersion",
        value=f"{fit.dispersion:.4f}",
        help="Pearson estimate of the Gamma dispersion parameter",
    )

with col4:
    st.metric(label="Model Terms", value=f"{len(fit.columns)}")

# ============================================================================
# TABS FOR ANALYSIS
# ============================================================================

tab1, tab2 = st.tabs(["Severity Distribution", "GLM Effects"])

with tab1:
    col1, col2 = st.columns(2)

    with col1:
        st.pyplot(severity_plots.plot_severity_histogram(df_model, cfg, return_fig=True))

    with col2:
        st.pyplot(severity_plots.plot_severity_by_deductible(df_model, cfg, return_fig=True))

    st.info(
        "Claim amounts are positive and right-skewed, which is why a Gamma "
        "distribution is used for the severity model."
    )

with tab2:
    st.subheader("Largest Effects on Expected Severity")
    st.dataframe(
        effects.head(n_effects).style.format(
            {"beta": "{:.4f}", "pct_effect": "{:+.2f}%"}
        ),
        use_container_width=True,
        hide_index=True,
    )
    st.caption("pct_effect = (exp(beta) - 1) x 100. The intercept is not interpreted.")

    st.markdown("---")
    st.subheader("Coefficient Table")
    st.dataframe(fit.coefficient_table(), use_container_width=True, hide_index=True)

import matplotlib.pyplot as plt
from matplotlib.ticker import FuncFormatter
from pathlib import Path

import config

# Axis labels like 12,500 instead of 12500.0
THOUSANDS = FuncFormatter(lambda value, _: f"{value:,.0f}")


def get_plots_dir(cfg):
    """
    Returns the output directory for charts, creating it if it doesn't exist.

    Raises OSError if the directory cannot be created.
    """
    plots_dir = Path(cfg.output_dir)
    if not plots_dir.exists():
        plots_dir.mkdir(parents=True, exist_ok=True)
        print(f"Created directory: {plots_dir}/")
    return plots_dir


def _save(fig, cfg, filename):
    # Charts always go to cfg.output_dir; the name may not carry its own directory
    if Path(filename).name != str(filename):
        plt.close(fig)
        raise ValueError(
            f"Chart filename must be a bare file name, got '{filename}'; "
            "set AnalysisConfig.output_dir to change where charts are written"
        )

    plots_dir = get_plots_dir(cfg)
    path = plots_dir / filename
    fig.savefig(str(path))
    plt.close(fig)
    print(f"Saved {path.stem.replace('_', ' ')} to {path}")
    return path


def plot_severity_histogram(df, cfg, filename=None, return_fig=False):
    """
    Histogram of claim severity, used to check how right-skewed losses are.

    Parameters:
    -----------
    df : pd.DataFrame
        Modeling dataset containing the severity column
    cfg : AnalysisConfig
        Supplies the output directory
    filename : str, optional
        Bare file name inside the output directory (default: severity_histogram.png);
        a name with a directory part raises ValueError
    return_fig : bool, default False
        If True, returns the matplotlib figure instead of saving it

    Returns:
    --------
    If return_fig=True: matplotlib.figure.Figure object
    Otherwise: Path of the saved image
    """
    fig, ax = plt.subplots(figsize=(config.PLOT_FIGSIZE_WIDTH, config.PLOT_FIGSIZE_HEIGHT))

    ax.hist(
        df[config.TARGET],
        bins=config.HISTOGRAM_BINS,
        color=config.HISTOGRAM_COLOR,
        edgecolor="white",
    )
    ax.xaxis.set_major_formatter(THOUSANDS)
    ax.set_title("Distribution of Insurance Claim Severity")
    ax.set_xlabel("Claim Amount ($)")
    ax.set_ylabel("Number of Claims")

    fig.tight_layout()

    if return_fig:
        return fig

    return _save(fig, cfg, filename or config.HISTOGRAM_FILENAME)


def plot_severity_by_deductible(df, cfg, filename=None, return_fig=False):
    """
    Box-plot of claim severity for each policy deductible.

    The deductible is numeric but only takes a handful of values, so each
    distinct value gets its own box.
    """
    deductibles = sorted(df[config.DEDUCTIBLE_COL].dropna().unique())
    groups = [
        df.loc[df[config.DEDUCTIBLE_COL] == ded, config.TARGET].to_numpy()
        for ded in deductibles
    ]

    fig, ax = plt.subplots(figsize=(config.PLOT_FIGSIZE_WIDTH, config.PLOT_FIGSIZE_HEIGHT))

    box = ax.boxplot(groups, patch_artist=True)
    for patch in box["boxes"]:
        patch.set_facecolor(config.BOXPLOT_COLOR)

    ax.set_xticks(range(1, len(deductibles) + 1))
    ax.set_xticklabels([f"{ded:g}" for ded in deductibles])
    ax.yaxis.set_major_formatter(THOUSANDS)
    ax.set_title("Claim Severity by Policy Deductible")
    ax.set_xlabel("Policy Deductible")
    ax.set_ylabel("Claim Amount ($)")

    fig.tight_layout()

    if return_fig:
        return fig

    return _save(fig, cfg, filename or config.BOXPLOT_FILENAME)


def save_severity_plots(df, cfg):
    """Writes both exploratory charts and returns their paths."""
    return [
        plot_severity_histogram(df, cfg),
        plot_severity_by_deductible(df, cfg),
    ]

"""
statcell - Statistical Summary Table Cells
==========================================

Builds the cells of statistical summary tables (Table 1 style reports):
each cell is a formatted statistic plus the metadata a renderer needs,
independent of the output medium (text, HTML, LaTeX).

Architecture Note:
    This package uses dictionaries (TypedDicts) instead of classes for data
    structures. All data containers are plain Python dicts with documented keys.

Architecture:
- formatting: Number rendering, digit guessing and quantiles
- cell: Cell data model, label/named-value/range/estimate cells
- cells: Fraction, N, IQR and test statistic cells
- nejm: NEJM style preformatted range/fraction/quantile cells
- hypothesis: Analysis records from scipy/statsmodels results
- dispatch: Analysis record -> statistic cell
- hmisc: Raw data -> test -> statistic cell
- table: Growable grid of cells
- styles: Style bundle registry (nejm, hmisc)

Usage:
    from statcell import create_cell_table, set_cell, cell_header, get_style

    style = get_style("nejm")
    table = create_cell_table(2, 3)
    set_cell(table, 0, 1, cell_header("Treatment"))
    set_cell(table, 1, 1, style["fraction"](7, 24, 3))
    set_cell(table, 1, 2, style["wilcox"](scores, arm))
"""
from __future__ import annotations

__version__ = "0.1.0"

# Formatting primitives
from .formatting import (
    EM_DASH,
    PLUS_MINUS,
    MISSING_MARKER,
    DEFAULT_FORMAT_P,
    render_f,
    render_df,
    format_guess,
    pad_count,
    quantile,
)

# Cell data model
from .cell import (
    CellKind,
    Cell,
    cell,
    is_cell,
    is_composite,
    cell_items,
    summarize_cell,
    cell_label,
    cell_header,
    cell_subheader,
    cell_named_values,
    cell_range,
    cell_estimate,
)

# Statistic cells
from .cells import (
    cell_fraction,
    cell_n,
    cell_iqr,
    cell_fstat,
    cell_chi2,
    cell_studentt,
    cell_spearman,
    cell_p,
)

# NEJM style
from .nejm import (
    nejm_range,
    nejm_fraction,
    nejm_iqr,
)

# Analysis records - Enum, TypedDicts and functions
from .hypothesis import (
    AnalysisKind,
    HypothesisTest,
    AnovaSummary,
    classify_test,
    is_loose_student_t,
    create_hypothesis_test,
    create_anova_summary,
    anova_summary_from_table,
    anova_summary_from_model,
    t_test,
    chi2_test,
    spearman_test,
    kruskal_test,
    statistics_summary,
)

# Dispatch
from .dispatch import (
    cell_from_anova,
    cell_from_htest,
    cell_from_result,
)

# Raw data statistic cells
from .hmisc import (
    hmisc_range,
    hmisc_fstat,
    hmisc_chi2,
    hmisc_spearman,
    hmisc_wilcox,
    hmisc_p,
)

# Tables
from .table import (
    CellTable,
    create_cell_table,
    rows,
    cols,
    get_cell,
    set_cell,
    add_row,
    add_col,
)

# Style bundles
from .styles import (
    STYLE_KEYS,
    NEJM_STYLE,
    HMISC_STYLE,
    STYLE_REGISTRY,
    get_style,
    register_style,
    list_styles,
    reset_styles,
)

__all__ = [
    # Version
    "__version__",

    # Formatting
    "EM_DASH",
    "PLUS_MINUS",
    "MISSING_MARKER",
    "DEFAULT_FORMAT_P",
    "render_f",
    "render_df",
    "format_guess",
    "pad_count",
    "quantile",

    # Cell - Enum, TypedDict and functions
    "CellKind",
    "Cell",
    "cell",
    "is_cell",
    "is_composite",
    "cell_items",
    "summarize_cell",
    "cell_label",
    "cell_header",
    "cell_subheader",
    "cell_named_values",
    "cell_range",
    "cell_estimate",

    # Statistic cells
    "cell_fraction",
    "cell_n",
    "cell_iqr",
    "cell_fstat",
    "cell_chi2",
    "cell_studentt",
    "cell_spearman",
    "cell_p",

    # NEJM style
    "nejm_range",
    "nejm_fraction",
    "nejm_iqr",

    # Analysis records
    "AnalysisKind",
    "HypothesisTest",
    "AnovaSummary",
    "classify_test",
    "is_loose_student_t",
    "create_hypothesis_test",
    "create_anova_summary",
    "anova_summary_from_table",
    "anova_summary_from_model",
    "t_test",
    "chi2_test",
    "spearman_test",
    "kruskal_test",
    "statistics_summary",

    # Dispatch
    "cell_from_anova",
    "cell_from_htest",
    "cell_from_result",

    # Raw data statistic cells
    "hmisc_range",
    "hmisc_fstat",
    "hmisc_chi2",
    "hmisc_spearman",
    "hmisc_wilcox",
    "hmisc_p",

    # Tables
    "CellTable",
    "create_cell_table",
    "rows",
    "cols",
    "get_cell",
    "set_cell",
    "add_row",
    "add_col",

    # Styles
    "STYLE_KEYS",
    "NEJM_STYLE",
    "HMISC_STYLE",
    "STYLE_REGISTRY",
    "get_style",
    "register_style",
    "list_styles",
    "reset_styles",
]

"""
Style Bundles
=============

A style bundle maps each kind of summary statistic to the constructor
that produces its cell. Swapping the bundle swaps the reporting
convention for a whole table.

Bundle keys:
- n: sample size
- range: minimum/maximum
- iqr: quantiles
- fraction: counts and percentages
- fstat, chi2, spearman, wilcox: test statistics
- p: p-values

Usage:
    from statcell.styles import get_style, register_style

    style = get_style("nejm")
    style["fraction"](7, 24, 3)["value"]      # ' 7/24 (29.2%)'

    register_style("journal", {"iqr": cell_iqr})  # NEJM with structured IQR cells
"""
from __future__ import annotations

from typing import Callable, Dict, List, Mapping, Tuple

from .cells import cell_fraction, cell_iqr, cell_n
from .hmisc import (
    hmisc_chi2,
    hmisc_fstat,
    hmisc_p,
    hmisc_range,
    hmisc_spearman,
    hmisc_wilcox,
)
from .nejm import nejm_fraction, nejm_iqr, nejm_range


StyleBundle = Dict[str, Callable[..., dict]]

STYLE_KEYS: Tuple[str, ...] = (
    "n", "range", "iqr", "fraction", "fstat", "chi2", "spearman", "wilcox", "p",
)


# =============================================================================
# Default bundles
# =============================================================================

NEJM_STYLE: StyleBundle = {
    "n": cell_n,
    "range": nejm_range,
    "iqr": nejm_iqr,
    "fraction": nejm_fraction,
    "fstat": hmisc_fstat,
    "chi2": hmisc_chi2,
    "spearman": hmisc_spearman,
    "wilcox": hmisc_wilcox,
    "p": hmisc_p,
}

HMISC_STYLE: StyleBundle = {
    **NEJM_STYLE,
    "range": hmisc_range,
    "iqr": cell_iqr,
    "fraction": cell_fraction,
}

_DEFAULT_STYLES: Dict[str, StyleBundle] = {
    "nejm": NEJM_STYLE,
    "hmisc": HMISC_STYLE,
}

# Global mutable registry (populated from defaults)
STYLE_REGISTRY: Dict[str, StyleBundle] = {
    name: dict(bundle) for name, bundle in _DEFAULT_STYLES.items()
}


# =============================================================================
# Registry API
# =============================================================================

def get_style(name: str = "nejm") -> StyleBundle:
    """
    Get a style bundle from the registry.

    :param name: Registered style name
    :returns: Mapping of statistic kind to cell constructor
    """
    if name not in STYLE_REGISTRY:
        raise ValueError(
            f"Style '{name}' not registered. Available styles: {list_styles()}"
        )
    return STYLE_REGISTRY[name]


def register_style(
    name: str,
    overrides: Mapping[str, Callable[..., dict]],
    base: str = "nejm",
    overwrite: bool = False,
) -> StyleBundle:
    """
    Register a new style bundle.

    The bundle starts as a copy of ``base`` and ``overrides`` replaces
    individual constructors.

    :param name: Name for the new style
    :param overrides: Constructors to replace, keyed by statistic kind
    :param base: Registered style to start from
    :param overwrite: Allow replacing an existing style
    :returns: The registered bundle
    """
    if name in STYLE_REGISTRY and not overwrite:
        raise ValueError(
            f"Style '{name}' already registered. Use overwrite=True to replace."
        )
    unknown = sorted(set(overrides) - set(STYLE_KEYS))
    if unknown:
        raise ValueError(f"Unknown style keys {unknown}; valid keys are {list(STYLE_KEYS)}")
    not_callable = sorted(k for k, fn in overrides.items() if not callable(fn))
    if not_callable:
        raise ValueError(f"Style entries must be callables: {not_callable}")

    bundle = {**get_style(base), **overrides}
    STYLE_REGISTRY[name] = bundle
    return bundle


def list_styles() -> List[str]:
    """Names of registered styles."""
    return sorted(STYLE_REGISTRY)


def reset_styles() -> None:
    """Reset the registry to the default styles (nejm, hmisc)."""
    STYLE_REGISTRY.clear()
    STYLE_REGISTRY.update({name: dict(bundle) for name, bundle in _DEFAULT_STYLES.items()})

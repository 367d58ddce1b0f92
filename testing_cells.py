"""
statcell Walkthrough Script
===========================

Demonstrates building the cells of a small two-arm summary table:
1. Formatting primitives
2. Label and statistic cells
3. NEJM style cells
4. Hypothesis tests -> cells
5. Style bundles
6. Table assembly

Run from the repository root:
    python testing_cells.py
"""
import warnings

import numpy as np

from statcell import (
    add_row,
    cell_estimate,
    cell_from_htest,
    cell_fraction,
    cell_header,
    cell_iqr,
    cell_label,
    cols,
    create_cell_table,
    create_hypothesis_test,
    format_guess,
    get_cell,
    get_style,
    nejm_fraction,
    nejm_iqr,
    nejm_range,
    register_style,
    render_f,
    rows,
    set_cell,
    spearman_test,
    statistics_summary,
    summarize_cell,
    t_test,
)

# =============================================================================
# SETUP: Simulated trial data
# =============================================================================
print("=" * 70)
print("STATCELL DEMONSTRATION")
print("=" * 70)

rng = np.random.default_rng(2024)
n_per_arm = 40
arm = ["Placebo"] * n_per_arm + ["Treated"] * n_per_arm
age = list(np.round(rng.normal(54, 9, size=2 * n_per_arm), 1))
score = list(rng.normal(10, 2, size=n_per_arm)) + list(rng.normal(11.2, 2, size=n_per_arm))
female = list(rng.random(2 * n_per_arm) < 0.45)
age[3] = float("nan")

print(f"\n[0] Simulated {len(arm)} participants in 2 arms")

# =============================================================================
# STEP 1: Formatting primitives
# =============================================================================
print("\n" + "=" * 70)
print("[1] FORMATTING")
print("=" * 70)

print(f"  render_f(3.14159, 2)      -> {render_f(3.14159, 2)!r}")
print(f"  render_f(0.0421, '%1.3f') -> {render_f(0.0421, '%1.3f')!r}")
print(f"  render_f(None, 2)         -> {render_f(None, 2)!r}")
print(f"  format_guess(age)         -> {format_guess(age)}")

# =============================================================================
# STEP 2: Label and statistic cells
# =============================================================================
print("\n" + "=" * 70)
print("[2] CELLS")
print("=" * 70)

print(summarize_cell(cell_label("Age", "years")))
print(summarize_cell(cell_fraction(12, 40)))
print(summarize_cell(cell_iqr(age, names=True)))
print(summarize_cell(cell_estimate(1.42, 1.05, 1.93, name="OR")))

# =============================================================================
# STEP 3: NEJM style
# =============================================================================
print("\n" + "=" * 70)
print("[3] NEJM STYLE")
print("=" * 70)

print(f"  range:    {nejm_range(age, 1)['value']}")
print(f"  fraction: {nejm_fraction(12, 40, 3)['value']}")
print(f"  iqr:      {nejm_iqr(age, 1, msd=True)['value']}")
print(f"  deciles:  {nejm_iqr(age, 1, quant=[0.1, 0.25, 0.5, 0.75, 0.9])['value']}")

# =============================================================================
# STEP 4: Hypothesis tests
# =============================================================================
print("\n" + "=" * 70)
print("[4] HYPOTHESIS TESTS")
print("=" * 70)

welch = t_test(score[:n_per_arm], score[n_per_arm:])
print(f"  {statistics_summary(welch)}")
print(summarize_cell(cell_from_htest(welch)))

rank = spearman_test(age, score)
print(f"  {statistics_summary(rank)}")
print(summarize_cell(cell_from_htest(rank)))

# Tests this package does not recognise fall back to Student t, with a warning
with warnings.catch_warnings(record=True) as caught:
    warnings.simplefilter("always")
    cell_from_htest(create_hypothesis_test(612.0, "W", 0.08, "Wilcoxon rank sum test"))
print(f"  Fallback warnings: {len(caught)}")

# =============================================================================
# STEP 5: Style bundles
# =============================================================================
print("\n" + "=" * 70)
print("[5] STYLE BUNDLES")
print("=" * 70)

nejm = get_style("nejm")
hmisc = get_style("hmisc")
print(f"  nejm fraction:  {nejm['fraction'](12, 40, 3)['value']!r}")
print(f"  hmisc fraction: {hmisc['fraction'](12, 40)['value']!r}")

journal = register_style("journal", {"iqr": cell_iqr}, overwrite=True)
print(f"  journal iqr:    {journal['iqr'](age, 1)['value']!r}")

# =============================================================================
# STEP 6: Table assembly
# =============================================================================
print("\n" + "=" * 70)
print("[6] TABLE")
print("=" * 70)

table = create_cell_table(1, 4, embedded=False)
set_cell(table, 0, 1, cell_header("Placebo", subcol="A"))
set_cell(table, 0, 2, cell_header("Treated", subcol="B"))
set_cell(table, 0, 3, cell_header("Test"))

placebo_age, treated_age = age[:n_per_arm], age[n_per_arm:]
add_row(table, [
    cell_label("Age", "years", row="age"),
    nejm["iqr"](placebo_age, 1, row="age", col="A"),
    nejm["iqr"](treated_age, 1, row="age", col="B"),
    nejm["wilcox"](age, arm, row="age", col="test"),
])

f_placebo = sum(female[:n_per_arm])
f_treated = sum(female[n_per_arm:])
add_row(table, [
    cell_label("Female", row="female"),
    nejm["fraction"](f_placebo, n_per_arm, 3, row="female", col="A"),
    nejm["fraction"](f_treated, n_per_arm, 3, row="female", col="B"),
    nejm["chi2"](female, arm, row="female", col="test"),
])

add_row(table, [
    cell_label("Score"),
    nejm["range"](score[:n_per_arm], 1),
    nejm["range"](score[n_per_arm:], 1),
    nejm["fstat"](score, arm),
])

print(f"  Table: {rows(table)} x {cols(table)}")
for r in range(rows(table)):
    row_text = []
    for c in range(cols(table)):
        value = get_cell(table, r, c)["value"]
        row_text.append(value if isinstance(value, str) else ", ".join(map(str, value)))
    print("  | " + " | ".join(f"{v:<24}" for v in row_text))

print("\n" + "=" * 70)
print("DONE")
print("=" * 70)

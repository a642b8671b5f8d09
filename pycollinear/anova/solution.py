"""
User-facing sequential ANOVA solution types.

AnovaTable is the table for one term order; iterating it yields the rows.
OrderingComparison collects the tables of every term order of one model.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from pycollinear.anova._common import RESIDUALS, AnovaParams, AnovaTableRow
from pycollinear.core.exceptions import UnknownTermError
from pycollinear.core.result import Result
from pycollinear.regression.solution import _STARS_LEGEND, _significance_stars


@dataclass(frozen=True)
class AnovaTable:
    """
    Type I table from sequential_anova(): one row per term in the order
    given, then Residuals.
    """
    _result: Result[AnovaParams]

    @property
    def rows(self) -> tuple[AnovaTableRow, ...]:
        """ANOVA table (term rows then Residuals: term, df, SS, MS, F, p)."""
        return self._result.params.table

    @property
    def terms(self) -> tuple[str, ...]:
        return self._result.params.terms

    @property
    def response(self) -> str:
        return self._result.params.response

    @property
    def n_obs(self) -> int:
        return self._result.params.n_obs

    @property
    def sum_sq(self) -> dict[str, float]:
        """Sequential SS per term, in model order (Residuals excluded)."""
        return {row.term: row.sum_sq for row in self.rows if row.term != RESIDUALS}

    @property
    def total_ss(self) -> float:
        """Total corrected sum of squares of the response."""
        return self._result.params.total_ss

    @property
    def explained_ss(self) -> float:
        """Sum of the term rows; independent of term order."""
        return sum(self.sum_sq.values())

    @property
    def rss_path(self) -> tuple[float, ...]:
        """RSS of each nested model, intercept-only first."""
        return self._result.params.rss_path

    @property
    def residual_df(self) -> int:
        return self._result.params.residual_df

    @property
    def residual_ss(self) -> float:
        return self._result.params.residual_ss

    @property
    def residual_ms(self) -> float:
        return self._result.params.residual_ms

    @property
    def eta_squared(self) -> dict[str, float]:
        return self._result.params.eta_squared

    @property
    def partial_eta_squared(self) -> dict[str, float]:
        return self._result.params.partial_eta_squared

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def row(self, term: str) -> AnovaTableRow:
        """The row for one term, or 'Residuals'."""
        for r in self.rows:
            if r.term == term:
                return r
        raise UnknownTermError(
            f"'{term}' is not in this table. Rows: {[r.term for r in self.rows]}",
            term=term,
            available=tuple(r.term for r in self.rows),
        )

    def __iter__(self) -> Iterator[AnovaTableRow]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    def summary(self) -> str:
        """Sequential SS table with F tests, then effect sizes."""
        rule = "-" * 80
        out = [
            f"Response: {self.response}   (n = {self.n_obs}, terms added in the order listed)",
            rule,
            f"{'':<20} {'Df':>6} {'Sum Sq':>14} {'Mean Sq':>14} {'F value':>10} {'Pr(>F)':>12}",
            rule,
        ]
        for row in self.rows:
            cells = f"{row.term:<20} {row.df:>6} {row.sum_sq:>14.4f} {row.mean_sq:>14.4f}"
            if row.f_value is not None:
                cells += (
                    f" {row.f_value:>10.4f} {row.p_value:>12.4e} "
                    f"{_significance_stars(row.p_value)}"
                )
            out.append(cells)
        out += [
            rule,
            f"{'Total':<20} {self.n_obs - 1:>6} {self.total_ss:>14.4f}",
            _STARS_LEGEND,
        ]
        if self.eta_squared:
            out.append("")
            out += [
                f"  {term:<18} eta^2 {eta:.4f}   partial {self.partial_eta_squared.get(term, eta):.4f}"
                for term, eta in self.eta_squared.items()
            ]
        out += [f"Warning: {message}" for message in self.warnings]
        return "\n".join(out)

    def __repr__(self) -> str:
        return f"AnovaTable(n={self.n_obs}, terms={list(self.terms)})"


@dataclass(frozen=True)
class OrderingComparison:
    """
    Sequential ANOVA tables for every order of the same set of terms.

    Produced by sequential_anova_orderings(). The explained SS is the same
    for every order; how it is split between the terms is not.
    """
    tables: dict[tuple[str, ...], AnovaTable]

    @property
    def orders(self) -> tuple[tuple[str, ...], ...]:
        return tuple(self.tables)

    @property
    def terms(self) -> tuple[str, ...]:
        return self.orders[0]

    @property
    def attribution_range(self) -> dict[str, tuple[float, float]]:
        """term -> (smallest, largest) sequential SS over all orders."""
        ranges: dict[str, tuple[float, float]] = {}
        for term in self.terms:
            values = [table.sum_sq[term] for table in self.tables.values()]
            ranges[term] = (min(values), max(values))
        return ranges

    @property
    def max_shift(self) -> float:
        """Largest change in any term's SS caused by reordering."""
        return max(hi - lo for lo, hi in self.attribution_range.values())

    @property
    def explained_ss(self) -> dict[tuple[str, ...], float]:
        return {order: table.explained_ss for order, table in self.tables.items()}

    def __getitem__(self, order: tuple[str, ...]) -> AnovaTable:
        return self.tables[tuple(order)]

    def summary(self) -> str:
        """Per-term attribution under each order."""
        terms = self.terms
        width = max(12, *(len(t) + 2 for t in terms))
        header = f"{'Order':<32}" + "".join(f"{t:>{width}}" for t in terms) + f"{'Explained':>14}"
        lines = [
            "Sequential SS by term order",
            "=" * len(header),
            header,
            "-" * len(header),
        ]
        for order, table in self.tables.items():
            label = " + ".join(order)
            ss = table.sum_sq
            lines.append(
                f"{label:<32}" + "".join(f"{ss[t]:>{width}.4f}" for t in terms)
                + f"{table.explained_ss:>14.4f}"
            )
        lines.append("-" * len(header))
        lines.append(f"Largest attribution shift: {self.max_shift:.4f}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"OrderingComparison(terms={list(self.terms)}, orders={len(self.tables)})"

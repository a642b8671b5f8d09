"""
Synthetic datasets with a controlled correlation structure.

The generator never infers coefficients: the caller supplies the true
model and the generator adds noise around it, so a fit can be judged
against known truth.
"""

from collections.abc import Mapping, Sequence

import numpy as np

from pycollinear.core.dataset import Dataset
from pycollinear.core.exceptions import InvalidInputError
from pycollinear.core.validation import check_positive_int
from pycollinear.simulation.stream import RandomStream, as_stream


def generate_linear(
    n: int,
    seed: int | RandomStream,
    *,
    slope: float,
    intercept: float = 0.0,
    low: float = 0.0,
    high: float = 50.0,
    noise_sd: float = 1.0,
    predictor: str = 'X',
    response: str = 'Y',
) -> Dataset:
    """
    One predictor, one response.

        X ~ Uniform(low, high)
        Y = intercept + slope * X + Normal(0, noise_sd)

    Example:
        >>> ds = generate_linear(20, 1979, slope=0.5)
        >>> fit(ds, ['X']).coefficients   # ~ [0, 0.5]
    """
    n = check_positive_int(n, 'n', minimum=2)
    stream = as_stream(seed)

    x = stream.uniform(low, high, n)
    dataset = Dataset.from_arrays(
        **{predictor: x},
        metadata={
            'source': 'generate_linear',
            'seed': stream.seed,
            'true_coefficients': {predictor: float(slope)},
            'true_intercept': float(intercept),
            'noise_sd': float(noise_sd),
        },
    )
    return simulate_response(
        dataset,
        {predictor: slope},
        stream,
        noise_sd,
        intercept=intercept,
        response=response,
    )


def generate_correlated(
    n: int,
    seed: int | RandomStream,
    base_spread: float = 10.0,
    noise_sd: float = 1.0,
    *,
    coefficients: Mapping[str, float] | Sequence[float],
    intercept: float = 0.0,
    low: float = 0.0,
    high: float = 50.0,
    response: str = 'Y',
) -> Dataset:
    """
    Two correlated predictors and a response built from them.

        X1 ~ Uniform(low, high)
        X2 = X1 + Uniform(0, base_spread)
        Y  = intercept + b1 * X1 + b2 * X2 + Normal(0, noise_sd)

    The correlation between X1 and X2 is induced, not forced: a smaller
    base_spread relative to (high - low) gives a stronger correlation.

    Args:
        n: Number of observations (>= 2)
        seed: Integer seed, or an injected RandomStream to draw from
        base_spread: Width of the uniform noise added to X1 to make X2 (> 0)
        noise_sd: Standard deviation of the response noise (>= 0)
        coefficients: True coefficients, either a mapping over a non-empty
            subset of {'X1', 'X2'} or a sequence (b1, b2)
        intercept: True intercept
        low, high: Range of X1
        response: Name of the response column

    Returns:
        Dataset with columns X1, X2 and the response

    Example:
        >>> ds = generate_correlated(50, 42, 10.0, 5.0, coefficients={'X1': 3, 'X2': 3})
    """
    n = check_positive_int(n, 'n', minimum=2)
    coefs = _coerce_coefficients(coefficients, ('X1', 'X2'))
    if not np.isfinite(base_spread) or base_spread <= 0:
        raise InvalidInputError(f"base_spread: must be > 0, got {base_spread}")

    stream = as_stream(seed)

    x1 = stream.uniform(low, high, n)
    x2 = x1 + stream.uniform(0.0, base_spread, n)

    dataset = Dataset.from_arrays(
        X1=x1,
        X2=x2,
        metadata={
            'source': 'generate_correlated',
            'seed': stream.seed,
            'base_spread': float(base_spread),
            'true_coefficients': dict(coefs),
            'true_intercept': float(intercept),
            'noise_sd': float(noise_sd),
        },
    )
    return simulate_response(
        dataset, coefs, stream, noise_sd, intercept=intercept, response=response
    )


def simulate_response(
    dataset: Dataset,
    coefficients: Mapping[str, float],
    stream: RandomStream,
    noise_sd: float,
    *,
    intercept: float = 0.0,
    response: str = 'Y',
) -> Dataset:
    """
    Add (or replace) a response column built from existing columns.

        response = intercept + Σ coefficients[name] * dataset[name] + Normal(0, noise_sd)

    Used to make the response a function of derived columns, e.g. the
    principal components returned by pca().

    Raises:
        UnknownTermError: If a coefficient names a missing column
        InvalidInputError: If coefficients is empty or not finite
    """
    if not isinstance(stream, RandomStream):
        raise InvalidInputError(
            f"stream: expected a RandomStream, got {type(stream).__name__}"
        )
    coefs = _coerce_coefficients(coefficients, dataset.predictor_names)
    if response in coefs:
        raise InvalidInputError(f"Response '{response}' cannot appear in coefficients")

    signal = np.full(dataset.n_observations, float(intercept))
    for name, beta in coefs.items():
        signal = signal + beta * dataset[name]

    if noise_sd == 0:
        noise = np.zeros(dataset.n_observations)
    else:
        noise = stream.normal(0.0, noise_sd, dataset.n_observations)

    return dataset.with_columns(**{response: signal + noise}).with_response(response)


def _coerce_coefficients(
    coefficients: Mapping[str, float] | Sequence[float],
    names: tuple[str, ...],
) -> dict[str, float]:
    """Normalize coefficients to a {name: float} mapping."""
    if isinstance(coefficients, Mapping):
        coefs = {str(k): float(v) for k, v in coefficients.items()}
    else:
        values = list(coefficients)
        if len(values) > len(names):
            raise InvalidInputError(
                f"coefficients: got {len(values)} values for predictors {list(names)}"
            )
        coefs = {name: float(v) for name, v in zip(names, values)}

    if not coefs:
        raise InvalidInputError("coefficients: at least one predictor is required")
    for name, beta in coefs.items():
        if not np.isfinite(beta):
            raise InvalidInputError(f"coefficients: {name} = {beta} is not finite")
    return coefs

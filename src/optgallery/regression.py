"""
Regularized logistic regression as a conic program.

Fitting a logistic regression means minimizing the logistic loss

    min_θ  Σ_i log(1 + exp(-y_i θᵀx_i)) + λ‖θ‖

over a training set with labels y_i ∈ {-1, +1}. With auxiliary variables
t_i and r the problem becomes

    min  Σ_i t_i + λ r
    s.t. t_i ≥ log(1 + exp(u_i)),   u_i = -y_i θᵀx_i
         r ≥ ‖θ‖

Each softplus constraint t ≥ log(1 + exp(u)) is equivalent to
exp(u - t) + exp(-t) ≤ 1, i.e. to the two exponential cone memberships
(u - t, 1, z₁) ∈ K_exp and (-t, 1, z₂) ∈ K_exp together with z₁ + z₂ ≤ 1,
where K_exp = {(x, y, z) : y exp(x / y) ≤ z}. The norm bound is a
second-order cone for ℓ2 and an ℓ1-norm cone for the sparse variant.

The cone programs are built with cvxpy and handed to whichever conic solver
is installed (ECOS, Clarabel or SCS).
"""

import logging
import time
import numpy as np
from dataclasses import dataclass
from typing import List, Optional, Tuple

import cvxpy as cp
from cvxpy.constraints import Constraint, ExpCone
from cvxpy.expressions.expression import Expression

from .exceptions import SolverError, SolverUnavailableError


logger = logging.getLogger(__name__)

PENALTIES = ("l2", "l1")
FORMULATIONS = ("conic", "atom")

# Exponential-cone capable solvers, most preferred first
CONIC_SOLVER_PREFERENCE = ("ECOS", "CLARABEL", "SCS")

ACCEPTED_STATUSES = (cp.OPTIMAL, cp.OPTIMAL_INACCURATE)


@dataclass
class LogitModel:
    """A built but not yet solved logistic regression problem."""
    problem: cp.Problem
    theta: cp.Variable
    reg: Optional[cp.Variable]
    penalty: str
    lam: float
    formulation: str = "conic"


@dataclass
class LogisticFit:
    """Result of fitting a regularized logistic regression."""
    theta: np.ndarray
    objective: float
    status: str
    solver: str
    penalty: str
    lam: float
    formulation: str = "conic"
    solve_time: float = 0.0

    def nonzero_count(self, tol: float = 1e-8) -> int:
        return count_nonzero(self.theta, tol=tol)

    def predict(self, X: np.ndarray) -> np.ndarray:
        return predict(X, self.theta)


def generate_dataset(
    n_samples: int = 100,
    n_features: int = 10,
    corr: float = 0.0,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Generate a synthetic binary classification dataset.

    Labels come from a random hyperplane through the origin; the features
    are then perturbed with Gaussian noise and shifted by ``corr``, which
    correlates every feature with the intercept column appended last.

    Args:
        n_samples: Number of rows.
        n_features: Number of random features (an intercept column is added).
        corr: Constant added to every feature.
        seed: Seed for a fresh numpy Generator (ignored when rng is given).
        rng: Generator to draw from.

    Returns:
        Tuple (X, y) with X of shape (n_samples, n_features + 1) and
        y in {-1, +1}.
    """
    if n_samples < 1 or n_features < 1:
        raise ValueError("n_samples and n_features must be positive")

    if rng is None:
        rng = np.random.default_rng(seed)

    X = rng.standard_normal((n_samples, n_features))
    w = rng.standard_normal(n_features)
    y = np.sign(X @ w)
    y[y == 0] = 1.0

    X += 0.8 * rng.standard_normal((n_samples, n_features))  # add noise
    X += corr
    X = np.hstack([X, np.ones((n_samples, 1))])
    return X, y


def softplus(t, u) -> List[Constraint]:
    """
    Constraints enforcing t ≥ log(1 + exp(u)) elementwise.

    Args:
        t: cvxpy expression (scalar or vector) bounding the softplus.
        u: cvxpy expression or array of the same shape.

    Returns:
        The list of constraints, including the auxiliary z ≥ 0 variables.
    """
    t = Expression.cast_to_const(t)
    u = Expression.cast_to_const(u)
    if t.ndim == 0:
        t = cp.reshape(t, (1,), order="F")
        u = cp.reshape(u, (1,), order="F")
    if t.shape != u.shape or t.ndim != 1:
        raise ValueError(f"softplus expects matching vectors, got shapes {t.shape} and {u.shape}")

    n = t.shape[0]
    z = cp.Variable((n, 2), nonneg=True)
    ones = np.ones(n)

    return [
        cp.sum(z, axis=1) <= 1,
        ExpCone(u - t, ones, z[:, 0]),
        ExpCone(-t, ones, z[:, 1]),
    ]


def _check_data(X: np.ndarray, y: np.ndarray, lam: float) -> Tuple[np.ndarray, np.ndarray]:
    X = np.asarray(X, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)

    if X.ndim != 2:
        raise ValueError(f"X must be a 2-D array, got shape {X.shape}")
    if y.shape != (X.shape[0],):
        raise ValueError(f"y must have shape ({X.shape[0]},), got {y.shape}")
    if not np.isin(y, (-1.0, 1.0)).all():
        raise ValueError("Labels must be -1 or +1")
    if lam < 0:
        raise ValueError(f"Regularization lambda must be non-negative, got {lam}")

    return X, y


def _build_conic_model(X, y, lam: float, penalty: str) -> LogitModel:
    X, y = _check_data(X, y, lam)
    n, p = X.shape

    theta = cp.Variable(p, name="theta")
    t = cp.Variable(n, name="t")
    reg = cp.Variable(nonneg=True, name="reg")

    u = -cp.multiply(y, X @ theta)
    constraints = softplus(t, u)

    if penalty == "l2":
        constraints.append(cp.SOC(reg, theta))
    elif penalty == "l1":
        constraints.append(cp.norm1(theta) <= reg)
    else:
        raise ValueError(f"Unknown penalty '{penalty}', expected one of {PENALTIES}")

    problem = cp.Problem(cp.Minimize(cp.sum(t) + lam * reg), constraints)
    logger.debug("Built %s conic logit model: %d samples, %d features, %d constraints",
                 penalty, n, p, len(constraints))
    return LogitModel(problem=problem, theta=theta, reg=reg, penalty=penalty, lam=lam)


def build_logit_model(X: np.ndarray, y: np.ndarray, lam: float) -> LogitModel:
    """ℓ2-regularized logistic regression with (reg, θ) in a second-order cone."""
    return _build_conic_model(X, y, lam, "l2")


def build_sparse_logit_model(X: np.ndarray, y: np.ndarray, lam: float) -> LogitModel:
    """ℓ1-regularized (sparse) logistic regression with ‖θ‖₁ ≤ reg."""
    return _build_conic_model(X, y, lam, "l1")


def build_atom_logit_model(X: np.ndarray, y: np.ndarray, lam: float, penalty: str = "l2") -> LogitModel:
    """
    The same regression written with cvxpy's ``logistic`` atom.

    cvxpy performs the exponential cone reformulation itself, so this model
    serves as a cross-check of the hand-written softplus cones.
    """
    X, y = _check_data(X, y, lam)
    if penalty not in PENALTIES:
        raise ValueError(f"Unknown penalty '{penalty}', expected one of {PENALTIES}")

    theta = cp.Variable(X.shape[1], name="theta")
    loss = cp.sum(cp.logistic(-cp.multiply(y, X @ theta)))
    norm = cp.norm(theta, 2) if penalty == "l2" else cp.norm1(theta)

    problem = cp.Problem(cp.Minimize(loss + lam * norm))
    return LogitModel(problem=problem, theta=theta, reg=None, penalty=penalty, lam=lam, formulation="atom")


def choose_conic_solver() -> str:
    """
    Pick an installed cvxpy solver that supports exponential cones.

    Raises:
        SolverUnavailableError: If none of ECOS, Clarabel or SCS is installed.
    """
    installed = cp.installed_solvers()
    for name in CONIC_SOLVER_PREFERENCE:
        if name in installed:
            return name
    raise SolverUnavailableError(
        f"No exponential cone solver available; install one of {CONIC_SOLVER_PREFERENCE}"
    )


def solve_logit_model(model: LogitModel, solver: Optional[str] = None, verbose: bool = False) -> LogisticFit:
    """
    Solve a built logistic regression model.

    Raises:
        SolverUnavailableError: If no conic solver is installed.
        SolverError: If the solver fails or stops without an optimal point.
    """
    solver = solver or choose_conic_solver()

    start_time = time.time()
    try:
        model.problem.solve(solver=solver, verbose=verbose)
    except cp.SolverError as e:
        raise SolverError(f"{solver} failed on the {model.penalty} logit model: {e}") from e
    solve_time = time.time() - start_time

    status = model.problem.status
    if status not in ACCEPTED_STATUSES:
        raise SolverError(f"{solver} returned status '{status}' for the {model.penalty} logit model")
    if status == cp.OPTIMAL_INACCURATE:
        logger.warning("%s reported an inaccurate optimum for the %s logit model", solver, model.penalty)

    logger.info("%s %s logit model solved in %.2fs, objective %.4f",
                solver, model.penalty, solve_time, model.problem.value)

    return LogisticFit(
        theta=np.asarray(model.theta.value, dtype=np.float64),
        objective=float(model.problem.value),
        status=status,
        solver=solver,
        penalty=model.penalty,
        lam=model.lam,
        formulation=model.formulation,
        solve_time=solve_time,
    )


def fit_logistic_regression(
    X: np.ndarray,
    y: np.ndarray,
    lam: float = 10.0,
    penalty: str = "l2",
    solver: Optional[str] = None,
    formulation: str = "conic",
    verbose: bool = False,
) -> LogisticFit:
    """
    Build and solve a regularized logistic regression.

    Args:
        X: Feature matrix (n_samples, n_features).
        y: Labels in {-1, +1}.
        lam: Regularization weight λ ≥ 0.
        penalty: "l2" (second-order cone) or "l1" (sparse).
        solver: cvxpy solver name; picked by choose_conic_solver() if None.
        formulation: "conic" for the explicit softplus cones or "atom" for
            cvxpy's logistic atom.
        verbose: Whether to show the solver log.

    Returns:
        A LogisticFit with the optimal coefficients.
    """
    if formulation == "conic":
        if penalty == "l1":
            model = build_sparse_logit_model(X, y, lam)
        elif penalty == "l2":
            model = build_logit_model(X, y, lam)
        else:
            raise ValueError(f"Unknown penalty '{penalty}', expected one of {PENALTIES}")
    elif formulation == "atom":
        model = build_atom_logit_model(X, y, lam, penalty)
    else:
        raise ValueError(f"Unknown formulation '{formulation}', expected one of {FORMULATIONS}")

    return solve_logit_model(model, solver=solver, verbose=verbose)


def count_nonzero(v: np.ndarray, tol: float = 1e-8) -> int:
    """Number of components with absolute value above tol."""
    return int(np.sum(np.abs(np.asarray(v)) > tol))


def logistic_loss(X: np.ndarray, y: np.ndarray, theta: np.ndarray) -> float:
    """Σ_i log(1 + exp(-y_i θᵀx_i)), evaluated stably."""
    margins = -np.asarray(y) * (np.asarray(X) @ np.asarray(theta))
    return float(np.sum(np.logaddexp(0.0, margins)))


def predict(X: np.ndarray, theta: np.ndarray) -> np.ndarray:
    """Predicted labels in {-1, +1}; ties go to +1."""
    scores = np.asarray(X) @ np.asarray(theta)
    return np.where(scores >= 0, 1.0, -1.0)


def accuracy(X: np.ndarray, y: np.ndarray, theta: np.ndarray) -> float:
    """Fraction of samples whose predicted label matches y."""
    return float(np.mean(predict(X, theta) == np.asarray(y)))

"""
Dense Gaussian elimination with partial pivoting (JIT-compiled).

Near-singular pivots do not raise: the affected unknown is left at zero and
the rest of the system is still solved.
"""

from __future__ import annotations
from functools import partial

import jax
import jax.numpy as jnp
from jax import Array

PIVOT_TOLERANCE = 1e-10


@partial(jax.jit, static_argnames=("pivot_tolerance",))
def gaussian_solve(A: Array, b: Array, pivot_tolerance: float = PIVOT_TOLERANCE) -> Array:
    """
    Solve A x = b.

    For each column the row (at or below the diagonal) with the largest
    magnitude entry is swapped into place. If that magnitude is below
    `pivot_tolerance` the column is not eliminated and its unknown stays 0
    during back-substitution.

    Args:
        A: (n, n) matrix
        b: (n,) right-hand side

    Returns:
        x: (n,) solution
    """
    n = A.shape[0]
    rows = jnp.arange(n)

    def eliminate(i, carry):
        M, r = carry
        # Rows above the pivot are out of the running
        candidates = jnp.where(rows >= i, jnp.abs(M[:, i]), -1.0)
        p = jnp.argmax(candidates)
        perm = rows.at[i].set(p).at[p].set(i)
        M = M[perm]
        r = r[perm]

        pivot = M[i, i]
        usable = jnp.abs(pivot) >= pivot_tolerance
        safe_pivot = jnp.where(usable, pivot, 1.0)
        factors = jnp.where((rows > i) & usable, M[:, i] / safe_pivot, 0.0)
        M = M - factors[:, None] * M[i][None, :]
        r = r - factors * r[i]
        return M, r

    M, r = jax.lax.fori_loop(0, n, eliminate, (A, b))

    def back_substitute(k, x):
        i = n - 1 - k
        pivot = M[i, i]
        usable = jnp.abs(pivot) >= pivot_tolerance
        # x[j] is still 0 for j <= i, so the dot product only sees solved unknowns
        s = jnp.dot(M[i], x)
        value = jnp.where(usable, (r[i] - s) / jnp.where(usable, pivot, 1.0), 0.0)
        return x.at[i].set(value)

    return jax.lax.fori_loop(0, n, back_substitute, jnp.zeros_like(r))

"""
Back-transformation of tridiagonal eigenvectors and eigenpair ordering.

Eigenvectors of T become eigenvectors of A through V = Q Z, where Q is
replayed from the reflection records of the tridiagonal form. Eigenpairs are
then ordered by descending eigenvalue.
"""

from __future__ import annotations

from typing import Any
import numpy as np
from numpy.typing import NDArray

from pysymeig.eigen._tridiagonal import TridiagonalForm


def back_transform(
    form: TridiagonalForm,
    z: NDArray[np.floating[Any]],
) -> NDArray[np.floating[Any]]:
    """
    Map eigenvectors of T to eigenvectors of A.

    Applies the stored reflections in reverse elimination order (V = Q Z)
    and renormalizes each column to unit length to remove the drift the
    reflection chain accumulates.

    Args:
        form: Tridiagonal form holding the reflection records
        z: Eigenvectors of T as columns (n x n)

    Returns:
        New array V (n x n) with unit columns
    """
    v = form.apply_q(z)
    norms = np.linalg.norm(v, axis=0)
    # Columns of an orthogonal Z cannot vanish; guard anyway against 0/0
    norms[norms == 0.0] = 1.0
    v /= norms
    return v


def sort_descending(
    eigenvalues: NDArray[np.floating[Any]],
    eigenvectors: NDArray[np.floating[Any]] | None = None,
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]] | None]:
    """
    Order eigenpairs by descending eigenvalue.

    Ties keep their emission order (stable sort), so a repeated eigenvalue
    always comes out with the same eigenspace basis for the same input.

    Args:
        eigenvalues: Unsorted eigenvalues (n,)
        eigenvectors: Matching eigenvectors as columns (n x n), or None

    Returns:
        (sorted eigenvalues, eigenvectors with columns permuted alike)
    """
    order = np.argsort(-eigenvalues, kind='stable')
    values = eigenvalues[order]
    vectors = eigenvectors[:, order] if eigenvectors is not None else None
    return values, vectors


def assemble_eigenpairs(
    form: TridiagonalForm,
    eigenvalues: NDArray[np.floating[Any]],
    z: NDArray[np.floating[Any]] | None,
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]] | None]:
    """Back-transform (when vectors exist) and sort the eigenpairs of A."""
    vectors = back_transform(form, z) if z is not None else None
    return sort_descending(eigenvalues, vectors)

import operator
from typing import Tuple

import numpy as np


def check_nreps(nreps) -> int:
  """
  Validate a repeat count and return it as a plain int.

  Parameters
  ----------
  nreps : int
      Number of times a matrix is repeated along the diagonal

  Returns
  -------
  int
      The repeat count

  Raises
  ------
  TypeError
      If nreps is not an integer
  ValueError
      If nreps is negative
  """
  if isinstance(nreps, (bool, np.bool_)):
    raise TypeError("Repeat count must be an integer, got a bool")
  try:
    nreps = operator.index(nreps)
  except TypeError:
    raise TypeError(
        f"Repeat count must be an integer, got {type(nreps).__name__}") from None
  if nreps < 0:
    raise ValueError(f"Repeat count must be non-negative, got {nreps}")
  return nreps


def check_2d(shape: Tuple[int, ...]) -> Tuple[int, int]:
  """Return (rows, cols) for a 2D shape, raising ValueError otherwise."""
  if len(shape) != 2:
    raise ValueError(f"Expected a 2D matrix, got shape {shape}")
  rows, cols = shape
  return rows, cols


def check_out_shape(out_shape: Tuple[int, ...],
                    expected: Tuple[int, int]) -> None:
  if tuple(out_shape) != tuple(expected):
    raise ValueError(
        f"Output has shape {tuple(out_shape)}, expected {tuple(expected)}")

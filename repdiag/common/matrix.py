import logging
from typing import Optional, Union

import numpy as np
import scipy.sparse as sp

from repdiag.common.validation import check_2d, check_nreps, check_out_shape
from repdiag.defaults import OUT_SPARSE_FORMATS, default_sparse_format

logger = logging.getLogger(__name__)

SparseMatrix = Union[sp.spmatrix, sp.sparray]


def repdiag_dense(mat: np.ndarray,
                  nreps: int,
                  out: Optional[np.ndarray] = None,
                  ) -> np.ndarray:
  """
  Create a block diagonal matrix from a dense 2D array, where the input array is repeated nreps times along the diagonal

  Parameters
  ----------
  mat : np.ndarray
      m x n array to repeat
  nreps : int
      Number of repetitions of the matrix
  out : np.ndarray, optional
      Array of shape (m*nreps, n*nreps) to write the result into. It is zeroed before the blocks are copied in.

  Returns
  -------
  np.ndarray
      An (m*nreps) x (n*nreps) block diagonal matrix. This is out when it is given.
  """
  nreps = check_nreps(nreps)
  mat = np.asarray(mat)
  rows, cols = check_2d(mat.shape)
  shape = (nreps * rows, nreps * cols)
  logger.debug("Repeating dense %s matrix %d times", mat.shape, nreps)

  if out is None:
    result = np.zeros(shape, dtype=mat.dtype)
  else:
    if not isinstance(out, np.ndarray):
      raise TypeError(
          f"Dense output must be a numpy array, got {type(out).__name__}")
    check_out_shape(out.shape, shape)
    if np.may_share_memory(out, mat):
      raise ValueError("Output must not share memory with the input matrix")
    result = out
    result[...] = 0

  for i in range(nreps):
    result[i*rows:(i+1)*rows, i*cols:(i+1)*cols] = mat

  return result


def repdiag_sparse(mat: SparseMatrix,
                   nreps: int,
                   out: Optional[SparseMatrix] = None,
                   format: Optional[str] = None,
                   ) -> SparseMatrix:
  """
  Create a sparse block diagonal matrix from a sparse matrix, where the input matrix is repeated nreps times along the diagonal.

  The stored entries of each block are gathered in coordinate form and compressed once at the end. Explicit zeros stored in the input are kept.

  Parameters
  ----------
  mat : scipy.sparse matrix or array
      m x n sparse matrix to repeat, in any storage format
  nreps : int
      Number of repetitions of the matrix
  out : scipy.sparse matrix or array, optional
      A csr or csc matrix of shape (m*nreps, n*nreps) whose storage is replaced by the result
  format : str, optional
      Sparse format of the result (e.g. "csr"). Defaults to the format of out, or to :data:`repdiag.defaults.SPARSE_FORMAT`

  Returns
  -------
  scipy.sparse matrix or array
      An (m*nreps) x (n*nreps) block diagonal matrix. A sparse array if mat is a sparse array, otherwise a sparse matrix. This is out when it is given.
  """
  nreps = check_nreps(nreps)
  if not sp.issparse(mat):
    raise TypeError(
        f"Expected a scipy sparse matrix, got {type(mat).__name__}")
  rows, cols = check_2d(mat.shape)
  shape = (nreps * rows, nreps * cols)

  if out is not None:
    if not sp.issparse(out) or out.format not in OUT_SPARSE_FORMATS:
      raise TypeError(
          f"Sparse output must be one of the formats {OUT_SPARSE_FORMATS}")
    if format is not None and format != out.format:
      raise ValueError(
          f"Requested format '{format}' does not match output format '{out.format}'")
    check_out_shape(out.shape, shape)
    if out is mat:
      raise ValueError("Output must not be the input matrix")
    format = out.format
  elif format is None:
    format = default_sparse_format()

  coo = mat.tocoo()
  nnz = coo.nnz
  logger.debug("Repeating sparse %s matrix with %d stored entries %d times",
               mat.shape, nnz, nreps)

  # Room for every stored entry of every block
  row = np.empty(nreps * nnz, dtype=np.int64)
  col = np.empty(nreps * nnz, dtype=np.int64)
  data = np.empty(nreps * nnz, dtype=coo.dtype)
  for i in range(nreps):
    block = slice(i*nnz, (i+1)*nnz)
    row[block] = coo.row + i*rows
    col[block] = coo.col + i*cols
    data[block] = coo.data

  container = sp.coo_array if isinstance(mat, sp.sparray) else sp.coo_matrix
  result = container((data, (row, col)), shape=shape).asformat(format)
  logger.debug("Built %s block diagonal matrix with %d stored entries",
               format, result.nnz)

  if out is None:
    return result

  out.data = result.data.astype(out.dtype, copy=False)
  out.indices = result.indices
  out.indptr = result.indptr
  out.has_sorted_indices = result.has_sorted_indices
  out.has_canonical_format = result.has_canonical_format
  return out


def repdiag(mat: Union[np.ndarray, SparseMatrix],
            nreps: int,
            out: Optional[Union[np.ndarray, SparseMatrix]] = None,
            ) -> Union[np.ndarray, SparseMatrix]:
  """
  Repeat a matrix along the diagonal nreps times, so that an m x n matrix becomes an (m*nreps) x (n*nreps) block diagonal matrix. The result is sparse if mat is sparse and dense otherwise.

  Parameters
  ----------
  mat : np.ndarray or scipy.sparse matrix or array
      m x n matrix to repeat
  nreps : int
      Number of repetitions of the matrix
  out : optional
      Preallocated output, see :func:`repdiag_dense` and :func:`repdiag_sparse`

  Returns
  -------
  np.ndarray or scipy.sparse matrix or array
      The block diagonal matrix
  """
  if sp.issparse(mat):
    return repdiag_sparse(mat, nreps, out=out)
  return repdiag_dense(mat, nreps, out=out)

"""
Package-wide defaults. Override per call through the keyword arguments of the functions in :mod:`repdiag.common.matrix` rather than by editing these values.
"""

# Compressed format produced by the sparse path when the caller does not ask for one
SPARSE_FORMAT = "csc"

# Sparse formats that can be filled in place through the out parameter
OUT_SPARSE_FORMATS = ("csr", "csc")


def default_sparse_format() -> str:
  return SPARSE_FORMAT

# Copyright (c) PyPTO Contributors.
# This program is free software, you can redistribute it and/or modify it under the terms and conditions of
# CANN Open Software License Agreement Version 2.0 (the "License").
# Please refer to the License for details. You may not use this file except in compliance with the License.
# THIS SOFTWARE IS PROVIDED ON AN "AS IS" BASIS, WITHOUT WARRANTIES OF ANY KIND, EITHER EXPRESS OR IMPLIED,
# INCLUDING BUT NOT LIMITED TO NON-INFRINGEMENT, MERCHANTABILITY, OR FITNESS FOR A PARTICULAR PURPOSE.
# See LICENSE in the root of the software repository for the full text of the License.
# -----------------------------------------------------------------------------------------------------------

"""Types inferred by the type checker. These never appear in source text."""

from dataclasses import dataclass
from typing import Union

from tensorlang.core import DataType


@dataclass(frozen=True)
class TensorType:
    """Tensor with a static shape and element dtype."""

    shape: tuple[int, ...]
    dtype: DataType

    def __init__(self, shape, dtype: DataType):
        # Accept any sequence of ints for the shape
        object.__setattr__(self, "shape", tuple(int(dim) for dim in shape))
        object.__setattr__(self, "dtype", dtype)

    @property
    def rank(self) -> int:
        return len(self.shape)

    def __str__(self) -> str:
        return f"Tensor[{list(self.shape)}, {self.dtype}]"


@dataclass(frozen=True)
class ScalarType:
    """Zero-dimensional value, distinct from a rank-0 tensor."""

    dtype: DataType

    def __str__(self) -> str:
        return f"Scalar[{self.dtype}]"


Type = Union[TensorType, ScalarType]


__all__ = ["ScalarType", "TensorType", "Type"]

# Copyright (c) PyPTO Contributors.
# This program is free software, you can redistribute it and/or modify it under the terms and conditions of
# CANN Open Software License Agreement Version 2.0 (the "License").
# Please refer to the License for details. You may not use this file except in compliance with the License.
# THIS SOFTWARE IS PROVIDED ON AN "AS IS" BASIS, WITHOUT WARRANTIES OF ANY KIND, EITHER EXPRESS OR IMPLIED,
# INCLUDING BUT NOT LIMITED TO NON-INFRINGEMENT, MERCHANTABILITY, OR FITNESS FOR A PARTICULAR PURPOSE.
# See LICENSE in the root of the software repository for the full text of the License.
# -----------------------------------------------------------------------------------------------------------

"""Element data types understood by the DSL and the torch runtime."""

from enum import Enum


class DataType(Enum):
    """Element data type of a tensor or scalar.

    Each member carries two names:
    - ``short_name``: compact name used in diagnostics (e.g. ``f32``)
    - ``torch_name``: attribute name on the ``torch`` module (e.g. ``float32``)
    """

    F32 = ("f32", "float32")
    F64 = ("f64", "float64")
    I64 = ("i64", "int64")
    U32 = ("u32", "uint32")
    U8 = ("u8", "uint8")
    BF16 = ("bf16", "bfloat16")
    F16 = ("f16", "float16")

    def __init__(self, short_name: str, torch_name: str):
        self.short_name = short_name
        self.torch_name = torch_name

    @classmethod
    def from_str(cls, name: str) -> "DataType":
        """Look up a data type by its short name.

        Args:
            name: Short name such as ``"f32"`` or ``"i64"``

        Returns:
            The matching DataType

        Raises:
            ValueError: If no data type has that name
        """
        for dtype in cls:
            if dtype.short_name == name:
                return dtype
        raise ValueError(f"Unknown dtype '{name}'")

    def is_float(self) -> bool:
        return self in (DataType.F32, DataType.F64, DataType.BF16, DataType.F16)

    def __str__(self) -> str:
        return self.short_name


# Dtype of a fill tensor declared without an explicit data type
DEFAULT_FILL_DTYPE = DataType.F32

# Range tensors are always 64-bit integers
RANGE_DTYPE = DataType.I64


__all__ = ["DataType", "DEFAULT_FILL_DTYPE", "RANGE_DTYPE"]

# Copyright (c) PyPTO Contributors.
# This program is free software, you can redistribute it and/or modify it under the terms and conditions of
# CANN Open Software License Agreement Version 2.0 (the "License").
# Please refer to the License for details. You may not use this file except in compliance with the License.
# THIS SOFTWARE IS PROVIDED ON AN "AS IS" BASIS, WITHOUT WARRANTIES OF ANY KIND, EITHER EXPRESS OR IMPLIED,
# INCLUDING BUT NOT LIMITED TO NON-INFRINGEMENT, MERCHANTABILITY, OR FITNESS FOR A PARTICULAR PURPOSE.
# See LICENSE in the root of the software repository for the full text of the License.
# -----------------------------------------------------------------------------------------------------------

"""
Hello World: declare two tensors and multiply them.

Program structure:
  ``a`` is a 2x3 tensor of zeros, ``b`` a 3x4 tensor of ones.
  ``a * b`` is a well-typed multiplication of the two, so the checker
  reports nothing and the generated ``main`` builds both tensors with torch.
"""

import tensorlang

SOURCE = """
a = [2 x 3; 0];
b = [3 x 4; 1];
a * b;
"""


def main():
    result = tensorlang.compile(SOURCE)
    assert result.ok
    print(result.code)


if __name__ == "__main__":
    main()

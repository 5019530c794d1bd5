# Copyright (c) PyPTO Contributors.
# This program is free software, you can redistribute it and/or modify it under the terms and conditions of
# CANN Open Software License Agreement Version 2.0 (the "License").
# Please refer to the License for details. You may not use this file except in compliance with the License.
# THIS SOFTWARE IS PROVIDED ON AN "AS IS" BASIS, WITHOUT WARRANTIES OF ANY KIND, EITHER EXPRESS OR IMPLIED,
# INCLUDING BUT NOT LIMITED TO NON-INFRINGEMENT, MERCHANTABILITY, OR FITNESS FOR A PARTICULAR PURPOSE.
# See LICENSE in the root of the software repository for the full text of the License.
# -----------------------------------------------------------------------------------------------------------

"""
Diagnostics: report multiplication errors with source locations.

The program below mixes an integer range with a float tensor and then
multiplies two tensors whose inner dimensions disagree. Both statements
still lower to torch code; the checker's findings are printed first.
"""

import tensorlang

SOURCE = """\
r = [0..6];
m = [2 x 3; 1];
r * m;
x = [2 x 3; 0];
x * m;
"""


def main():
    result = tensorlang.compile(SOURCE)
    print(result.render_diagnostics("diagnostics.tl"))
    print()
    print(result.code)


if __name__ == "__main__":
    main()

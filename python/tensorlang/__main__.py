# Copyright (c) PyPTO Contributors.
# This program is free software, you can redistribute it and/or modify it under the terms and conditions of
# CANN Open Software License Agreement Version 2.0 (the "License").
# Please refer to the License for details. You may not use this file except in compliance with the License.
# THIS SOFTWARE IS PROVIDED ON AN "AS IS" BASIS, WITHOUT WARRANTIES OF ANY KIND, EITHER EXPRESS OR IMPLIED,
# INCLUDING BUT NOT LIMITED TO NON-INFRINGEMENT, MERCHANTABILITY, OR FITNESS FOR A PARTICULAR PURPOSE.
# See LICENSE in the root of the software repository for the full text of the License.
# -----------------------------------------------------------------------------------------------------------

"""Command line entry point: ``python -m tensorlang FILE``."""

import argparse
import logging
import sys
from typing import Optional

from tensorlang.codegen import DEFAULT_DEVICE, CodegenError
from tensorlang.compiler import compile_file
from tensorlang.language.parser import ParserError


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tensorlang",
        description="Compile a tensorlang program to PyTorch code",
    )
    parser.add_argument("file", help="Path to the tensorlang source file")
    parser.add_argument(
        "--device",
        default=DEFAULT_DEVICE,
        help=f"torch device for created tensors (default: {DEFAULT_DEVICE})",
    )
    parser.add_argument(
        "--tokens",
        action="store_true",
        help="Print the raw generated fragments instead of formatted code",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        result = compile_file(args.file, device=args.device)
    except OSError as e:
        print(f"error: cannot read {args.file}: {e.strerror}", file=sys.stderr)
        return 1
    except (ParserError, CodegenError) as e:
        print(e, file=sys.stderr)
        return 1

    if result.diagnostics:
        print(result.render_diagnostics(args.file), file=sys.stderr)

    if args.tokens:
        print(" ".join(result.tokens))
    else:
        print(result.code, end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())

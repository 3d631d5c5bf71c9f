# Copyright (c) 2025 Jose Blanca
# Licensed under the MIT License. See LICENSE file for details.

import argparse
import logging
import sys

from threaded_range_product.partitions import LastChunkPolicy
from threaded_range_product.products import INT_DTYPES
from threaded_range_product.reducer import range_product, range_product_with_executor

logger = logging.getLogger(__name__)

PROMPTS = ("Thread count: ", "Start number: ", "End number: ")


def _build_parser():
    parser = argparse.ArgumentParser(
        prog="range-product",
        description="Multiply the integers in [START, END) splitting the work "
        "between THREAD_COUNT threads.",
    )
    parser.add_argument(
        "numbers",
        nargs="*",
        type=int,
        metavar="N",
        help="THREAD_COUNT START END. If they are not given they are asked for "
        "in the console.",
    )
    parser.add_argument(
        "--overshoot",
        action="store_true",
        help="do not clamp the last chunks to END, they can include integers "
        "beyond it",
    )
    parser.add_argument(
        "--int-width",
        type=int,
        choices=sorted(INT_DTYPES),
        default=None,
        help="compute with fixed-width integers that wrap around on overflow",
    )
    parser.add_argument(
        "--executor",
        action="store_true",
        help="run the chunks in a thread pool executor",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def _read_numbers(stdin, stdout):
    numbers = []
    for prompt in PROMPTS:
        stdout.write(prompt)
        stdout.flush()
        line = stdin.readline()
        if not line:
            raise ValueError("unexpected end of input")
        try:
            numbers.append(int(line.strip()))
        except ValueError:
            raise ValueError(f"invalid integer: {line.strip()!r}") from None
    return numbers


def main(argv=None, stdin=None, stdout=None, stderr=None):
    stdin = sys.stdin if stdin is None else stdin
    stdout = sys.stdout if stdout is None else stdout
    stderr = sys.stderr if stderr is None else stderr

    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(threadName)s %(name)s %(levelname)s: %(message)s",
        )

    if args.numbers:
        if len(args.numbers) != 3:
            parser.error("expected three integers: THREAD_COUNT START END")
        numbers = args.numbers
    else:
        try:
            numbers = _read_numbers(stdin, stdout)
        except ValueError as error:
            stderr.write(f"error: {error}\n")
            return 2
    num_computing_threads, start, end = numbers

    if args.overshoot:
        last_chunk_policy = LastChunkPolicy.OVERSHOOT
    else:
        last_chunk_policy = LastChunkPolicy.CLAMP
    if args.executor:
        compute = range_product_with_executor
    else:
        compute = range_product

    try:
        result = compute(
            num_computing_threads,
            start,
            end,
            last_chunk_policy=last_chunk_policy,
            int_width=args.int_width,
        )
    except ValueError as error:
        stderr.write(f"error: {error}\n")
        return 2
    except Exception as error:
        logger.debug("computation failed", exc_info=True)
        stderr.write(f"error: computation failed: {error}\n")
        return 1

    stdout.write(f"Result: {result}\n")
    return 0

"""
Copyright (c) 2025, Josh Walker

Redistribution and use in source and binary forms, with or without
modification, are permitted provided that the following conditions are met:

1. Redistributions of source code must retain the above copyright notice, this
   list of conditions and the following disclaimer.

2. Redistributions in binary form must reproduce the above copyright notice,
   this list of conditions and the following disclaimer in the documentation
   and/or other materials provided with the distribution.

THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS"
AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE
IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE
DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR CONTRIBUTORS BE LIABLE
FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL
DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR
SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER
CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY,
OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE
OF THIS SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
"""

import argparse
import logging

from . import ScoringScheme, align, format_report

logger = logging.getLogger(__name__)

DEMO_SUBJECT = "CACGTGATCAA"
DEMO_QUERY = "AGCATCGGTTG"


def build_parser():
    parser = argparse.ArgumentParser(
        prog="needleman-wunsch",
        description="Global alignment of two sequences (Needleman-Wunsch)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  needleman-wunsch
  needleman-wunsch GATTACA GCATGCT --match 1 --mismatch -1 --gap -1
  needleman-wunsch ACGT AGT --no-matrix
        """,
    )
    parser.add_argument(
        "subject", nargs="?", default=DEMO_SUBJECT,
        help=f"First sequence (default: {DEMO_SUBJECT})"
    )
    parser.add_argument(
        "query", nargs="?", default=DEMO_QUERY,
        help=f"Second sequence (default: {DEMO_QUERY})"
    )
    parser.add_argument(
        "--match", "-m", type=int, default=2,
        help="Score for equal characters (default: 2)"
    )
    parser.add_argument(
        "--mismatch", "-x", type=int, default=-1,
        help="Score for differing characters (default: -1)"
    )
    parser.add_argument(
        "--gap", "-g", type=int, default=-2,
        help="Score for each gap position (default: -2)"
    )
    parser.add_argument(
        "--no-matrix", action="store_true",
        help="Do not print the score matrix"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable verbose output (show debug information)"
    )
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        scheme = ScoringScheme(args.match, args.mismatch, args.gap)
        result = align(args.subject, args.query, scheme)
    except ValueError as e:
        logger.error("Alignment failed: %s", e)
        parser.error(str(e))

    print(format_report(result, show_matrix=not args.no_matrix))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

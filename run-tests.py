###
# title: run-tests.py
# language: python3
#
# date: 2024-12-11
# license: GPLv3
# author: bue, willem
#
# run: python3 run-tests.py var all
#      python3 run-tests.py var 1 2 3 --mode compile
#
# descriprion:
#   checks a compiler pass by pass against the interpreters (interp mode)
#   and or builds and runs the generated assembly (compile mode).
#   the first failing test stops the run.
#####


# library
import argparse
import sys

from driver import RUNTIME_OBJECT, TESTS_DIR, compiler_tests, load_passes
from errors import HarnessError
from passes import discover_indices, interp_tests
import utils


parser = argparse.ArgumentParser()
parser.add_argument('family', help='test family, e.g. var')
parser.add_argument('indices', nargs='+', help='test numbers or all')
parser.add_argument('--mode', choices=['interp', 'compile', 'both'], default='both')
parser.add_argument('--compiler', default='compiler:Compiler', help='module:attribute of the compiler')
parser.add_argument('--tests-dir', default=TESTS_DIR)
parser.add_argument('--runtime', default=RUNTIME_OBJECT, help='runtime object file')
parser.add_argument('--trace', action='store_true')
args = parser.parse_args()

if args.trace:
    utils.enable_tracing()

if [s.lower() for s in args.indices] == ['all']:
    li_index = discover_indices(args.family, args.tests_dir)
    print(f'*** RUN ALL {args.family} TESTS! ***')
else:
    li_index = [int(s) for s in args.indices]
    print(f'*** RUN {args.family} TESTS {li_index}! ***')

try:
    passes = load_passes(args.compiler)
    if args.mode in ('interp', 'both'):
        interp_tests(args.compiler, passes, args.family, li_index,
                     tests_dir=args.tests_dir)
    if args.mode in ('compile', 'both'):
        compiler_tests(args.compiler, passes, args.family, li_index,
                       tests_dir=args.tests_dir, runtime_object=args.runtime)
except HarnessError as e:
    sys.exit(f'Error: {e}')

print(f'*** {len(li_index)} {args.family} TESTS PASSED! ***')

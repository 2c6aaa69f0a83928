###
# title: passes.py
# language: python3
#
# date: 2024-12-10
# license: GPLv3
# author: bue, willem
#
# descriprion:
#   runs a compiler pass by pass over a test program and checks,
#   after every pass that has an interpreter, that the interpreter
#   result agrees with the result of the previous interpreted pass.
#####


# library
import glob
import os
import sys
import time
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Sequence

from errors import PassResultMismatch
from sexp import print_sexp, read_program
import utils


class Pass(NamedTuple):
    name: str
    transform: Callable[[Any], Any]
    interpreter: Optional[Callable[[Any], Any]] = None


def passes_from_compiler(compiler, pass_names: Sequence[str],
                         interp_dict: Dict[str, Callable] = None) -> List[Pass]:
    """
    Pass list from a compiler object, one method per pass name,
    interpreters taken from interp_dict keyed by pass name.
    """
    if interp_dict is None:
        interp_dict = {}
    ls_pass = []
    for s_pass in pass_names:
        transform = getattr(compiler, s_pass, None)
        if transform is None:
            raise Exception('error in passes_from_compiler, compiler has no pass: ' + s_pass)
        ls_pass.append(Pass(s_pass, transform, interp_dict.get(s_pass)))
    return ls_pass


def expand_family(family: str, indices: Sequence[int]) -> List[str]:
    return [f'{family}_{i}' for i in indices]


def discover_indices(family: str, tests_dir: str = 'tests') -> List[int]:
    li_index = []
    for s_file in glob.glob(os.path.join(tests_dir, f'{family}_*.rkt')):
        s_index = os.path.basename(s_file)[len(family) + 1:-len('.rkt')]
        if s_index.isdigit():
            li_index.append(int(s_index))
    return sorted(li_index)


def source_path(test_name: str, tests_dir: str = 'tests') -> str:
    return os.path.join(tests_dir, test_name + '.rkt')


def input_path(test_name: str, tests_dir: str = 'tests') -> str:
    return os.path.join(tests_dir, test_name + '.in')


def run_interpreter(interp: Callable[[Any], Any], program: Any,
                    stdin_path: Optional[str] = None) -> Any:
    if stdin_path is None or not os.path.exists(stdin_path):
        return interp(program)
    stdin = sys.stdin
    with open(stdin_path) as f:
        sys.stdin = f
        try:
            return interp(program)
        finally:
            sys.stdin = stdin


def show_program(program: Any) -> str:
    if isinstance(program, str):
        return program
    if isinstance(program, (tuple, list)):
        return print_sexp(program)
    return repr(program)


def check_passes(compiler_name: str, passes: Sequence[Pass], test_name: str,
                 tests_dir: str = 'tests',
                 type_checker: Callable[[Any], Any] = None,
                 initial_interp: Callable[[Any], Any] = None,
                 tracer: utils.Tracer = None,
                 timings: list = None,
                 reader: Callable[[str], Any] = read_program) -> Any:
    if tracer is None:
        tracer = utils.tracer
    s_input = input_path(test_name, tests_dir)
    program = reader(source_path(test_name, tests_dir))
    tracer.trace(f'{compiler_name} {test_name} source program', program)

    if type_checker is not None:
        type_checker(program)

    result = None
    have_result = False
    if initial_interp is not None:
        result = run_interpreter(initial_interp, program, s_input)
        have_result = True
        tracer.trace('source program result', result)

    for p in passes:
        r_start = time.perf_counter()
        new_program = p.transform(program)
        if timings is not None:
            timings.append((p.name, time.perf_counter() - r_start))
        tracer.trace(f'{p.name} output', new_program)

        if p.interpreter is not None:
            new_result = run_interpreter(p.interpreter, new_program, s_input)
            tracer.trace(f'{p.name} result', new_result)
            # chain check against the last interpreted pass
            if have_result and new_result != result:
                print(f'{compiler_name} failed on pass {p.name}, ast:', file=sys.stderr)
                print(show_program(new_program), file=sys.stderr)
                raise PassResultMismatch(compiler_name, p.name, result,
                                         new_result, new_program)
            result = new_result
            have_result = True
        program = new_program

    return result


def interp_tests(compiler_name: str, passes: Sequence[Pass], family: str,
                 indices: Sequence[int], **kwargs) -> Dict[str, Any]:
    results = {}
    for s_test in expand_family(family, indices):
        results[s_test] = check_passes(compiler_name, passes, s_test, **kwargs)
        print(f'{compiler_name} passed interp test {s_test}')
    return results

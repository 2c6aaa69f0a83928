###
# title: driver.py
# language: python3
#
# date: 2024-12-10
# license: GPLv3
# author: bue, willem
#
# run: python3 driver.py tests/var_1.rkt
#
# descriprion:
#   compiles test programs to x86 assembly, builds them against the
#   runtime with gcc and checks that the binary exits with 42.
#####


# library
import abc
import argparse
import importlib
import os
import subprocess
import sys
from typing import Any, Callable, List, Optional, Sequence

from errors import CompilerLoadFailure, ExternalToolFailure, HarnessError, NonTextualFinalOutput, UnexpectedExitCode
from passes import Pass, expand_family, input_path, passes_from_compiler, source_path
from sexp import read_program
import utils


# const
TESTS_DIR = 'tests'
RUNTIME_OBJECT = 'runtime.o'
SUCCESS_CODE = 42


###########################################################################
# Compile
###########################################################################

def output_path(source: str) -> str:
    return os.path.splitext(source)[0] + '.s'


def compile_passes(passes: Sequence[Pass], program: Any,
                   tracer: utils.Tracer = None) -> Any:
    if tracer is None:
        tracer = utils.tracer
    for p in passes:
        program = p.transform(program)
        tracer.trace(f'{p.name} output', program)
    return program


def compile_file(passes: Sequence[Pass], source: str,
                 reader: Callable[[str], Any] = read_program,
                 tracer: utils.Tracer = None) -> str:
    program = reader(source)
    x86 = compile_passes(passes, program, tracer)
    if not isinstance(x86, str):
        raise NonTextualFinalOutput(source, x86)
    s_out = output_path(source)
    with open(s_out, 'w') as f:
        f.write(x86 + '\n')
    return s_out


###########################################################################
# Native build
###########################################################################

class NativeBackend(abc.ABC):

    @abc.abstractmethod
    def assemble_and_link(self, assembly: str, runtime_object: str) -> str:
        """Build an executable, return its path."""

    @abc.abstractmethod
    def run(self, executable: str, stdin_path: Optional[str] = None) -> int:
        """Run the executable to completion, return its exit code."""


class GccBackend(NativeBackend):

    def __init__(self, cc: str = 'gcc', flags: Sequence[str] = ('-g', '-std=c99'),
                 executable: str = 'a.out'):
        self.cc = cc
        self.flags = list(flags)
        self.executable = executable

    def assemble_and_link(self, assembly: str, runtime_object: str) -> str:
        command = [self.cc] + self.flags + [runtime_object, assembly, '-o', self.executable]
        try:
            completed = subprocess.run(command)
        except OSError:
            raise ExternalToolFailure(command) from None
        if completed.returncode != 0:
            raise ExternalToolFailure(command, completed.returncode)
        return self.executable

    def run(self, executable: str, stdin_path: Optional[str] = None) -> int:
        if not os.path.dirname(executable):
            executable = os.path.join('.', executable)
        if stdin_path is not None and os.path.exists(stdin_path):
            with open(stdin_path) as f:
                completed = subprocess.run([executable], stdin=f)
        else:
            completed = subprocess.run([executable])
        return completed.returncode


def compiler_tests(compiler_name: str, passes: Sequence[Pass], family: str,
                   indices: Sequence[int], backend: NativeBackend = None,
                   tests_dir: str = TESTS_DIR, runtime_object: str = RUNTIME_OBJECT,
                   reader: Callable[[str], Any] = read_program,
                   tracer: utils.Tracer = None) -> List[str]:
    if backend is None:
        backend = GccBackend()
    ls_passed = []
    for s_test in expand_family(family, indices):
        s_assembly = compile_file(passes, source_path(s_test, tests_dir),
                                  reader=reader, tracer=tracer)
        s_executable = backend.assemble_and_link(s_assembly, runtime_object)
        try:
            i_code = backend.run(s_executable, input_path(s_test, tests_dir))
        except OSError:
            raise UnexpectedExitCode(s_test, None) from None
        if i_code != SUCCESS_CODE:
            raise UnexpectedExitCode(s_test, i_code)
        print(f'{compiler_name} passed compiler test {s_test}')
        ls_passed.append(s_test)
    return ls_passed


###########################################################################
# Command line
###########################################################################

def load_passes(s_compiler: str) -> List[Pass]:
    """
    Pass list from 'module:attribute'. The attribute is a compiler class or
    object with either a passes list or pass_names (and optional interp_dict).
    """
    (s_module, _, s_attr) = s_compiler.partition(':')
    try:
        module = importlib.import_module(s_module)
        compiler = getattr(module, s_attr or 'Compiler')
    except (ImportError, AttributeError) as e:
        raise CompilerLoadFailure(s_compiler, e) from e
    if isinstance(compiler, type):
        compiler = compiler()
    if hasattr(compiler, 'passes'):
        return list(compiler.passes)
    if hasattr(compiler, 'pass_names'):
        return passes_from_compiler(compiler, compiler.pass_names,
                                    getattr(compiler, 'interp_dict', None))
    raise CompilerLoadFailure(s_compiler, 'no passes or pass_names')


def main(argv=None):
    parser = argparse.ArgumentParser(description='compile one test program to x86 assembly')
    parser.add_argument('source', help='source program, e.g. tests/var_1.rkt')
    parser.add_argument('--compiler', default='compiler:Compiler', help='module:attribute of the compiler')
    parser.add_argument('--trace', action='store_true', help='print every intermediate program')
    args = parser.parse_args(argv)

    if args.trace:
        utils.enable_tracing()
    try:
        s_out = compile_file(load_passes(args.compiler), args.source)
    except HarnessError as e:
        sys.exit(f'Error: {e}')
    print(f'wrote {s_out}')


if __name__ == '__main__':
    main()

import matplotlib
matplotlib.use('Agg')

import pytest

from passes import Pass


# a tiny integer language: ints, (read), (- e), (+ e e), (- e e)

def interp_exp(e):
    match e:
        case bool():
            raise Exception('error in interp_exp, unexpected: ' + repr(e))
        case int():
            return e
        case ('read',):
            return int(input())
        case ('-', a):
            return - interp_exp(a)
        case ('+', a, b):
            return interp_exp(a) + interp_exp(b)
        case ('-', a, b):
            return interp_exp(a) - interp_exp(b)
        case _:
            raise Exception('error in interp_exp, unexpected: ' + repr(e))


def interp_lint(p):
    match p:
        case ('Program', _, body):
            return interp_exp(body)


def shrink_exp(e):
    match e:
        case ('-', a, b):
            return ('+', shrink_exp(a), ('-', shrink_exp(b)))
        case (op, *args):
            return (op, *[shrink_exp(a) for a in args])
        case _:
            return e


def shrink(p):
    match p:
        case ('Program', info, body):
            return ('Program', info, shrink_exp(body))


def fold_exp(e):
    match e:
        case ('-', a):
            a = fold_exp(a)
            return -a if isinstance(a, int) else ('-', a)
        case ('+', a, b):
            (a, b) = (fold_exp(a), fold_exp(b))
            if isinstance(a, int) and isinstance(b, int):
                return a + b
            return ('+', a, b)
        case _:
            return e


def fold(p):
    match p:
        case ('Program', info, body):
            return ('Program', info, fold_exp(body))


def codegen(p):
    match p:
        case ('Program', _, int(n)):
            return '\n'.join(['\t.globl main', 'main:',
                              f'\tmovq ${n}, %rax', '\tretq'])
    raise Exception('error in codegen, not folded: ' + repr(p))


def broken_fold(p):
    match p:
        case ('Program', info, body):
            return ('Program', info, fold_exp(body) + 1)


@pytest.fixture
def lint_passes():
    return [
        Pass('shrink', shrink, interp_lint),
        Pass('fold', fold, interp_lint),
        Pass('codegen', codegen),
    ]


@pytest.fixture
def tests_dir(tmp_path):
    d = tmp_path / 'tests'
    d.mkdir()
    return d


@pytest.fixture
def write_test(tests_dir):
    def write(name, source, stdin=None):
        (tests_dir / f'{name}.rkt').write_text(source)
        if stdin is not None:
            (tests_dir / f'{name}.in').write_text(stdin)
        return tests_dir / f'{name}.rkt'
    return write

###
# title: sexp.py
# language: python3
#
# date: 2024-12-10
# license: GPLv3
# author: bue, willem
#
# descriprion:
#   reader and printer for the s-expression test programs (tests/*.rkt).
#   lists become tuples, numbers int, #t/#f bool, everything else a symbol str.
#####


# library
import re
from typing import Any, List, Tuple


class SexpError(ValueError):
    pass


# comments, brackets, quote shorthand, and atoms
_token = re.compile(r"""
    (?P<space>\s+|;[^\n]*)
  | (?P<open>[(\[])
  | (?P<close>[)\]])
  | (?P<quote>')
  | (?P<atom>[^\s()\[\];']+)
""", re.VERBOSE)


def tokenize(text: str) -> List[str]:
    ls_token = []
    pos = 0
    while pos < len(text):
        m = _token.match(text, pos)
        if m is None:
            raise SexpError(f'error in tokenize, unexpected character at {pos}: {text[pos]!r}')
        if m.lastgroup != 'space':
            ls_token.append(m.group())
        pos = m.end()
    return ls_token


def parse_atom(s: str) -> Any:
    if s == '#t':
        return True
    if s == '#f':
        return False
    if re.fullmatch(r'[+-]?\d+', s):
        return int(s)
    return s


def parse(tokens: List[str], pos: int) -> Tuple[Any, int]:
    if pos >= len(tokens):
        raise SexpError('error in parse, unexpected end of input')
    tok = tokens[pos]
    match tok:
        case '(' | '[':
            close = ')' if tok == '(' else ']'
            items = []
            pos += 1
            while pos < len(tokens) and tokens[pos] not in (')', ']'):
                (item, pos) = parse(tokens, pos)
                items.append(item)
            if pos >= len(tokens):
                raise SexpError('error in parse, missing ' + close)
            if tokens[pos] != close:
                raise SexpError(f'error in parse, expected {close} not {tokens[pos]}')
            return tuple(items), pos + 1
        case ')' | ']':
            raise SexpError('error in parse, unbalanced ' + tok)
        case "'":
            (item, pos) = parse(tokens, pos + 1)
            return ('quote', item), pos
        case _:
            return parse_atom(tok), pos + 1


def read_sexps(text: str) -> List[Any]:
    tokens = tokenize(text)
    result = []
    pos = 0
    while pos < len(tokens):
        (item, pos) = parse(tokens, pos)
        result.append(item)
    return result


def read_sexp(text: str) -> Any:
    ls_sexp = read_sexps(text)
    if len(ls_sexp) != 1:
        raise SexpError(f'error in read_sexp, expected one datum, found {len(ls_sexp)}')
    return ls_sexp[0]


def read_program(path) -> Tuple:
    with open(path) as f:
        ls_line = f.readlines()
    # a program is a single expression, racket files may have a #lang line
    text = ''.join(s for s in ls_line if not s.startswith('#lang'))
    ls_sexp = read_sexps(text)
    if len(ls_sexp) != 1:
        raise SexpError(f'error in read_program, {path}: expected one expression, found {len(ls_sexp)}')
    return ('Program', (), ls_sexp[0])


def print_sexp(e: Any) -> str:
    match e:
        case bool():
            return '#t' if e else '#f'
        case tuple() | list():
            return '(' + ' '.join(print_sexp(x) for x in e) + ')'
        case _:
            return str(e)

###
# title: utils.py
# language: python3
#
# date: 2024-12-09
# license: GPLv3
# author: bue, willem
#
# descriprion:
#   small helpers shared by the compiler passes and the test harness:
#   gated tracing, dual result map, association lookup, tag dispatch,
#   stack alignment and platform label names.
#####


# library
from pprint import pformat
import sys
from typing import Any, Callable, Dict, List, Sequence, Tuple

from errors import DispatchFailure, LookupFailure


###########################################################################
# Tracing
###########################################################################

_no_value = object()


class Tracer:
    """Prints labeled debug output, but only when enabled."""

    def __init__(self, enabled: bool = False, stream=None):
        self.enabled = enabled
        self.stream = stream

    def trace(self, label: Any, value: Any = _no_value):
        if not self.enabled:
            return
        stream = self.stream if self.stream is not None else sys.stdout
        if value is _no_value:
            print(label, file=stream)
        else:
            print(f'{label}:', file=stream)
            print(pformat(value), file=stream)


# process wide default, switched on by the run-tests scripts
tracer = Tracer()


def enable_tracing():
    tracer.enabled = True


def disable_tracing():
    tracer.enabled = False


def is_tracing() -> bool:
    return tracer.enabled


def trace(label: Any, value: Any = _no_value):
    tracer.trace(label, value)


def soft_assert(cond: bool, message: str) -> bool:
    if not cond:
        print(f'warning: {message}', file=sys.stderr)
    return cond


###########################################################################
# Sequences
###########################################################################

def map2(f: Callable[[Any], Tuple[Any, Any]], xs: Sequence) -> Tuple[List, List]:
    ls_first = []
    ls_second = []
    for x in xs:
        (a, b) = f(x)
        ls_first.append(a)
        ls_second.append(b)
    return ls_first, ls_second


def unzip(pairs: Sequence[Tuple[Any, Any]]) -> Tuple[List, List]:
    return map2(lambda p: p, pairs)


def lookup(key: Any, alist: Sequence) -> Any:
    """
    First match lookup in an ordered sequence of key value pairs.
    A pair is a 2-tuple (or list) or an object with key and value attributes.
    Keys match by equality, but a bool never matches an int (True is not 1).
    """
    for pair in alist:
        match pair:
            case (k, v):
                pass
            case _ if hasattr(pair, 'key') and hasattr(pair, 'value'):
                (k, v) = (pair.key, pair.value)
            case _:
                raise Exception('error in lookup, not a pair: ' + repr(pair))
        if isinstance(k, bool) == isinstance(key, bool) and k == key:
            return v
    raise LookupFailure(key)


###########################################################################
# Tag dispatch
###########################################################################

class Dispatcher:
    """
    Calls the handler registered for the tag of a tagged tuple.
    dispatch(('add', 2, 3)) calls handlers['add'](2, 3),
    extra leading arguments go in front: dispatch(v, env) -> handler(env, *args).
    """

    def __init__(self, handlers: Dict[str, Callable]):
        self.handlers = dict(handlers)

    def __call__(self, value: Any, *extra: Any) -> Any:
        match value:
            case (str(tag), *args) if tag in self.handlers:
                return self.handlers[tag](*extra, *args)
            case _:
                raise DispatchFailure(value)


def make_dispatcher(handlers: Dict[str, Callable]) -> Dispatcher:
    return Dispatcher(handlers)


###########################################################################
# Code generation
###########################################################################

def align(n: int, alignment: int) -> int:
    if alignment <= 0:
        raise ValueError(f'error in align, alignment must be positive: {alignment}')
    if n % alignment == 0:
        return n
    return n + (alignment - (n % alignment))


def label_name(name: str, platform: str = None) -> str:
    # macos prefixes c symbols with an underscore
    if platform is None:
        platform = sys.platform
    if platform == 'darwin':
        return '_' + name
    return name

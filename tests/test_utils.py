import io
from collections import namedtuple

import pytest

from errors import DispatchFailure, LookupFailure
import utils
from utils import Tracer, align, label_name, lookup, make_dispatcher, map2, soft_assert, unzip


def test_map2_empty():
    assert map2(lambda x: (x, x), []) == ([], [])


def test_map2_single():
    assert map2(lambda x: (x + 1, x * 2), [3]) == ([4], [6])


def test_map2_keeps_order():
    (ls_a, ls_b) = map2(lambda s: (s.upper(), len(s)), ['a', 'bb', 'ccc'])
    assert ls_a == ['A', 'BB', 'CCC']
    assert ls_b == [1, 2, 3]


def test_unzip():
    assert unzip([(1, 'a'), (2, 'b')]) == ([1, 2], ['a', 'b'])


def test_lookup_first_match():
    assert lookup('x', [('x', 1), ('y', 2), ('x', 3)]) == 1


def test_lookup_missing_key():
    with pytest.raises(LookupFailure) as e:
        lookup('z', [('x', 1), ('y', 2)])
    assert e.value.key == 'z'
    assert isinstance(e.value, KeyError)


def test_lookup_empty():
    with pytest.raises(LookupFailure):
        lookup('x', [])


def test_lookup_pair_objects():
    Entry = namedtuple('Entry', ['key', 'value'])

    class Binding:
        def __init__(self, key, value):
            self.key = key
            self.value = value

    assert lookup('y', [['x', 1], ['y', 2]]) == 2
    assert lookup('b', [Binding('a', 1), Binding('b', 2)]) == 2
    # a namedtuple is a 2-tuple as well
    assert lookup('k', [Entry('k', 'v')]) == 'v'


def test_dispatch():
    dispatch = make_dispatcher({'add': lambda a, b: a + b})
    assert dispatch(('add', 2, 3)) == 5


def test_dispatch_extra_arguments_go_first():
    dispatch = make_dispatcher({'scale': lambda k, a: k * a})
    assert dispatch(('scale', 7), 6) == 42


def test_dispatch_unknown_tag():
    dispatch = make_dispatcher({'add': lambda a, b: a + b})
    with pytest.raises(DispatchFailure) as e:
        dispatch(('sub', 2, 3))
    assert e.value.value == ('sub', 2, 3)


@pytest.mark.parametrize('value', [42, 'add', (), (1, 2)])
def test_dispatch_not_tagged(value):
    dispatch = make_dispatcher({'add': lambda a, b: a + b})
    with pytest.raises(DispatchFailure):
        dispatch(value)


def test_tracer_disabled(capsys):
    Tracer().trace('label', {'a': 1})
    assert capsys.readouterr().out == ''


def test_tracer_enabled(capsys):
    Tracer(enabled=True).trace('label', {'a': 1})
    assert capsys.readouterr().out == "label:\n{'a': 1}\n"


def test_tracer_label_only(capsys):
    Tracer(enabled=True).trace('uncover live:')
    assert capsys.readouterr().out == 'uncover live:\n'


def test_enable_tracing(capsys, monkeypatch):
    monkeypatch.setattr(utils, 'tracer', Tracer())
    utils.trace('hidden')
    utils.enable_tracing()
    assert utils.is_tracing()
    utils.trace('shown', None)
    utils.disable_tracing()
    assert capsys.readouterr().out == 'shown:\nNone\n'


def test_soft_assert(capsys):
    assert soft_assert(True, 'fine')
    assert not soft_assert(False, 'odd')
    assert capsys.readouterr().err == 'warning: odd\n'


@pytest.mark.parametrize('n, alignment, expected', [
    (10, 8, 16),
    (16, 8, 16),
    (0, 8, 0),
    (1, 16, 16),
    (24, 16, 32),
])
def test_align(n, alignment, expected):
    assert align(n, alignment) == expected


def test_align_bad_alignment():
    with pytest.raises(ValueError):
        align(8, 0)


def test_label_name():
    assert label_name('main', 'darwin') == '_main'
    assert label_name('main', 'linux') == 'main'


def test_lookup_bool_is_not_int():
    with pytest.raises(LookupFailure):
        lookup(True, [(1, 'a')])
    assert lookup(True, [(1, 'a'), (True, 'b')]) == 'b'
    assert lookup(0, [(False, 'f'), (0, 'zero')]) == 'zero'


def test_tracer_stream():
    stream = io.StringIO()
    Tracer(enabled=True, stream=stream).trace('home', {'x': 'rcx'})
    assert stream.getvalue() == "home:\n{'x': 'rcx'}\n"

###
# title: register_allocator.py
# language: python3
#
# date: 2024-12-09
# license: GPLv3
# author: bue, willem
#
# descriprion:
#   x86-64 register catalog (system v calling convention) and the fixed
#   register to color table that seeds graph coloring.
#####


# library
from types import MappingProxyType
from typing import List, Set

from errors import LookupFailure


# const

caller_save: Set[str] = {'rax', 'rcx', 'rdx', 'rsi', 'rdi', 'r8', 'r9', 'r10', 'r11'}
callee_save: Set[str] = {'rsp', 'rbp', 'rbx', 'r12', 'r13', 'r14', 'r15'}
reserved_registers: Set[str] = {'rax', 'r11', 'r15', 'rsp', 'rbp', '__flag'}
general_registers: List[str] = ['rcx', 'rdx', 'rsi', 'rdi', 'r8', 'r9', 'r10',
                                'rbx', 'r12', 'r13', 'r14']
registers_for_alloc: List[str] = [r for r in general_registers
                                  if r not in reserved_registers]
arg_registers: List[str] = ['rdi', 'rsi', 'rdx', 'rcx', 'r8', 'r9']
registers = set(general_registers).union(reserved_registers)

caller_save_for_alloc = caller_save.difference(reserved_registers) \
                                   .intersection(set(registers_for_alloc))
callee_save_for_alloc = callee_save.difference(reserved_registers) \
                                   .intersection(set(registers_for_alloc))

byte_to_full_reg = \
    {'ah': 'rax', 'al': 'rax',
     'bh': 'rbx', 'bl': 'rbx',
     'ch': 'rcx', 'cl': 'rcx',
     'dh': 'rdx', 'dl': 'rdx'}

# rax and the __flag pseudo register are never handed out by the coloring
RESERVED_COLOR = -1
sentinel_registers: List[str] = ['rax', '__flag']

_color = {r: RESERVED_COLOR for r in sentinel_registers}
for i, r in enumerate(registers_for_alloc):
    _color[r] = i
register_color = MappingProxyType(_color)
del _color


# functions

def color_of_register(r: str) -> int:
    try:
        return register_color[r]
    except KeyError:
        raise LookupFailure(r) from None


def register_of_color(c: int) -> str:
    if 0 <= c < len(registers_for_alloc):
        return registers_for_alloc[c]
    raise LookupFailure(c)


def arg_register(i: int) -> str:
    if 0 <= i < len(arg_registers):
        return arg_registers[i]
    raise LookupFailure(i)


def is_callee_color(c: int) -> bool:
    return 0 <= c < len(registers_for_alloc) \
        and registers_for_alloc[c] in callee_save

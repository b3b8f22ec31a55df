"""Simulator for VASM pseudo-assembly.

Runs the instruction stream produced by the compiler against a flat slot
memory and four registers.  Useful for checking that generated programs do
what the source says, e.g. that a false condition skips its block.

Instruction set (one instruction per line, `// ... //` comments ignored):

    memset <slot> <value|register>   slot = value
    mov <register> <slot>            register = slot
    cmpeq <dst> <a> <b>              dst = 1 if a == b else 0
    not <register>                   register = 0 if register else 1
    jg <register> <label>            jump to `label <label>` if register > 0
    label <n>                        jump target, no effect
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence, Set

import numpy as np

REGISTERS = ("rax", "rbx", "rcx", "rdx")
MAX_VALUE = 2**64 - 1


class VasmError(RuntimeError):
    """Raised for malformed VASM or faults while running it."""


@dataclass
class Instruction:
    mnemonic: str
    operands: List[str]
    lineno: int


class VasmMachine:
    def __init__(self, text: str, memory_size: int = 256, max_steps: int = 100_000) -> None:
        self.memory = np.zeros(memory_size, dtype=np.uint64)
        self.registers = np.zeros(len(REGISTERS), dtype=np.uint64)
        self.register_index = {name: i for i, name in enumerate(REGISTERS)}
        self.max_steps = max_steps
        self.setup_instructions()
        self.program: List[Instruction] = []
        self.labels: Dict[str, int] = {}
        self.touched: Set[int] = set()
        # text line numbers of instructions that have run
        self.executed: Set[int] = set()
        self.assembler(text)
        self.reset()

    def setup_instructions(self) -> None:
        # mnemonic -> (operand count, handler)
        self.instruction_map = {
            "memset": (2, self._op_memset),
            "mov":    (2, self._op_mov),
            "cmpeq":  (3, self._op_cmpeq),
            "not":    (1, self._op_not),
            "jg":     (2, self._op_jg),
            "label":  (1, self._op_label),
        }

    def assembler(self, text: str) -> None:
        """Parse `text` into the program list and collect label positions."""
        for lineno, raw in enumerate(text.splitlines(), start=1):
            line = raw.split("//", 1)[0].strip()
            if not line:
                continue
            mnemonic, *operands = line.split()
            if mnemonic not in self.instruction_map:
                raise VasmError(f"line {lineno}: unknown instruction '{mnemonic}'")
            arity, _ = self.instruction_map[mnemonic]
            if len(operands) != arity:
                raise VasmError(f"line {lineno}: '{mnemonic}' expects {arity} operand(s), got {len(operands)}")
            if mnemonic == "label":
                if operands[0] in self.labels:
                    raise VasmError(f"line {lineno}: duplicate label {operands[0]}")
                self.labels[operands[0]] = len(self.program)
            self.program.append(Instruction(mnemonic, operands, lineno))

        for ins in self.program:
            if ins.mnemonic == "jg" and ins.operands[1] not in self.labels:
                raise VasmError(f"line {ins.lineno}: jump to unknown label {ins.operands[1]}")

    def reset(self) -> None:
        self.memory[:] = 0
        self.registers[:] = 0
        self.touched.clear()
        self.executed.clear()
        self.pc = 0
        self.steps = 0

    # ------------------------------------------------------------ operands
    def _register(self, ins: Instruction, name: str) -> int:
        if name not in self.register_index:
            raise VasmError(f"line {ins.lineno}: unknown register '{name}'")
        return self.register_index[name]

    def _slot(self, ins: Instruction, text: str) -> int:
        try:
            slot = int(text)
        except ValueError as exc:
            raise VasmError(f"line {ins.lineno}: invalid slot '{text}'") from exc
        if not 0 <= slot < len(self.memory):
            raise VasmError(f"line {ins.lineno}: slot {slot} outside memory of {len(self.memory)} slots")
        return slot

    def _value(self, ins: Instruction, text: str) -> int:
        if text in self.register_index:
            return int(self.registers[self.register_index[text]])
        try:
            value = int(text)
        except ValueError as exc:
            raise VasmError(f"line {ins.lineno}: invalid value '{text}'") from exc
        if not 0 <= value <= MAX_VALUE:
            raise VasmError(f"line {ins.lineno}: value {value} does not fit in a slot")
        return value

    # ---------------------------------------------------------- instructions
    def _op_memset(self, ins: Instruction) -> None:
        slot = self._slot(ins, ins.operands[0])
        self.memory[slot] = self._value(ins, ins.operands[1])
        self.touched.add(slot)

    def _op_mov(self, ins: Instruction) -> None:
        reg = self._register(ins, ins.operands[0])
        self.registers[reg] = self.memory[self._slot(ins, ins.operands[1])]

    def _op_cmpeq(self, ins: Instruction) -> None:
        dst, a, b = (self._register(ins, op) for op in ins.operands)
        self.registers[dst] = 1 if self.registers[a] == self.registers[b] else 0

    def _op_not(self, ins: Instruction) -> None:
        reg = self._register(ins, ins.operands[0])
        self.registers[reg] = 0 if self.registers[reg] else 1

    def _op_jg(self, ins: Instruction) -> None:
        reg = self._register(ins, ins.operands[0])
        if self.registers[reg] > 0:
            # the label instruction itself is a no-op, land just after it
            self.pc = self.labels[ins.operands[1]] + 1

    def _op_label(self, ins: Instruction) -> None:
        pass

    # ------------------------------------------------------------------ run
    def step(self) -> None:
        ins = self.program[self.pc]
        self.pc += 1
        self.steps += 1
        self.executed.add(ins.lineno)
        _, handler = self.instruction_map[ins.mnemonic]
        handler(ins)

    def run(self) -> "VasmMachine":
        while self.pc < len(self.program):
            if self.steps >= self.max_steps:
                raise VasmError(f"step limit of {self.max_steps} reached")
            self.step()
        return self

    def register(self, name: str) -> int:
        return int(self.registers[self.register_index[name]])

    def slot_values(self, slots: Sequence[int]) -> List[int]:
        return [int(self.memory[slot]) for slot in slots]


def run_text(text: str, **kwargs) -> VasmMachine:
    return VasmMachine(text, **kwargs).run()

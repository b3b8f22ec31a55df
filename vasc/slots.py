"""First-fit slot allocator.

A linear scan over occupancy flags.  Fine for the handful of live variables
a VASC program holds; not meant for large slot counts.
"""

from __future__ import annotations

from typing import List


class SlotTable:
    def __init__(self) -> None:
        self.flags: List[bool] = []

    def __len__(self) -> int:
        return len(self.flags)

    def allocate(self) -> int:
        """Claim the lowest free slot, appending a new one when all are taken."""
        for index, used in enumerate(self.flags):
            if not used:
                self.flags[index] = True
                return index
        self.flags.append(True)
        return len(self.flags) - 1

    def free(self, index: int) -> None:
        if not 0 <= index < len(self.flags):
            raise IndexError(f"slot {index} was never allocated")
        self.flags[index] = False

    def is_free(self, index: int) -> bool:
        return index >= len(self.flags) or not self.flags[index]

    def in_use(self) -> List[int]:
        return [index for index, used in enumerate(self.flags) if used]

    def render_map(self) -> str:
        """ASCII bar of the table, one character per slot."""
        bar = "".join("#" if used else "." for used in self.flags)
        legend = (
            "Legend: '.' = free, '#' = used\n"
            f"Slots: {len(self.flags)} allocated, {len(self.in_use())} in use\n"
        )
        return legend + (bar or "(empty)") + "\n"

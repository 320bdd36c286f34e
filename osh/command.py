"""Command descriptors shared by the parser and the executor."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Command:
    """One pipeline stage.

    ``predecessor`` is the stage on the left whose output feeds this one, so
    the head of a parsed chain is the right-most stage typed by the user.
    """

    argv: list[str] = field(default_factory=list)
    background: bool = False
    uses_history: bool = False
    stdin: str | None = None
    stdout: str | None = None
    predecessor: Command | None = None

    @property
    def name(self) -> str | None:
        return self.argv[0] if self.argv else None

    def is_empty(self) -> bool:
        return not self.argv and self.stdin is None and self.stdout is None

    def stages(self) -> list[Command]:
        """Return the chain in execution order, first-typed stage first."""

        ordered: list[Command] = []
        node: Command | None = self
        while node is not None:
            ordered.append(node)
            node = node.predecessor
        ordered.reverse()
        return ordered

    def __len__(self) -> int:
        count = 0
        node: Command | None = self
        while node is not None:
            count += 1
            node = node.predecessor
        return count

    def exec_args(self) -> list[str]:
        if not self.argv:
            raise ValueError("command has no program name")
        return list(self.argv)

    def release(self) -> int:
        """Tear down this stage and its predecessor chain.

        Returns the number of stages that still held data. Links are cut one
        at a time so long pipelines never recurse.
        """

        released = 0
        node: Command | None = self
        while node is not None:
            if node.argv or node.stdin or node.stdout or node.uses_history:
                released += 1
            node.argv = []
            node.stdin = None
            node.stdout = None
            node.background = False
            node.uses_history = False
            next_node = node.predecessor
            node.predecessor = None
            node = next_node
        return released

    def render(self) -> str:
        parts: list[str] = []
        for idx, stage in enumerate(self.stages()):
            if idx:
                parts.append("|")
            parts.extend(stage.argv)
            if stage.stdin is not None:
                parts.extend(["<", stage.stdin])
            if stage.stdout is not None:
                parts.extend([">", stage.stdout])
        if self.background:
            parts.append("&")
        if self.uses_history:
            parts.append("!!")
        return " ".join(parts)


__all__ = ["Command"]

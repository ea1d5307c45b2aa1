from typing import Optional


class Resource:
    """Single exclusive, non-preemptible resource. At most one holder."""

    def __init__(self, name: str = "resource"):
        self.name = name
        self.holder: Optional[int] = None

    def is_free(self) -> bool:
        return self.holder is None

    def is_held_by(self, pid: int) -> bool:
        return self.holder == pid

    def occupy(self, pid: int):
        if self.holder is not None:
            raise RuntimeError(
                f"Resource '{self.name}' is already held by PID {self.holder}, PID {pid} cannot occupy it")
        self.holder = pid

    def release(self, pid: int) -> bool:
        """Free the resource if `pid` holds it. Return True if it was released."""
        if self.holder != pid:
            return False
        self.holder = None
        return True

    def __repr__(self):
        return f"Resource({self.name}, holder={self.holder})"

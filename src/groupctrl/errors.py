"""Exception types raised by the grouping core and storage layer."""


class GroupCtrlError(Exception):
    """Base class for all GroupCTRL errors."""


class InvalidTargetError(GroupCtrlError):
    """Target group count or size is below 1."""

    def __init__(self, target: int) -> None:
        self.target = target
        super().__init__(f"Target value must be at least 1, got {target}")


class IndexOutOfRangeError(GroupCtrlError):
    """A move referenced a group or member position that does not exist."""

    def __init__(self, kind: str, index: int, bound: int) -> None:
        self.kind = kind
        self.index = index
        self.bound = bound
        super().__init__(f"{kind} index {index} out of range ({bound} available)")


class NotFoundError(GroupCtrlError):
    """No member with the given id exists."""

    def __init__(self, member_id: str) -> None:
        self.member_id = member_id
        super().__init__(f"Member {member_id!r} not found")


class PersistenceError(GroupCtrlError):
    """Storage read or write failed."""

    def __init__(self, operation: str, cause: object = None) -> None:
        self.operation = operation
        self.cause = cause
        message = f"Storage operation {operation!r} failed"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)

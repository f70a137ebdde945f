"""
Exception types raised by the MPC tracker.
"""


class MPCSolveError(RuntimeError):
    """求解失败 - 不产生任何控制输出, 由调用方决定回退策略

    Carries the solver status so callers can tell an infeasible problem
    from an exhausted time budget.
    """

    def __init__(self, result, message: str = None):
        self.result = result
        self.status = result.status
        if message is None:
            message = (f"MPC solve failed with status {self.status.name} "
                       f"({result.return_status})")
        super().__init__(message)

class ShutdownError(Exception):
    pass

class ShutdownTimeoutError(ShutdownError):
    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"Shutdown timed out after {timeout} seconds")

class ShutdownInProgressError(ShutdownError):
    pass

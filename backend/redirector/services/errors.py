class BootstrapError(RuntimeError):
    """A startup step failed for good; the entry point decides whether to exit."""

    def __init__(self, step: str, message: str):
        super().__init__(message)
        self.step = step

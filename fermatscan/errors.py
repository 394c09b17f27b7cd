class InvalidInput(ValueError):
    """Candidate (or trial budget) outside the domain the tester supports."""

    def __init__(self, message, value=None):
        self.message_error = message
        self.value = value
        super().__init__(self.message_error)

    def __str__(self):
        return self.message_error

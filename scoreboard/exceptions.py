class MatchValidationError(ValueError):
    pass


class InvalidPlayerError(MatchValidationError):
    pass


class InvalidPointTypeError(MatchValidationError):
    pass


class TimestampOrderError(MatchValidationError):
    pass
